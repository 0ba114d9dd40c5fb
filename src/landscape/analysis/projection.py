"""
Highlight/Fade Projector.

Turns the match and expansion sets into one classification per element.
Every element of the active graph ends up either in the focus (highlighted,
connected or reachable) or faded, never both.
"""

from typing import TYPE_CHECKING, Dict, Iterable, Set

from ..core.types import Classification
from .expansion import ExpansionResult

if TYPE_CHECKING:
    from ..core.session import GraphSession


def classify(
    element_ids: Iterable[str],
    matched: Set[str],
    expansion: ExpansionResult,
) -> Dict[str, Classification]:
    """Compute the classification of every element id."""
    layers = (
        (matched, Classification.HIGHLIGHTED),
        (expansion.connected_nodes, Classification.CONNECTED),
        (expansion.connected_edges, Classification.CONNECTED_EDGE),
        (expansion.reachable_nodes, Classification.REACHABLE),
        (expansion.reachable_edges, Classification.REACHABLE_EDGE),
    )

    tags: Dict[str, Classification] = {}
    for ids, tag in layers:
        for element_id in ids:
            tags.setdefault(element_id, tag)

    for element_id in element_ids:
        tags.setdefault(element_id, Classification.FADED)
    return tags


def project(session: "GraphSession", matched: Set[str], expansion: ExpansionResult) -> Set[str]:
    """
    Reset the session's tags and apply the new classification.

    Returns the focus set (all highlighted, connected and reachable ids),
    which the caller uses for the fit-to-view request.
    """
    tags = classify(session.graph.element_ids(), matched, expansion)
    session.apply_classification(tags)
    return {element_id for element_id, tag in tags.items() if tag.is_focus}


def fade_all(session: "GraphSession") -> int:
    """No-match outcome: every element is faded. Returns the faded count."""
    tags = {element_id: Classification.FADED for element_id in session.graph.element_ids()}
    session.apply_classification(tags)
    return len(tags)
