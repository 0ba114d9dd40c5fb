"""
Graph session: the owned state of one exploration of the landscape graph.

A session holds the active graph, the classification of each element, the
hidden buffer and the viewport. Every search, type filter and clear starts
from a clean slate: hidden elements are restored and all tags are reset
first, so results never accumulate and filters never compose.

State machine:

    CLEAN --search/filter--> CLASSIFIED --hide_faded--> PARTIALLY_HIDDEN
      ^                          |                            |
      +---------clear------------+------------clear-----------+

Operations run synchronously; one operation finishes before the next starts.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from ..analysis.expansion import ExpansionResult, expand
from ..analysis.match import match_nodes, match_types
from ..analysis.projection import fade_all, project
from ..config import DEFAULT_LAYOUT, DEFAULT_MAX_DEPTH, FIT_PADDING
from ..render.viewport import RecordingViewport, Viewport
from .graph import LandscapeGraph
from .types import Classification, NodeType, SearchConfig, SearchSummary
from .visibility import HiddenBuffer

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    CLEAN = "clean"
    CLASSIFIED = "classified"
    PARTIALLY_HIDDEN = "partially_hidden"


class ChangeKind(StrEnum):
    TAGGED = "tagged"
    HIDDEN = "hidden"
    RESTORED = "restored"


@dataclass(frozen=True)
class ElementChange:
    """Notification sent to listeners when an element changes."""
    kind: ChangeKind
    element_id: str
    # New classification for TAGGED (None when cleared), current one otherwise
    classification: Optional[Classification]


Listener = Callable[[ElementChange], None]


class GraphSession:
    """
    Search session over a landscape graph.

    Renderers subscribe to element changes instead of polling tags:

        session = GraphSession(graph, viewport=my_viewport)
        unsubscribe = session.subscribe(my_renderer.on_change)
        session.search(SearchConfig(query="agent"))
        unsubscribe()
    """

    def __init__(
        self,
        graph: LandscapeGraph,
        viewport: Optional[Viewport] = None,
        default_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.graph = graph
        self.viewport: Viewport = viewport if viewport is not None else RecordingViewport()
        self.default_depth = default_depth
        self._tags: Dict[str, Classification] = {}
        self._hidden = HiddenBuffer()
        self._listeners: List[Listener] = []

    # =========================================================================
    # Listeners
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Registering the same listener twice is a no-op."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: ChangeKind, element_id: str, classification: Optional[Classification]) -> None:
        change = ElementChange(kind=kind, element_id=element_id, classification=classification)
        for listener in list(self._listeners):
            listener(change)

    # =========================================================================
    # Classification state
    # =========================================================================

    @property
    def state(self) -> SessionState:
        if not self._hidden.is_empty:
            return SessionState.PARTIALLY_HIDDEN
        if self._tags:
            return SessionState.CLASSIFIED
        return SessionState.CLEAN

    @property
    def tags(self) -> Dict[str, Classification]:
        return dict(self._tags)

    @property
    def hidden_ids(self) -> Set[str]:
        return self._hidden.ids()

    def classification(self, element_id: str) -> Optional[Classification]:
        return self._tags.get(element_id)

    def elements_with(self, tag: Classification) -> Set[str]:
        return {element_id for element_id, t in self._tags.items() if t is tag}

    def apply_classification(self, tags: Dict[str, Classification]) -> None:
        """
        Replace every tag at once.

        Elements missing from tags end up untagged. Listeners hear only
        about elements whose classification actually changed.
        """
        previous = self._tags
        self._tags = dict(tags)
        for element_id in previous.keys() | self._tags.keys():
            new = self._tags.get(element_id)
            if previous.get(element_id) != new:
                self._emit(ChangeKind.TAGGED, element_id, new)

    def reset_tags(self) -> None:
        self.apply_classification({})

    # =========================================================================
    # Operations
    # =========================================================================

    def search(self, config: SearchConfig) -> SearchSummary:
        """
        Run a free-text search and classify every element.

        The empty query only resets. A query without matches fades everything
        and reports zero matches.
        """
        self._restore()

        if config.is_empty:
            self.reset_tags()
            self.viewport.fit_all()
            return SearchSummary()

        matched = match_nodes(self.graph, config.query)
        if not matched:
            faded = fade_all(self)
            logger.debug("No nodes match %r; faded %d elements", config.query, faded)
            return SearchSummary(query=config.query, faded=faded)

        expansion = expand(
            self.graph,
            matched,
            include_connected=config.include_connected,
            include_reachable=config.include_reachable,
            max_depth=config.max_depth,
        )
        return self._finish(config.query, matched, expansion)

    def search_text(self, query: str) -> SearchSummary:
        """Search with both expansions on and the session's default depth."""
        return self.search(SearchConfig(query=query, max_depth=self.default_depth))

    def filter_by_type(self, types: Iterable[Union[NodeType, str]]) -> SearchSummary:
        """
        Highlight nodes of the given types with their direct connections.

        Raises:
            ValueError: If a type name is not a known NodeType.
        """
        wanted = {NodeType(t) for t in types}
        self._restore()

        label = ",".join(sorted(t.value for t in wanted))
        matched = match_types(self.graph, wanted)
        if not matched:
            faded = fade_all(self)
            return SearchSummary(query=label, faded=faded)

        expansion = expand(self.graph, matched, include_connected=True, include_reachable=False, max_depth=0)
        return self._finish(label, matched, expansion)

    def clear(self) -> None:
        """Return to CLEAN: restore hidden elements, drop all tags, fit all."""
        self._restore()
        self.reset_tags()
        self.viewport.fit_all()

    def hide_faded(self) -> int:
        """
        Move every faded element out of the active graph.

        Returns the number of elements removed. Zero means there was nothing
        faded, which is not an error.
        """
        faded = self.elements_with(Classification.FADED)
        if not faded:
            logger.info("No faded elements to hide")
            return 0

        removed = self._hidden.hide(self.graph, self._tags, faded)
        for element_id in removed:
            self._emit(ChangeKind.HIDDEN, element_id, None)
        logger.debug("Session state: %s", self.state)
        return len(removed)

    def restore_hidden(self) -> int:
        """Bring every hidden element back. Safe to call with nothing hidden."""
        if self._hidden.is_empty:
            logger.info("No hidden elements to restore")
            return 0
        return self._restore()

    def _restore(self) -> int:
        if self._hidden.is_empty:
            return 0

        restored = self._hidden.restore(self.graph, self._tags)
        for element_id in restored:
            self._emit(ChangeKind.RESTORED, element_id, self._tags.get(element_id))
        return len(restored)

    def fit(self) -> None:
        self.viewport.fit_all()

    def run_layout(self, name: str = DEFAULT_LAYOUT) -> None:
        self.viewport.run_layout(name)

    def _finish(self, query: str, matched: Set[str], expansion: ExpansionResult) -> SearchSummary:
        focus = project(self, matched, expansion)
        self.viewport.fit(focus, FIT_PADDING)

        summary = SearchSummary(
            query=query,
            matched=len(matched),
            connected=len(expansion.connected_nodes),
            reachable=len(expansion.reachable_nodes),
            highlighted=len(focus),
            faded=len(self.elements_with(Classification.FADED)),
            focus=sorted(focus),
        )
        logger.debug("Search %r: %s", query, summary.model_dump(exclude={"focus"}))
        return summary
