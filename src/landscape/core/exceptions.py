"""
Exception hierarchy for landscape.

Only the initial graph load is fatal for a session. Empty queries, queries
without matches and hide/restore with nothing to move are regular outcomes
and never raise.
"""


class LandscapeError(Exception):
    """Base class for all landscape errors."""


class GraphLoadError(LandscapeError):
    """The graph document could not be read, parsed or validated."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load graph from {source}: {reason}")


class DuplicateElementError(LandscapeError):
    """An element id is already used by a node or an edge."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Duplicate element id: {element_id}")


class ElementNotFoundError(LandscapeError):
    """A referenced node or edge is not present in the active graph."""

    def __init__(self, element_id: str):
        self.element_id = element_id
        super().__init__(f"Element not found: {element_id}")


class ConfigError(LandscapeError):
    """The settings file is malformed."""


class EnrichmentError(LandscapeError):
    """GitHub enrichment cannot run or a repository lookup failed."""
