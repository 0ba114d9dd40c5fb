"""
Core type definitions for landscape.

Nodes and edges mirror the `data` payload of the graph JSON file. Extra keys
are preserved so that a load/save cycle leaves the document unchanged.
"""

from enum import StrEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_MAX_DEPTH


class NodeType(StrEnum):
    """Categories of nodes in the landscape graph."""
    COMPANY = "Company"
    PRODUCT = "Product"
    INVESTOR = "Investor"
    USE_CASE = "UseCase"
    PROTOCOL = "Protocol"
    SERVICE = "Service"


class Classification(StrEnum):
    """
    Visual classification of a graph element after a search or filter.

    An element carries at most one classification at a time. `FADED` is
    the residual tag for elements outside the highlight focus.
    """
    HIGHLIGHTED = "highlighted"
    CONNECTED = "connected"
    REACHABLE = "reachable"
    HIGHLIGHTED_EDGE = "highlighted-edge"
    CONNECTED_EDGE = "connected-edge"
    REACHABLE_EDGE = "reachable-edge"
    FADED = "faded"

    @property
    def is_focus(self) -> bool:
        return self is not Classification.FADED


class Node(BaseModel):
    """
    A vertex of the landscape graph.
    """
    id: str
    label: str = ""
    type: NodeType
    properties: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def with_properties(self, **kwargs) -> "Node":
        merged = {**self.properties, **kwargs}
        return self.model_copy(update={"properties": merged})

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Edge(BaseModel):
    """
    Directed relationship between two Nodes.
    """
    id: str
    source: str
    target: str
    label: str = ""

    model_config = ConfigDict(extra="allow")

    def other_end(self, node_id: str) -> str:
        """Return the endpoint opposite to node_id."""
        return self.target if node_id == self.source else self.source

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Edge):
            return self.id == other.id
        return False


class SearchConfig(BaseModel):
    """
    Resolved values of the search controls for one invocation.
    """
    query: str = ""
    include_connected: bool = True
    include_reachable: bool = True
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)

    @classmethod
    def from_controls(
        cls,
        query: Optional[str] = None,
        include_connected: Optional[bool] = None,
        include_reachable: Optional[bool] = None,
        max_depth: Optional[int] = None,
    ) -> "SearchConfig":
        """
        Build a config from controls that may be absent.

        A missing checkbox counts as checked and a missing depth control
        falls back to the default depth. A missing query box yields the
        empty query, which is a no-op search.
        """
        return cls(
            query=query or "",
            include_connected=True if include_connected is None else include_connected,
            include_reachable=True if include_reachable is None else include_reachable,
            max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
        )

    @property
    def is_empty(self) -> bool:
        return self.query == ""


class SearchSummary(BaseModel):
    """
    Counts reported back to the user after a search or filter.
    """
    query: str = ""
    matched: int = 0
    connected: int = 0
    reachable: int = 0
    highlighted: int = 0
    faded: int = 0
    focus: List[str] = Field(default_factory=list)
