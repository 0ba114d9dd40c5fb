"""
Search analysis: matching, expansion and highlight/fade projection.
"""

from .expansion import ExpansionResult, expand
from .match import match_nodes, match_types
from .projection import fade_all, project

__all__ = [
    "ExpansionResult",
    "expand",
    "fade_all",
    "match_nodes",
    "match_types",
    "project",
]
