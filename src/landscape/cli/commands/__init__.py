"""
CLI command implementations for landscape.
"""

from . import enrich, filter, search, stats, verify

__all__ = ["enrich", "filter", "search", "stats", "verify"]
