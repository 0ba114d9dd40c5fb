"""
Rendering glue: the viewport protocol and the cytoscape HTML export.
"""

from .viewport import FitRequest, RecordingViewport, Viewport

__all__ = ["FitRequest", "RecordingViewport", "Viewport"]
