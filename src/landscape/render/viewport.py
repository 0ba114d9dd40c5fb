"""
Rendering capability seen from the search session.

The session never draws anything. It asks a Viewport to fit the view around
a set of elements, to fit everything, or to rerun the layout. A browser
front end implements this on top of its graph library; RecordingViewport is
the headless implementation used by the CLI and the tests.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Set

from ..config import DEFAULT_LAYOUT, FIT_PADDING


class Viewport(Protocol):
    """Operations the session needs from the renderer."""

    def fit(self, element_ids: Set[str], padding: int = FIT_PADDING) -> None:
        ...

    def fit_all(self) -> None:
        ...

    def run_layout(self, name: str = DEFAULT_LAYOUT) -> None:
        ...


@dataclass
class FitRequest:
    # None means "fit everything"
    element_ids: Optional[Set[str]]
    padding: int = 0


@dataclass
class RecordingViewport:
    """Viewport that records requests instead of drawing."""
    fits: List[FitRequest] = field(default_factory=list)
    layouts: List[str] = field(default_factory=list)

    def fit(self, element_ids: Set[str], padding: int = FIT_PADDING) -> None:
        self.fits.append(FitRequest(element_ids=set(element_ids), padding=padding))

    def fit_all(self) -> None:
        self.fits.append(FitRequest(element_ids=None))

    def run_layout(self, name: str = DEFAULT_LAYOUT) -> None:
        self.layouts.append(name)

    @property
    def last_fit(self) -> Optional[FitRequest]:
        return self.fits[-1] if self.fits else None
