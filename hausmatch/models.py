"""
Value types shared by the metric and the search layers.

- EdgeMap: an edge mask with its cached edge points and distance field
- MatchContext: the needle/haystack pair every search operates on
- Offset, Pose, SearchWindow, MatchResult: transient search values

Coordinates are (x, y) pixels, x to the right and y down.
Rotation angles are in degrees, counter-clockwise positive (OpenCV convention).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .distance import distance_field, edge_points


@dataclass(frozen=True)
class Offset:
    """Integer translation of the needle relative to the haystack origin."""
    dx: int = 0
    dy: int = 0

    def __neg__(self) -> "Offset":
        return Offset(-self.dx, -self.dy)

    def as_tuple(self):
        return (self.dx, self.dy)


@dataclass(frozen=True)
class SearchWindow:
    """
    Half-open rectangle of admissible offsets: [min_x, max_x) x [min_y, max_y).
    """
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def is_empty(self) -> bool:
        return self.max_x <= self.min_x or self.max_y <= self.min_y

    def contains(self, offset: Offset) -> bool:
        return (self.min_x <= offset.dx < self.max_x
                and self.min_y <= offset.dy < self.max_y)

    def around(self, offset: Offset, radius: int) -> "SearchWindow":
        """
        Window of +/- radius centred on offset, clamped to this window.
        """
        return SearchWindow(
            min_x=max(self.min_x, offset.dx - radius),
            min_y=max(self.min_y, offset.dy - radius),
            max_x=min(self.max_x, offset.dx + radius),
            max_y=min(self.max_y, offset.dy + radius),
        )


@dataclass(frozen=True)
class Pose:
    """One candidate alignment: translation, rotation (deg) and uniform scale."""
    offset: Offset
    rotation: float = 0.0
    scale: float = 1.0


@dataclass(frozen=True, eq=False)
class EdgeMap:
    """
    Edge mask with its on-edge points and distance field.

    Attributes:
        edges: bool (H, W) mask, True on edge pixels
        points: (N, 2) int array of (x, y) edge coordinates
        field: float32 (H, W) L1 distance to the nearest edge pixel

    All three arrays are read-only; build a new EdgeMap instead of editing one.
    """
    edges: np.ndarray
    points: np.ndarray
    field: np.ndarray

    @classmethod
    def from_edges(cls, edges) -> "EdgeMap":
        mask = np.array(edges, dtype=bool, copy=True)
        if mask.ndim != 2:
            raise ValueError(f"edge map must be 2-D, got shape {mask.shape}")
        pts = edge_points(mask)
        dt = distance_field(mask)
        for arr in (mask, pts, dt):
            arr.flags.writeable = False
        return cls(edges=mask, points=pts, field=dt)

    @property
    def width(self) -> int:
        return int(self.edges.shape[1])

    @property
    def height(self) -> int:
        return int(self.edges.shape[0])

    @property
    def num_points(self) -> int:
        return int(len(self.points))


@dataclass(frozen=True)
class MatchContext:
    """The four maps a search reads: needle and haystack edges plus fields."""
    needle: EdgeMap
    haystack: EdgeMap

    def valid_window(self) -> SearchWindow:
        """
        Full range of offsets keeping the needle inside the haystack:
        [0, Hw - Nw) x [0, Hh - Nh).
        """
        return SearchWindow(0, 0,
                            self.haystack.width - self.needle.width,
                            self.haystack.height - self.needle.height)

    def with_needle(self, needle: EdgeMap) -> "MatchContext":
        return MatchContext(needle=needle, haystack=self.haystack)


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of a full pose search.

    Attributes:
        pose: best pose found
        distance: symmetric Hausdorff distance at that pose
        needle: needle EdgeMap transformed to the winning rotation/scale
    """
    pose: Pose
    distance: float
    needle: Optional[EdgeMap] = None

    @property
    def offset(self) -> Offset:
        return self.pose.offset
