"""Path model: the route enemies walk from spawn to base."""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

Point = Tuple[float, float]


class Path:
    """An immutable polyline of waypoints."""

    def __init__(self, points: Iterable[Sequence[float]], name: str = "custom"):
        """Initialize a path.

        Args:
            points: Waypoints in travel order
            name: Layout name, for display
        """
        self.points: Tuple[Point, ...] = tuple((float(x), float(y)) for x, y in points)
        if len(self.points) < 2:
            raise ValueError("a path needs at least two waypoints")
        self.name = name
        self._lengths = tuple(
            math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(self.points, self.points[1:])
        )

    @classmethod
    def from_layout(cls, name: str, layouts: dict) -> "Path":
        """Build a path from a named layout table entry.

        Raises:
            KeyError: If the layout is unknown
        """
        if name not in layouts:
            raise KeyError(f"unknown path layout: {name}")
        return cls(layouts[name], name=name)

    def point_count(self) -> int:
        return len(self.points)

    @property
    def last_segment_index(self) -> int:
        return len(self.points) - 2

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    @property
    def total_length(self) -> float:
        return sum(self._lengths)

    def _check_segment(self, index: int) -> int:
        if 0 <= index <= self.last_segment_index:
            return index
        if __debug__:
            raise IndexError(f"segment index {index} out of range for {self.point_count()} waypoints")
        return max(0, min(self.last_segment_index, index))

    def segment_length(self, index: int) -> float:
        return self._lengths[self._check_segment(index)]

    def resolve(self, segment_index: int, distance: float) -> Point:
        """Convert a route position into a coordinate.

        Reaching the last waypoint index resolves to the end of the path.

        Args:
            segment_index: Index of the segment being walked
            distance: Distance travelled into that segment

        Returns:
            tuple: (x, y) coordinate
        """
        if segment_index >= len(self.points) - 1:
            return self.end
        index = self._check_segment(segment_index)
        (x1, y1), (x2, y2) = self.points[index], self.points[index + 1]
        length = self._lengths[index]
        if length <= 0:
            return (x1, y1)
        ratio = max(0.0, min(1.0, distance / length))
        return (x1 + (x2 - x1) * ratio, y1 + (y2 - y1) * ratio)

    def distance_to(self, x: float, y: float) -> float:
        """Shortest distance from a point to any segment of the path."""
        best = float("inf")
        for (x1, y1), (x2, y2) in zip(self.points, self.points[1:]):
            dx = x2 - x1
            dy = y2 - y1
            length_sq = dx * dx + dy * dy
            if length_sq == 0:
                t = 0.0
            else:
                t = max(0.0, min(1.0, ((x - x1) * dx + (y - y1) * dy) / length_sq))
            px = x1 + dx * t
            py = y1 + dy * t
            best = min(best, math.hypot(x - px, y - py))
        return best

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"Path({self.name}, {len(self.points)} waypoints)"
