# messenger_shell/core/bounds.py

"""
Window bounds normalization.

Given a desired rectangle, pick the display it overlaps most and shrink/slide
the rectangle so it lies entirely inside that display's work area.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def intersection_area(self, other: "Rect") -> int:
        w = min(self.x + self.width, other.x + other.width) - max(self.x, other.x)
        h = min(self.y + self.height, other.y + other.height) - max(self.y, other.y)
        if w <= 0 or h <= 0:
            return 0
        return w * h


@dataclass(frozen=True)
class Candidate:
    """Desired bounds; x/y may be unknown (first launch)."""

    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None


@dataclass(frozen=True)
class DisplayLayout:
    """Work areas of all connected displays plus the index of the primary one."""

    work_areas: Sequence[Rect]
    primary: int = 0

    @property
    def primary_area(self) -> Rect:
        return self.work_areas[self.primary]


def match_work_area(candidate: Candidate, layout: DisplayLayout) -> Rect:
    """
    Best overlap wins; ties go to the earlier display. With no overlap, or
    when the position is unknown, the primary display is used.
    """
    if candidate.x is None or candidate.y is None:
        return layout.primary_area

    rect = Rect(candidate.x, candidate.y, candidate.width, candidate.height)
    best = None
    best_area = 0
    for area in layout.work_areas:
        overlap = rect.intersection_area(area)
        if overlap > best_area:
            best, best_area = area, overlap
    return best if best is not None else layout.primary_area


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def normalize_bounds(candidate: Candidate, layout: DisplayLayout) -> Rect:
    area = match_work_area(candidate, layout)

    width = min(candidate.width, area.width)
    height = min(candidate.height, area.height)

    x = candidate.x if candidate.x is not None else area.x
    y = candidate.y if candidate.y is not None else area.y
    x = _clamp(x, area.x, area.x + area.width - width)
    y = _clamp(y, area.y, area.y + area.height - height)

    return Rect(x=x, y=y, width=width, height=height)


class BoundsNormalizer:
    """Normalizes against the display layout as it is at call time."""

    def __init__(self, layout_provider: Callable[[], DisplayLayout]):
        self._layout_provider = layout_provider

    def normalize(self, candidate: Candidate) -> Rect:
        return normalize_bounds(candidate, self._layout_provider())
