"""Static course geometry: a piecewise-linear height field plus spike fields."""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

FINISH_X = 2150.0


class TerrainError(ValueError):
    """Raised when a course definition is malformed."""


@dataclass(frozen=True)
class Segment:
    """One straight stretch of ground between two joints."""

    start_x: float
    end_x: float
    start_y: float
    end_y: float

    def height_at(self, x: float) -> float:
        t = (x - self.start_x) / (self.end_x - self.start_x)
        return self.start_y + (self.end_y - self.start_y) * t


@dataclass(frozen=True)
class SpikeField:
    """Row of spikes standing on the ground, anchored at its horizontal centre."""

    x: float
    width: float
    height: float

    @property
    def centre_x(self) -> float:
        return self.x + self.width / 2

    @property
    def end_x(self) -> float:
        return self.x + self.width


DEFAULT_SEGMENTS: tuple[Segment, ...] = (
    Segment(0, 360, 560, 560),
    Segment(360, 620, 560, 480),
    Segment(620, 880, 480, 510),
    Segment(880, 1120, 510, 460),
    Segment(1120, 1320, 460, 520),
    Segment(1320, 1540, 520, 490),
    Segment(1540, 1760, 490, 540),
    Segment(1760, 2050, 540, 500),
    Segment(2050, 2300, 500, 500),
)

DEFAULT_SPIKES: tuple[SpikeField, ...] = (
    SpikeField(1180, 120, 70),
    SpikeField(1680, 110, 60),
)


class Terrain:
    """Immutable ground profile with hazard zones and a finish line.

    Heights are sampled by linear interpolation inside the segment holding
    ``x``. Queries left of the course return the first joint height and
    queries right of it return the last joint height.
    """

    def __init__(
        self,
        segments: Sequence[Segment],
        spikes: Iterable[SpikeField] = (),
        finish_x: float = FINISH_X,
    ) -> None:
        self.segments: tuple[Segment, ...] = tuple(segments)
        self.spikes: tuple[SpikeField, ...] = tuple(spikes)
        self.finish_x = float(finish_x)
        self._validate()
        self._starts = [segment.start_x for segment in self.segments]
        logger.debug(
            "Terrain built: %d segments spanning %.1f..%.1f, %d spike fields, finish at %.1f",
            len(self.segments),
            self.start_x,
            self.end_x,
            len(self.spikes),
            self.finish_x,
        )

    @classmethod
    def from_points(
        cls,
        points: Sequence[tuple[float, float]],
        spikes: Iterable[SpikeField] = (),
        finish_x: float = FINISH_X,
    ) -> "Terrain":
        """Build a contiguous course from a polyline of (x, y) joints."""
        if len(points) < 2:
            raise TerrainError("Need at least two joints to build a course")
        segments = [
            Segment(float(x1), float(x2), float(y1), float(y2))
            for (x1, y1), (x2, y2) in zip(points, points[1:])
        ]
        return cls(segments, spikes, finish_x)

    @property
    def start_x(self) -> float:
        return self.segments[0].start_x

    @property
    def end_x(self) -> float:
        return self.segments[-1].end_x

    def height_at(self, x: float) -> float:
        """Return the ground y below horizontal coordinate ``x``."""
        first = self.segments[0]
        if x <= first.start_x:
            return first.start_y
        last = self.segments[-1]
        if x >= last.end_x:
            return last.end_y
        index = bisect_right(self._starts, x) - 1
        return self.segments[index].height_at(x)

    def spike_top(self, spike: SpikeField) -> float:
        """Return the y of the spike tips, measured from the ground under the field centre."""
        return self.height_at(spike.centre_x) - spike.height

    def progress(self, x: float) -> float:
        """Percentage of the course covered at ``x``, clamped to 0..100."""
        return max(0.0, min(100.0, x / self.finish_x * 100.0))

    def _validate(self) -> None:
        if not self.segments:
            raise TerrainError("A course needs at least one segment")
        previous = None
        for index, segment in enumerate(self.segments):
            if segment.end_x <= segment.start_x:
                raise TerrainError(
                    f"Segment {index} has non-positive length ({segment.start_x} -> {segment.end_x})"
                )
            if previous is not None:
                if segment.start_x <= previous.start_x:
                    raise TerrainError(f"Segment {index} does not start after segment {index - 1}")
                if segment.start_x != previous.end_x:
                    raise TerrainError(
                        f"Gap or overlap between segments {index - 1} and {index} "
                        f"({previous.end_x} vs {segment.start_x})"
                    )
                if segment.start_y != previous.end_y:
                    raise TerrainError(
                        f"Segments {index - 1} and {index} do not meet "
                        f"({previous.end_y} vs {segment.start_y})"
                    )
            previous = segment
        for spike in self.spikes:
            if spike.width <= 0 or spike.height <= 0:
                raise TerrainError(f"Spike field at x={spike.x} needs a positive width and height")
        if self.finish_x <= 0:
            raise TerrainError(f"Finish line must lie ahead of the origin, got {self.finish_x}")


def default_terrain() -> Terrain:
    """The single hand-authored course shipped with the game."""
    return Terrain(DEFAULT_SEGMENTS, DEFAULT_SPIKES, FINISH_X)
