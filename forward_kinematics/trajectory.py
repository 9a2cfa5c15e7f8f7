from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .messages import Header, Point, Pose2DStamped


LINE_STRIP = "line_strip"
ADD = "add"


@dataclass(frozen=True)
class RenderHints:
    """Styling metadata for the odometric trajectory (line strip, red, 0.1 m wide)."""

    frame_id: str = "/odom"
    ns: str = "odometricTrajectory"
    marker_id: int = 1
    marker_type: str = LINE_STRIP
    action: str = ADD
    orientation_w: float = 1.0
    scale_x: float = 0.1
    color: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0)  # r, g, b, a

    def color_rgb255(self) -> Tuple[int, int, int]:
        r, g, b, _ = self.color
        return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


@dataclass
class TrajectoryMarker:
    header: Header
    points: List[Point] = field(default_factory=list)
    hints: RenderHints = field(default_factory=RenderHints)

    def as_array(self) -> np.ndarray:
        """Points as an (N, 3) float array."""
        if not self.points:
            return np.zeros((0, 3), dtype=float)
        return np.array([[p.x, p.y, p.z] for p in self.points], dtype=float)


class TrajectorySampler:
    """Keeps every ``step``-th odometric pose as a point of the visualized trajectory.

    Points are only ever appended; the sequence lives as long as the sampler.
    """

    def __init__(self, step: int, hints: Optional[RenderHints] = None) -> None:
        self.step = step
        self.hints = hints if hints is not None else RenderHints()
        self.points: List[Point] = []
        self._countdown = step

    def add(self, pose: Pose2DStamped) -> Optional[TrajectoryMarker]:
        """Count one pose; on every ``step``-th call append it and return the full trajectory."""
        self._countdown -= 1
        if self._countdown > 0:
            return None

        self.points.append(Point(x=pose.x, y=pose.y, z=0.0))
        self._countdown = self.step
        header = Header(seq=pose.header.seq, stamp=pose.header.stamp, frame_id=self.hints.frame_id)
        return TrajectoryMarker(header=header, points=list(self.points), hints=self.hints)

    def __len__(self) -> int:
        return len(self.points)
