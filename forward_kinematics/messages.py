from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict
import math


@dataclass(frozen=True)
class Stamp:
    """Message timestamp split into whole seconds and nanoseconds."""

    secs: int = 0
    nsecs: int = 0

    @classmethod
    def from_sec(cls, t: float) -> "Stamp":
        secs = int(math.floor(t))
        nsecs = int(round((t - secs) * 1e9))
        if nsecs >= 1_000_000_000:
            secs += 1
            nsecs -= 1_000_000_000
        return cls(secs=secs, nsecs=nsecs)

    def to_sec(self) -> float:
        return self.secs + self.nsecs * 1e-9


@dataclass(frozen=True)
class Header:
    """Sequence number, timestamp and frame shared by every stamped message."""

    seq: int = 0
    stamp: Stamp = field(default_factory=Stamp)
    frame_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seq": self.seq,
            "stamp": self.stamp.to_sec(),
            "frame_id": self.frame_id,
        }


@dataclass(frozen=True)
class WheelCommand:
    """Duty-cycle command for both wheels (dimensionless, typically [-1, 1])."""

    header: Header
    vel_left: float
    vel_right: float


@dataclass(frozen=True)
class WheelAngularVelocity:
    """Wheel rotation rates (rad/s)."""

    header: Header
    omega_left: float
    omega_right: float


@dataclass(frozen=True)
class BodyTwist:
    """Planar body velocity.

    Attributes
    ----------
    v : float
        Linear velocity (m/s).
    omega : float
        Angular velocity (rad/s).
    """

    header: Header
    v: float
    omega: float


@dataclass
class Pose2D:
    """Planar pose. ``theta`` is in radians and is never wrapped."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


@dataclass(frozen=True)
class Pose2DStamped:
    header: Header
    x: float
    y: float
    theta: float

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a flat dict for logging/telemetry."""
        return {
            **self.header.to_dict(),
            "x": self.x,
            "y": self.y,
            "theta": self.theta,
        }


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    z: float = 0.0
