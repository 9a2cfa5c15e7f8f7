from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .messages import BodyTwist, Pose2D, Pose2DStamped


# Below this |omega| (rad/s) the motion is integrated as a straight line.
STRAIGHT_LINE_OMEGA_EPS = 1e-4


@dataclass
class IntegratorState:
    """Dead-reckoning state: the accumulated pose and the last twist time.

    Attributes
    ----------
    pose : Pose2D
        Odometric pose, updated in place.
    previous_timestamp_secs : float
        Whole-second timestamp of the last twist processed.
    """

    pose: Pose2D = field(default_factory=Pose2D)
    previous_timestamp_secs: float = 0.0

    @staticmethod
    def is_first_message(seq: int) -> bool:
        return seq <= 1


def integrate_pose(pose: Pose2D, v: float, omega: float, delta_t: float) -> None:
    """Advance ``pose`` in place by one unicycle-model step.

    For ``|omega| <= STRAIGHT_LINE_OMEGA_EPS`` the robot moves along a straight
    line; otherwise it follows the exact arc of radius ``v / omega`` (see
    "Probabilistic Robotics", velocity motion model).

    Note the axis convention: along a straight line x advances with
    ``sin(theta)`` and y with ``cos(theta)``.
    """
    theta_prev = pose.theta
    theta_next = theta_prev + omega * delta_t

    # numpy trig so inf/nan propagate instead of raising
    with np.errstate(invalid="ignore"):
        if abs(omega) <= STRAIGHT_LINE_OMEGA_EPS:
            pose.x += float(np.sin(theta_prev)) * v * delta_t
            pose.y += float(np.cos(theta_prev)) * v * delta_t
        else:
            v_w_ratio = v / omega
            pose.x += v_w_ratio * float(np.sin(theta_next) - np.sin(theta_prev))
            pose.y += v_w_ratio * float(np.cos(theta_prev) - np.cos(theta_next))
    pose.theta = theta_next


class OdometryIntegrator:
    """Integrates body twists into an odometric pose.

    The first twist (sequence number <= 1) only records its timestamp. Every
    following twist is integrated over the whole-second difference to the
    previous one, so sub-second spacing contributes no motion.
    """

    def __init__(self, state: Optional[IntegratorState] = None) -> None:
        self.state = state if state is not None else IntegratorState()
        self._tracking = False

    @property
    def pose(self) -> Pose2D:
        return self.state.pose

    @property
    def tracking(self) -> bool:
        """True once a twist has been integrated into the pose."""
        return self._tracking

    def update(self, twist: BodyTwist) -> Optional[Pose2DStamped]:
        """Integrate one twist; return the new pose, or None for the bootstrap message."""
        stamp_secs = float(twist.header.stamp.secs)
        result: Optional[Pose2DStamped] = None

        if not self.state.is_first_message(twist.header.seq):
            delta_t = stamp_secs - self.state.previous_timestamp_secs
            integrate_pose(self.state.pose, twist.v, twist.omega, delta_t)
            self._tracking = True
            pose = self.state.pose
            result = Pose2DStamped(header=twist.header, x=pose.x, y=pose.y, theta=pose.theta)

        self.state.previous_timestamp_secs = stamp_secs
        return result
