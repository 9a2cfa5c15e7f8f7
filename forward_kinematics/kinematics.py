from __future__ import annotations

import numpy as np

from .config import KinematicsConfig
from .messages import BodyTwist, WheelAngularVelocity, WheelCommand


class DutyConverter:
    """Motor duty cycle to wheel rotation rate (currently a plain linear gain)."""

    def __init__(self, K_l: float, K_r: float) -> None:
        self.K_l = K_l
        self.K_r = K_r

    @classmethod
    def from_config(cls, cfg: KinematicsConfig) -> "DutyConverter":
        return cls(K_l=cfg.K_l, K_r=cfg.K_r)

    def convert(self, cmd: WheelCommand) -> WheelAngularVelocity:
        return WheelAngularVelocity(
            header=cmd.header,
            omega_left=self.K_l * cmd.vel_left,
            omega_right=self.K_r * cmd.vel_right,
        )


class TwistComputer:
    """Forward differential-drive kinematics: wheel rates to body twist."""

    def __init__(self, radius_l: float, radius_r: float, baseline_lr: float) -> None:
        self.radius_l = radius_l
        self.radius_r = radius_r
        self.baseline_lr = baseline_lr

    @classmethod
    def from_config(cls, cfg: KinematicsConfig) -> "TwistComputer":
        return cls(radius_l=cfg.radius_l, radius_r=cfg.radius_r, baseline_lr=cfg.baseline_lr)

    def compute(self, wheels: WheelAngularVelocity) -> BodyTwist:
        """Return the platform's linear and angular velocity.

        ``baseline_lr`` is not checked here; a zero baseline yields inf/nan.
        """
        right = self.radius_r * wheels.omega_right
        left = self.radius_l * wheels.omega_left
        v = (right + left) / 2.0
        with np.errstate(divide="ignore", invalid="ignore"):
            omega = float(np.float64(right - left) / self.baseline_lr)
        return BodyTwist(header=wheels.header, v=v, omega=omega)
