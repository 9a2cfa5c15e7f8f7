from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
import math

import yaml


class ConfigError(ValueError):
    """Raised when a kinematics configuration cannot produce meaningful odometry."""


@dataclass(frozen=True)
class KinematicsConfig:
    """Kinematic parameters of the differential-drive platform.

    Attributes
    ----------
    K_l, K_r : float
        Duty-to-wheel-rotation-rate gains for the left and right motor.
    radius_l, radius_r : float
        Wheel radii (meters).
    baseline_lr : float
        Distance between the two wheels' contact points (meters).
    odom_subsample_step : int
        Every n-th integrated pose is appended to the visualized trajectory.
    """

    K_l: float = 0.1
    K_r: float = 0.1
    radius_l: float = 0.02
    radius_r: float = 0.02
    baseline_lr: float = 0.1
    odom_subsample_step: int = 1

    @classmethod
    def from_dict(cls, params: Optional[Dict[str, Any]]) -> "KinematicsConfig":
        """Build a config from a mapping, falling back to defaults for missing keys."""
        params = params or {}
        defaults = cls()
        return cls(
            K_l=float(params.get("K_l", defaults.K_l)),
            K_r=float(params.get("K_r", defaults.K_r)),
            radius_l=float(params.get("radius_l", defaults.radius_l)),
            radius_r=float(params.get("radius_r", defaults.radius_r)),
            baseline_lr=float(params.get("baseline_lr", defaults.baseline_lr)),
            odom_subsample_step=int(params.get("odom_subsample_step", defaults.odom_subsample_step)),
        )

    def validate(self) -> "KinematicsConfig":
        for name in ("K_l", "K_r", "radius_l", "radius_r", "baseline_lr"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value}")
        if self.baseline_lr == 0.0:
            raise ConfigError("baseline_lr must be non-zero")
        if self.odom_subsample_step < 1:
            raise ConfigError(f"odom_subsample_step must be >= 1, got {self.odom_subsample_step}")
        return self


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str) -> KinematicsConfig:
    """Read the ``forward_kinematics`` section of a YAML file into a validated config."""
    cfg = load_yaml(path)
    return KinematicsConfig.from_dict(cfg.get("forward_kinematics")).validate()
