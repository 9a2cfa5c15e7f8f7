"""
Differential-drive odometry from wheel duty commands.

Components:
- messages: stamped message types exchanged between stages
- config: kinematic parameters and YAML loading
- kinematics: duty -> wheel rates, wheel rates -> body twist
- integrator: dead-reckoning pose integration (unicycle model)
- trajectory: subsampled trajectory for visualization
- bus: in-order, synchronous publish/subscribe dispatch
- node: wires the stages together on a bus
- render: pygame-based trajectory viewer
"""

from .config import ConfigError, KinematicsConfig, load_config
from .messages import (
    BodyTwist,
    Header,
    Point,
    Pose2D,
    Pose2DStamped,
    Stamp,
    WheelAngularVelocity,
    WheelCommand,
)
from .kinematics import DutyConverter, TwistComputer
from .integrator import IntegratorState, OdometryIntegrator, integrate_pose
from .trajectory import RenderHints, TrajectoryMarker, TrajectorySampler
from .bus import MessageBus
from .node import ForwardKinematicsNode

__all__ = [
    "ConfigError",
    "KinematicsConfig",
    "load_config",
    "BodyTwist",
    "Header",
    "Point",
    "Pose2D",
    "Pose2DStamped",
    "Stamp",
    "WheelAngularVelocity",
    "WheelCommand",
    "DutyConverter",
    "TwistComputer",
    "IntegratorState",
    "OdometryIntegrator",
    "integrate_pose",
    "RenderHints",
    "TrajectoryMarker",
    "TrajectorySampler",
    "MessageBus",
    "ForwardKinematicsNode",
]
