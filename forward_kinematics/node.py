from __future__ import annotations

from typing import Optional

from .bus import MessageBus
from .config import KinematicsConfig
from .integrator import IntegratorState, OdometryIntegrator
from .kinematics import DutyConverter, TwistComputer
from .messages import BodyTwist, Pose2D, WheelAngularVelocity, WheelCommand
from .trajectory import RenderHints, TrajectorySampler


NODE_NAME = "forward_kinematics_node"

TOPIC_WHEELS_CMD = "wheels_cmd"
TOPIC_WHEELS_OMEGA = "wheelsOmega"
TOPIC_TWIST = "twist"
TOPIC_POSE = "odometricPose"
TOPIC_TRAJECTORY = "odometricTrajectory"


class ForwardKinematicsNode:
    """Duty command -> wheel rates -> twist -> odometric pose, wired on a bus.

    Each stage listens on its input topic and publishes on the next one, so
    every intermediate result is visible to (and injectable by) other
    subscribers:

        wheels_cmd -> wheelsOmega -> twist -> odometricPose, odometricTrajectory

    The trajectory is only published on every ``odom_subsample_step``-th pose.
    """

    def __init__(
        self,
        config: KinematicsConfig,
        bus: Optional[MessageBus] = None,
        state: Optional[IntegratorState] = None,
        hints: Optional[RenderHints] = None,
    ) -> None:
        self.config = config
        self.bus = bus if bus is not None else MessageBus()

        self.duty_converter = DutyConverter.from_config(config)
        self.twist_computer = TwistComputer.from_config(config)
        self.integrator = OdometryIntegrator(state)
        self.sampler = TrajectorySampler(config.odom_subsample_step, hints)

        self.bus.subscribe(TOPIC_WHEELS_CMD, self.on_wheels_cmd)
        self.bus.subscribe(TOPIC_WHEELS_OMEGA, self.on_wheels_omega)
        self.bus.subscribe(TOPIC_TWIST, self.on_twist)

    @property
    def pose(self) -> Pose2D:
        return self.integrator.pose

    # ------------------------------------------------------------------
    # Stage handlers
    # ------------------------------------------------------------------
    def on_wheels_cmd(self, msg: WheelCommand) -> None:
        self.bus.publish(TOPIC_WHEELS_OMEGA, self.duty_converter.convert(msg))

    def on_wheels_omega(self, msg: WheelAngularVelocity) -> None:
        self.bus.publish(TOPIC_TWIST, self.twist_computer.compute(msg))

    def on_twist(self, msg: BodyTwist) -> None:
        pose = self.integrator.update(msg)
        if pose is None:
            return
        self.bus.publish(TOPIC_POSE, pose)

        marker = self.sampler.add(pose)
        if marker is not None:
            self.bus.publish(TOPIC_TRAJECTORY, marker)

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------
    def feed(self, cmd: WheelCommand) -> None:
        """Inject a duty command as if it arrived on ``wheels_cmd``."""
        self.bus.publish(TOPIC_WHEELS_CMD, cmd)
