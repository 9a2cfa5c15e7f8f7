from __future__ import annotations

import math

from forward_kinematics.integrator import (
    STRAIGHT_LINE_OMEGA_EPS,
    IntegratorState,
    OdometryIntegrator,
    integrate_pose,
)
from forward_kinematics.messages import BodyTwist, Header, Pose2D, Stamp


def _twist(seq: int, secs: int, v: float, omega: float, nsecs: int = 0) -> BodyTwist:
    return BodyTwist(header=Header(seq=seq, stamp=Stamp(secs=secs, nsecs=nsecs)), v=v, omega=omega)


def test_straight_line_moves_along_y() -> None:
    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=0.0, delta_t=1.0)

    assert pose.x == 0.0
    assert pose.y == 1.0
    assert pose.theta == 0.0


def test_straight_line_heading_uses_sin_for_x() -> None:
    pose = Pose2D(theta=math.pi / 2)
    integrate_pose(pose, v=2.0, omega=0.0, delta_t=3.0)

    assert math.isclose(pose.x, 6.0)
    assert math.isclose(pose.y, 0.0, abs_tol=1e-12)


def test_quarter_arc() -> None:
    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=1.0, delta_t=math.pi / 2)

    assert math.isclose(pose.x, 1.0, rel_tol=1e-9)
    assert math.isclose(pose.y, 1.0, rel_tol=1e-9)
    assert math.isclose(pose.theta, math.pi / 2)


def test_small_omega_takes_straight_branch() -> None:
    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=1e-5, delta_t=2.0)

    # straight branch: x uses sin(theta_prev) = 0 exactly
    assert pose.x == 0.0
    assert pose.y == 2.0
    assert math.isclose(pose.theta, 2e-5)


def test_boundary_omega_is_straight() -> None:
    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=STRAIGHT_LINE_OMEGA_EPS, delta_t=1.0)
    assert pose.x == 0.0
    assert pose.y == 1.0

    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=-STRAIGHT_LINE_OMEGA_EPS, delta_t=1.0)
    assert pose.x == 0.0


def test_larger_omega_takes_arc_branch() -> None:
    omega = 1e-3
    pose = Pose2D()
    integrate_pose(pose, v=1.0, omega=omega, delta_t=2.0)

    r = 1.0 / omega
    assert math.isclose(pose.x, r * (math.sin(2e-3) - 0.0), rel_tol=1e-12)
    assert math.isclose(pose.y, r * (1.0 - math.cos(2e-3)), rel_tol=1e-9)
    assert pose.x != 0.0


def test_theta_is_not_wrapped() -> None:
    pose = Pose2D()
    for _ in range(4):
        integrate_pose(pose, v=0.5, omega=2.0, delta_t=3.0)
    assert math.isclose(pose.theta, 24.0)


def test_first_message_only_seeds_timestamp() -> None:
    integ = OdometryIntegrator()
    out = integ.update(_twist(seq=1, secs=100, v=5.0, omega=2.0))

    assert out is None
    assert integ.pose == Pose2D(0.0, 0.0, 0.0)
    assert integ.state.previous_timestamp_secs == 100.0
    assert not integ.tracking


def test_seq_zero_is_also_bootstrap() -> None:
    integ = OdometryIntegrator()
    assert integ.update(_twist(seq=0, secs=3, v=1.0, omega=0.0)) is None
    assert integ.update(_twist(seq=1, secs=4, v=1.0, omega=0.0)) is None
    assert integ.pose == Pose2D()
    assert integ.state.previous_timestamp_secs == 4.0


def test_second_message_integrates_whole_seconds() -> None:
    integ = OdometryIntegrator()
    integ.update(_twist(seq=1, secs=10, v=1.0, omega=0.0))
    out = integ.update(_twist(seq=2, secs=12, v=1.0, omega=0.0, nsecs=900_000_000))

    assert out is not None
    assert integ.tracking
    # delta_t = 12 - 10, the nanoseconds are ignored
    assert out.y == 2.0
    assert out.x == 0.0
    assert out.header.seq == 2
    assert integ.state.previous_timestamp_secs == 12.0


def test_sub_second_spacing_does_not_move() -> None:
    integ = OdometryIntegrator()
    integ.update(_twist(seq=1, secs=5, v=1.0, omega=1.0, nsecs=100))
    out = integ.update(_twist(seq=2, secs=5, v=1.0, omega=1.0, nsecs=800_000_000))

    assert out is not None
    assert (out.x, out.y, out.theta) == (0.0, 0.0, 0.0)


def test_pose_accumulates_across_updates() -> None:
    integ = OdometryIntegrator()
    integ.update(_twist(seq=1, secs=0, v=0.0, omega=0.0))
    integ.update(_twist(seq=2, secs=1, v=1.0, omega=0.0))
    integ.update(_twist(seq=3, secs=2, v=1.0, omega=0.0))
    out = integ.update(_twist(seq=4, secs=4, v=0.5, omega=0.0))

    assert out is not None
    assert math.isclose(out.y, 3.0)


def test_external_state_is_updated_in_place() -> None:
    state = IntegratorState(pose=Pose2D(x=1.0, y=1.0, theta=0.0), previous_timestamp_secs=0.0)
    integ = OdometryIntegrator(state)
    integ.update(_twist(seq=1, secs=7, v=1.0, omega=0.0))
    integ.update(_twist(seq=2, secs=8, v=1.0, omega=0.0))

    assert state.pose.y == 2.0
    assert state.previous_timestamp_secs == 8.0


def test_emitted_pose_is_a_snapshot() -> None:
    integ = OdometryIntegrator()
    integ.update(_twist(seq=1, secs=0, v=1.0, omega=0.0))
    first = integ.update(_twist(seq=2, secs=1, v=1.0, omega=0.0))
    integ.update(_twist(seq=3, secs=2, v=1.0, omega=0.0))

    assert first is not None
    assert first.y == 1.0
    assert integ.pose.y == 2.0


def test_infinite_omega_propagates_on_arc_branch() -> None:
    integ = OdometryIntegrator()
    integ.update(_twist(seq=1, secs=0, v=1.0, omega=0.0))
    out = integ.update(_twist(seq=2, secs=1, v=1.0, omega=float("inf")))

    assert out is not None
    assert math.isinf(out.theta)
    assert math.isnan(out.x)
    assert math.isnan(out.y)


def test_nan_velocity_propagates_on_straight_branch() -> None:
    pose = Pose2D()
    integrate_pose(pose, v=float("nan"), omega=0.0, delta_t=1.0)

    assert math.isnan(pose.y)
    assert pose.theta == 0.0


def test_infinite_heading_does_not_raise() -> None:
    pose = Pose2D(theta=float("inf"))
    integrate_pose(pose, v=1.0, omega=0.0, delta_t=1.0)

    assert math.isnan(pose.x)
    assert math.isnan(pose.y)
    assert math.isinf(pose.theta)
