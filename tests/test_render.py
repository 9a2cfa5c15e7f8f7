from __future__ import annotations

import pytest

from forward_kinematics.messages import Header, Pose2D, Pose2DStamped, Stamp
from forward_kinematics.trajectory import TrajectorySampler


def test_renderer_draws_headless(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    from forward_kinematics.render import TrajectoryRenderer

    sampler = TrajectorySampler(step=1)
    marker = None
    for i in range(1, 4):
        pose = Pose2DStamped(header=Header(seq=i, stamp=Stamp(secs=i)), x=0.1 * i, y=0.2 * i, theta=0.0)
        marker = sampler.add(pose)

    renderer = TrajectoryRenderer(window_width=200, window_height=100, view_width_m=2.0, show_hud=False)
    try:
        renderer.draw(Pose2D(x=0.3, y=0.6, theta=0.5), marker)
        assert renderer._world_to_screen(0.0, 0.0) == (100, 50)
        # +y is up on screen
        assert renderer._world_to_screen(0.0, 0.5)[1] < 50
        assert renderer.pump_quit() is False
    finally:
        renderer.close()
