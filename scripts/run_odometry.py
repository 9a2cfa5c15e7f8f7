from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from forward_kinematics.config import load_config, load_yaml
from forward_kinematics.messages import Header, Stamp, WheelCommand
from forward_kinematics.node import NODE_NAME, TOPIC_TRAJECTORY, ForwardKinematicsNode
from forward_kinematics.trajectory import TrajectoryMarker
from telemetry.logger import TelemetryLogger


def read_commands(path: str) -> Iterator[WheelCommand]:
    """Yield wheel commands from a JSONL file of ``{seq, stamp, vel_left, vel_right}``."""
    with open(path, "r", encoding="utf-8") as f:
        for seq, line in enumerate(f):
            line = line.strip()
            if not line:
                continue
            rec = json.loads(line)
            yield WheelCommand(
                header=Header(seq=int(rec.get("seq", seq)), stamp=Stamp.from_sec(float(rec["stamp"]))),
                vel_left=float(rec["vel_left"]),
                vel_right=float(rec["vel_right"]),
            )


def constant_commands(vel_left: float, vel_right: float, steps: int, period: float) -> Iterator[WheelCommand]:
    """Yield ``steps`` identical duty commands spaced ``period`` seconds apart."""
    for seq in range(steps):
        yield WheelCommand(
            header=Header(seq=seq, stamp=Stamp.from_sec(seq * period)),
            vel_left=vel_left,
            vel_right=vel_right,
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Replay wheel duty commands through the odometry pipeline.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/odometry.yaml",
        help="Path to odometry YAML config.",
    )
    parser.add_argument("--commands", type=str, default=None, help="JSONL file of wheel commands.")
    parser.add_argument("--vel-left", type=float, default=0.5, help="Constant left duty when no file is given.")
    parser.add_argument("--vel-right", type=float, default=1.0, help="Constant right duty when no file is given.")
    parser.add_argument("--steps", type=int, default=100, help="Number of synthesized commands.")
    parser.add_argument("--period", type=float, default=1.0, help="Seconds between synthesized commands.")
    parser.add_argument("--telemetry", type=str, default=None, help="Override telemetry JSONL path.")
    parser.add_argument("--render", action="store_true", help="Show the trajectory in a pygame window.")
    args = parser.parse_args()

    cfg = load_yaml(args.config)
    kin_cfg = load_config(args.config)
    logging_cfg = cfg.get("logging", {})
    render_cfg = cfg.get("render", {})

    node = ForwardKinematicsNode(kin_cfg)
    print(f"[{NODE_NAME}] has started.")

    telemetry_path = args.telemetry or logging_cfg.get("telemetry_path", "telemetry_logs/odometry.jsonl")
    telemetry_logger = TelemetryLogger(telemetry_path)
    telemetry_logger.attach(node.bus)

    latest: Dict[str, Any] = {"marker": None}

    def _keep_marker(marker: TrajectoryMarker) -> None:
        latest["marker"] = marker

    node.bus.subscribe(TOPIC_TRAJECTORY, _keep_marker)

    renderer = None
    if args.render:
        from forward_kinematics.render import TrajectoryRenderer

        renderer = TrajectoryRenderer(
            window_width=int(render_cfg.get("window_width", 800)),
            window_height=int(render_cfg.get("window_height", 800)),
            view_width_m=float(render_cfg.get("view_width_m", 4.0)),
            grid_step_m=float(render_cfg.get("grid_step_m", 0.5)),
        )

    if args.commands:
        commands = read_commands(args.commands)
    else:
        commands = constant_commands(args.vel_left, args.vel_right, args.steps, args.period)

    fps = 0.0
    try:
        for cmd in commands:
            node.feed(cmd)
            if renderer is not None:
                if renderer.pump_quit():
                    break
                marker: Optional[TrajectoryMarker] = latest["marker"]
                renderer.draw(node.pose, marker, fps=fps)
                fps = renderer.tick(int(render_cfg.get("fps", 30)))
    except KeyboardInterrupt:
        print("Stopping replay (KeyboardInterrupt).")
    finally:
        telemetry_logger.close()
        if renderer is not None:
            renderer.close()

    pose = node.pose
    print(f"Final pose: x={pose.x:.4f} y={pose.y:.4f} theta={pose.theta:.4f}")
    print(f"Trajectory points: {len(node.sampler)}")
    print(f"Telemetry written to {telemetry_path} ({telemetry_logger.records_written} records)")


if __name__ == "__main__":
    main()
