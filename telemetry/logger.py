from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional, TextIO

from forward_kinematics.bus import MessageBus
from forward_kinematics.messages import Pose2DStamped
from forward_kinematics.node import TOPIC_POSE, TOPIC_TRAJECTORY
from forward_kinematics.trajectory import TrajectoryMarker


class TelemetryLogger:
    """Structured JSONL logger for odometry output.

    Append-only, one JSON object per line. Every record carries the topic it
    was published on, so poses and trajectory points can share one file.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")
        self.records_written = 0

    def attach(self, bus: MessageBus) -> None:
        """Log every pose and trajectory update published on ``bus``."""
        bus.subscribe(TOPIC_POSE, self.log_pose)
        bus.subscribe(TOPIC_TRAJECTORY, self.log_trajectory)

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        self._fp.write(json.dumps(record, separators=(",", ":")) + "\n")
        self._fp.flush()
        self.records_written += 1

    def log_pose(self, pose: Pose2DStamped) -> None:
        self.log_step({"topic": TOPIC_POSE, **pose.to_dict()})

    def log_trajectory(self, marker: TrajectoryMarker) -> None:
        # Only the newest point; the full strip can be rebuilt from the log
        last = marker.points[-1]
        self.log_step(
            {
                "topic": TOPIC_TRAJECTORY,
                "seq": marker.header.seq,
                "num_points": len(marker.points),
                "point": [last.x, last.y, last.z],
            }
        )

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
