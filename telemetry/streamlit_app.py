from __future__ import annotations

import argparse
import json
import os
import time
from typing import Any, Dict, List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import streamlit as st


POSE_TOPIC = "odometricPose"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--log-path",
        type=str,
        default="telemetry_logs/odometry.jsonl",
        help="Path to odometry telemetry JSONL log file.",
    )
    return parser.parse_args()


def load_telemetry(path: str, max_rows: int = 5000) -> pd.DataFrame:
    """Return the most recent pose records of a telemetry log as a DataFrame."""
    if not os.path.exists(path):
        return pd.DataFrame()
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                rec = json.loads(line)
            except json.JSONDecodeError:
                continue
            if rec.get("topic", POSE_TOPIC) == POSE_TOPIC:
                records.append(rec)
    if not records:
        return pd.DataFrame()
    df = pd.json_normalize(records)
    return df.tail(max_rows)


def main() -> None:
    args = parse_args()

    st.set_page_config(page_title="Odometry Telemetry", layout="wide")
    st.title("Odometric Pose Dashboard")

    status_placeholder = st.empty()

    col1, col2 = st.columns(2)
    path_fig = col1.empty()
    heading_fig = col2.empty()

    refresh_interval = st.sidebar.slider("Refresh interval (s)", 0.5, 5.0, 1.0, 0.5)

    while True:
        df = load_telemetry(args.log_path)
        if df.empty:
            status_placeholder.info(f"Waiting for telemetry at '{args.log_path}'...")
            time.sleep(refresh_interval)
            continue

        status_placeholder.success(f"Streaming from '{args.log_path}' ({len(df)} poses)")

        latest = df.iloc[-1]
        st.sidebar.subheader("Odometric Pose")
        st.sidebar.write(
            f"x={latest.get('x', 0.0):.3f}, "
            f"y={latest.get('y', 0.0):.3f}, "
            f"theta={latest.get('theta', 0.0):.3f}"
        )

        with path_fig.container():
            fig, ax = plt.subplots()
            ax.plot(df["x"], df["y"], "-r", label="Odometry")
            ax.scatter([latest["x"]], [latest["y"]], c="b", label="Robot")
            ax.set_aspect("equal", adjustable="box")
            ax.set_xlabel("x [m]")
            ax.set_ylabel("y [m]")
            ax.set_title("Odometric Path")
            ax.legend(loc="upper right")
            path_fig.pyplot(fig)
            plt.close(fig)

        with heading_fig.container():
            fig2, ax2 = plt.subplots()
            t = df["stamp"].to_numpy(dtype=float) if "stamp" in df.columns else np.arange(len(df))
            ax2.plot(t, df["theta"].to_numpy(dtype=float))
            ax2.set_xlabel("Stamp [s]")
            ax2.set_ylabel("theta [rad]")
            ax2.set_title("Heading (unwrapped)")
            heading_fig.pyplot(fig2)
            plt.close(fig2)

        time.sleep(refresh_interval)


if __name__ == "__main__":
    main()
