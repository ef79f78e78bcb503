"""
Entry point for the webcam gesture recognizer.

Usage examples:
    python run_gestures.py                      # python/config.json, default camera
    python run_gestures.py --camera 1           # pick another webcam
    python run_gestures.py --threshold 9.5      # accept slightly weaker matches
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
PY_DIR = ROOT / "python"
if str(PY_DIR) not in sys.path:
    sys.path.insert(0, str(PY_DIR))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Webcam hand gesture recognizer")
    parser.add_argument(
        "--config",
        default=str(PY_DIR / "config.json"),
        help="JSON config file (hot-reloaded while running).",
    )
    parser.add_argument("--camera", type=int, default=None, help="Camera device index.")
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Confidence (0..10) a gesture must exceed to be shown.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    from main_loop import main as run_main_loop

    return run_main_loop(config_path=args.config, camera=args.camera, threshold=args.threshold)


if __name__ == "__main__":
    sys.exit(main())
