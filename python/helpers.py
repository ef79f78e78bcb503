import copy
import json
import os
import time

import cv2

from Fingers import FINGER_COLORS, FINGER_INDICES

DEFAULT_CONFIG = {
    "camera": {
        "device": 0,
        "width": 640,
        "height": 480,
        "fps": 30,
        "mirror": True,
    },
    "tracker": {
        "model_complexity": 1,
        "min_detection_confidence": 0.5,
        "min_tracking_confidence": 0.5,
        "max_num_hands": 1,
    },
    "estimator": {
        "min_confidence": 9.0,
        "accept_threshold": 9.9,
    },
    "debug": {
        "draw_landmarks": True,
        "show_fps": True,
        "fps_window": 20,
        "print_pose": False,
        "window_name": "Hand Gestures",
    },
}


# ---------- drawing ----------
def _pixel(point):
    return (int(round(point[0])), int(round(point[1])))


def draw_keypoints(frame, points, radius=3, color=FINGER_COLORS["palm_base"]):
    """Filled circle on every landmark."""
    for p in points:
        cv2.circle(frame, _pixel(p), radius, color, -1, cv2.LINE_AA)


def draw_finger_paths(frame, points, thickness=2):
    """Open poly-line per finger, wrist to tip, in that finger's colour."""
    for finger, chain in FINGER_INDICES.items():
        path = [_pixel(points[idx]) for idx in chain if idx < len(points)]
        if len(path) < 2:
            continue
        for start, end in zip(path, path[1:]):
            cv2.line(frame, start, end, FINGER_COLORS[finger.value], thickness, cv2.LINE_AA)


def draw_hand(frame, hand_data):
    """Skeleton for one hand; no-op when the hand has no landmarks."""
    if frame is None or hand_data is None or not hand_data.landmarks:
        return
    draw_keypoints(frame, hand_data.landmarks)
    draw_finger_paths(frame, hand_data.landmarks)


def draw_gesture_label(frame, text, origin=(10, 40), color=(0, 255, 0), font_scale=1.0, thickness=2):
    """Gesture name with a dark backing box so it stays readable."""
    (tw, th), baseline = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, font_scale, thickness)
    x, y = origin
    cv2.rectangle(frame, (x - 4, y - th - 6), (x + tw + 4, y + baseline + 2), (0, 0, 0), -1)
    cv2.putText(frame, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, color, thickness, cv2.LINE_AA)


def draw_fps(frame, fps):
    cv2.putText(
        frame,
        f"FPS: {fps:.1f}" if fps is not None else "FPS: n/a",
        (10, frame.shape[0] - 20),
        cv2.FONT_HERSHEY_SIMPLEX,
        0.7,
        (255, 255, 0),
        2,
    )


# ---------- config ----------
def merge_config(base, override):
    """Deep-merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k] = merge_config(merged[k], v)
        else:
            merged[k] = v
    return merged


def load_config(path="config.json"):
    if not os.path.exists(path):
        print(f"[PY] config '{path}' not found, using defaults.")
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        print("[PY] Failed to load config:", e)
        return {}


class ConfigWatcher:
    """
    Keeps the effective config for a JSON file: `defaults`, then the file,
    then `overrides` (e.g. command-line flags) on top.
    Usage:
        watcher = ConfigWatcher("config.json", defaults=DEFAULT_CONFIG)
        cfg = watcher.config              # initial load
        # later:
        new_cfg = watcher.poll()          # merged config if the file changed, else None
    """

    def __init__(self, path="config.json", defaults=None, overrides=None, min_check_interval=0.5, clock=time.time):
        self.path = path
        self.defaults = defaults or {}
        self.overrides = overrides or {}
        self._min_check_interval = min_check_interval  # seconds between checks
        self._clock = clock
        self._last_checked = 0.0
        self._mtime = self._stat()
        self.file_config = load_config(path)
        self.config = self._build(self.file_config)

    def _stat(self):
        try:
            return os.path.getmtime(self.path)
        except OSError:
            return None

    def _build(self, file_cfg):
        return merge_config(merge_config(self.defaults, file_cfg), self.overrides)

    def poll(self):
        """
        Call every frame; the file is only stat'ed every `min_check_interval`
        seconds. A missing file keeps the current config.
        """
        now = self._clock()
        if now - self._last_checked < self._min_check_interval:
            return None
        self._last_checked = now

        mtime = self._stat()
        if mtime is None or mtime == self._mtime:
            return None
        self._mtime = mtime
        print(f"[ConfigWatcher] Detected {os.path.basename(self.path)} change, reloading...")
        self.file_config = load_config(self.path)
        self.config = self._build(self.file_config)
        return self.config
