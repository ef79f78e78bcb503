import json
import threading
import time
from collections import deque

import cv2

from GestureDescription import GESTURE_SYMBOLS, default_gestures
from GestureEstimator import GestureEstimator, select_gesture
from HandTracker import HandTracker
from helpers import (
    DEFAULT_CONFIG,
    ConfigWatcher,
    draw_fps,
    draw_gesture_label,
    draw_hand,
    merge_config,
)

ESC_KEY = 27


class CameraUnavailableError(RuntimeError):
    """Raised when the webcam cannot be opened."""


def open_camera(camera_cfg, capture_factory=cv2.VideoCapture):
    device = camera_cfg.get("device", 0)
    cap = capture_factory(device)
    if not cap.isOpened():
        cap.release()
        raise CameraUnavailableError(f"Cannot open camera {device!r}")

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_cfg.get("width", 640))
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_cfg.get("height", 480))
    cap.set(cv2.CAP_PROP_FPS, camera_cfg.get("fps", 30))
    return cap


# --------------------------------------------------------
# PACING
# --------------------------------------------------------
class FrameTicker:
    """Paces the loop to a target fps; a slow pass just delays the next one."""

    def __init__(self, fps, clock=time.monotonic, sleep=time.sleep):
        self.interval = 1.0 / fps if fps and fps > 0 else 0.0
        self._clock = clock
        self._sleep = sleep
        self._next = None

    def wait(self):
        now = self._clock()
        if self._next is None or now >= self._next:
            self._next = now + self.interval
            return
        self._sleep(self._next - now)
        self._next += self.interval


class FpsCounter:
    def __init__(self, window=20):
        self._times = deque(maxlen=max(2, int(window)))
        self.fps = 0.0

    def tick(self, now):
        self._times.append(now)
        if len(self._times) > 1 and self._times[-1] > self._times[0]:
            self.fps = (len(self._times) - 1) / (self._times[-1] - self._times[0])
        return self.fps


# --------------------------------------------------------
# FRAME LOOP
# --------------------------------------------------------
class FrameLoop:
    """
    One pass per frame: read -> detect -> estimate -> render -> show.
    Passes never overlap; the loop stops on ESC or when stop_event is set.
    """

    def __init__(self, cfg, capture, tracker, estimator, stop_event=None, config_watcher=None):
        self.cfg = merge_config(DEFAULT_CONFIG, cfg)
        self.capture = capture
        self.tracker = tracker
        self.estimator = estimator
        self.stop_event = stop_event or threading.Event()
        self.config_watcher = config_watcher
        self.fps_counter = FpsCounter(self.cfg["debug"].get("fps_window", 20))
        self.last_gesture = "none"
        self._last_time = None

    def update_config(self, cfg):
        self.cfg = merge_config(DEFAULT_CONFIG, cfg)
        self.estimator.update_config(self.cfg)

    def step(self, frame, now):
        """Run detection + estimation + drawing on one BGR frame (drawn in place)."""
        if self.cfg["camera"].get("mirror", True):
            frame[:] = cv2.flip(frame, 1)

        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        hands = self.tracker.process_frame(rgb, now)

        dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        fps = self.fps_counter.tick(now)

        est_cfg = self.cfg["estimator"]
        debug_cfg = self.cfg["debug"]
        for h in hands:
            h.dt = dt
            result = self.estimator.estimate(h.landmarks, est_cfg.get("min_confidence"))
            h.apply_estimation(result, select_gesture(result, est_cfg.get("accept_threshold", 9.9)))
            if debug_cfg.get("print_pose"):
                print("[PY] pose:", json.dumps(result.to_dict()))

        current = hands[0].gesture if hands else "none"
        if current != self.last_gesture:
            if current != "none":
                print(f"[PY] Gesture: {current} {GESTURE_SYMBOLS.get(current, '')} ({hands[0].confidence:.2f})")
            self.last_gesture = current

        if debug_cfg.get("draw_landmarks", True):
            for h in hands:
                draw_hand(frame, h)
        if current != "none":
            draw_gesture_label(frame, current)
        if debug_cfg.get("show_fps", True):
            draw_fps(frame, fps)
        return hands

    def run(self):
        window = self.cfg["debug"].get("window_name", "Hand Gestures")
        ticker = FrameTicker(self.cfg["camera"].get("fps", 30))
        print("[PY] Loop started. Press ESC to stop.")

        try:
            while not self.stop_event.is_set():
                ok, frame = self.capture.read()
                if not ok:
                    time.sleep(0.01)
                    continue

                if self.config_watcher is not None:
                    new_cfg = self.config_watcher.poll()
                    if new_cfg is not None:
                        self.update_config(new_cfg)

                self.step(frame, time.time())

                cv2.imshow(window, frame)
                if cv2.waitKey(1) & 0xFF == ESC_KEY:
                    self.stop_event.set()
                    break
                ticker.wait()
        finally:
            self.capture.release()
            self.tracker.close()
            cv2.destroyAllWindows()
            print("[PY] Loop exiting.")


# --------------------------------------------------------
# MAIN ENTRY
# --------------------------------------------------------
def main(config_path="config.json", camera=None, threshold=None):
    overrides = {}
    if camera is not None:
        overrides["camera"] = {"device": camera}
    if threshold is not None:
        overrides["estimator"] = {"accept_threshold": threshold}

    # only file edits are watched; command-line overrides stay on top
    watcher = ConfigWatcher(config_path, defaults=DEFAULT_CONFIG, overrides=overrides)
    if not watcher.file_config:
        print("[PY] WARNING: no config or failed to load, running with defaults.")
    cfg = watcher.config

    try:
        capture = open_camera(cfg["camera"])
    except CameraUnavailableError as e:
        print("[PY] ERROR:", e)
        return 1

    estimator = GestureEstimator(default_gestures())
    estimator.update_config(cfg)
    tracker = HandTracker(cfg)

    loop = FrameLoop(cfg, capture, tracker, estimator, config_watcher=watcher)

    try:
        loop.run()
    except KeyboardInterrupt:
        loop.stop_event.set()

    print("[PY] Shutdown complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
