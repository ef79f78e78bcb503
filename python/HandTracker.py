import mediapipe as mp
import numpy as np

from HandData import HandData


class HandTracker:
    """
    Landmark detector: RGB frame in, one HandData per detected hand out.
    Landmarks are scaled to pixel space (z scaled by width, like x).
    """

    def __init__(
        self,
        cfg,
        detector=None,
    ):
        self.cfg = cfg
        tcfg = cfg.get("tracker", {})

        if detector is None:
            detector = mp.solutions.hands.Hands(
                model_complexity=tcfg.get("model_complexity", 1),
                min_detection_confidence=tcfg.get("min_detection_confidence", 0.5),
                min_tracking_confidence=tcfg.get("min_tracking_confidence", 0.5),
                max_num_hands=tcfg.get("max_num_hands", 1),
            )
        self.mp_hands = detector
        print("[Tracker] Hand landmark model loaded.")

    def process_frame(self, frame_rgb, timestamp):
        """
        Process an RGB frame (caller converts BGR->RGB).
        Returns list of HandData instances, empty when no hand is visible.
        timestamp: absolute time (seconds) for this frame.
        """
        result = self.mp_hands.process(frame_rgb)
        hands = []

        if not result.multi_hand_landmarks:
            return hands

        height, width = frame_rgb.shape[:2]
        scale = np.array([width, height, width], dtype=np.float64)
        handedness = result.multi_handedness or []

        for idx, lm in enumerate(result.multi_hand_landmarks):
            coords = np.array([[p.x, p.y, p.z] for p in lm.landmark], dtype=np.float64) * scale

            h = HandData()
            h.raw_landmarks = lm
            h.landmarks = tuple(tuple(float(v) for v in row) for row in coords)
            if idx < len(handedness):
                h.handedness = handedness[idx].classification[0].label
            h.visible = True
            h.timestamp = timestamp
            x, y, z = h.landmarks[0]
            h.wrist = {"x": x, "y": y, "z": z}
            hands.append(h)

        return hands

    def close(self):
        self.mp_hands.close()
