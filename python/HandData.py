class HandData:
    """
    Simple container for per-hand data that flows between modules.
    """

    def __init__(self):
        # raw mediapipe landmark object (for drawing)
        self.raw_landmarks = None

        # 21 (x, y, z) points in pixel space
        self.landmarks = None

        # "Left" / "Right"
        self.handedness = "Unknown"

        # boolean flag
        self.visible = False

        # timing
        self.timestamp = 0.0  # absolute time (seconds)
        self.dt = 0.0  # time since previous frame (seconds)

        # wrist position in pixel space
        self.wrist = {"x": 0.0, "y": 0.0, "z": 0.0}

        # estimation result for this frame
        self.pose_data = ()
        self.gestures = ()

        # accepted gesture ("none" when nothing passed the threshold)
        self.gesture = "none"
        self.confidence = 0.0

    def apply_estimation(self, result, accepted=None):
        """Copy an EstimationResult (and the accepted match, if any) onto the hand."""
        self.pose_data = result.pose_data
        self.gestures = result.gestures
        if accepted is None:
            self.gesture = "none"
            self.confidence = 0.0
        else:
            self.gesture = accepted.name
            self.confidence = accepted.confidence

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        return {
            "handedness": self.handedness,
            "visible": self.visible,
            "gesture": self.gesture,
            "confidence": self.confidence,
            "gestures": [g.to_dict() for g in self.gestures],
            "pose_data": [[p.finger.value, p.curl.value, p.direction.value] for p in self.pose_data],
            "wrist": self.wrist,
            "timestamp": self.timestamp,
            "dt": self.dt,
        }
