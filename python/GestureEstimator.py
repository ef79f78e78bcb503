# GestureEstimator.py
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from FingerCurl import CurlThresholds, FingerCurl, classify_curl
from FingerDirection import DirectionBands, FingerDirection, classify_direction
from Fingers import FINGER_INDICES, FINGERS, LANDMARK_COUNT, Finger
from Geometry import Point, to_point
from GestureDescription import GestureDescription, GestureTemplate


@dataclass(frozen=True)
class FingerPose:
    finger: Finger
    curl: FingerCurl
    direction: FingerDirection


@dataclass(frozen=True)
class GestureMatch:
    name: str
    score: float
    max_score: float
    confidence: float  # score / max_score on a 0..10 scale

    def to_dict(self):
        return {
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class EstimationResult:
    gestures: Tuple[GestureMatch, ...]
    pose_data: Tuple[FingerPose, ...]

    @classmethod
    def empty(cls) -> "EstimationResult":
        return cls(gestures=(), pose_data=())

    @property
    def is_empty(self) -> bool:
        return not self.pose_data

    def to_dict(self):
        """Serialize to JSON-friendly dict."""
        return {
            "gestures": [g.to_dict() for g in self.gestures],
            "pose_data": [[p.finger.value, p.curl.value, p.direction.value] for p in self.pose_data],
        }


CONFIDENCE_SCALE = 10.0

TemplateLike = Union[GestureTemplate, GestureDescription]


def _coerce_snapshot(landmarks) -> Optional[List[Point]]:
    """Return 21 float points, or None when the snapshot is empty or malformed."""
    if landmarks is None:
        return None
    try:
        if len(landmarks) != LANDMARK_COUNT:
            return None
        return [to_point(entry) for entry in landmarks]
    except (TypeError, ValueError, KeyError):
        return None


class GestureEstimator:
    """
    Scores a landmark snapshot against every registered gesture template.
    Holds no per-frame state, so calls are independent and repeatable.
    """

    def __init__(
        self,
        gestures: Iterable[TemplateLike],
        thresholds: Optional[CurlThresholds] = None,
        bands: Optional[DirectionBands] = None,
    ):
        self.thresholds = thresholds or CurlThresholds()
        self.bands = bands or DirectionBands()
        seen = set()
        templates = []
        for gesture in gestures:
            template = gesture.freeze() if isinstance(gesture, GestureDescription) else gesture
            if not isinstance(template, GestureTemplate):
                raise ValueError(f"Not a gesture template: {gesture!r}")
            if template.name in seen:
                raise ValueError(f"Duplicate gesture name: {template.name!r}")
            seen.add(template.name)
            templates.append(template)
        self.templates: Tuple[GestureTemplate, ...] = tuple(templates)

    def update_config(self, cfg):
        """Pick up curl limits and direction bands from the `estimator` config section."""
        if not cfg:
            return
        section = cfg.get("estimator", {})
        self.thresholds = CurlThresholds.from_config(section.get("curl_limits"))
        self.bands = DirectionBands.from_config(section.get("direction_bands"))

    def _describe_points(self, points: Sequence[Point]) -> Tuple[FingerPose, ...]:
        pose = []
        for finger in FINGERS:
            chain = [points[idx] for idx in FINGER_INDICES[finger]]
            pose.append(
                FingerPose(
                    finger=finger,
                    curl=classify_curl(chain, finger, self.thresholds),
                    direction=classify_direction(chain, self.bands),
                )
            )
        return tuple(pose)

    def describe(self, landmarks) -> Tuple[FingerPose, ...]:
        """Per-finger curl / direction, or an empty tuple for a malformed snapshot."""
        points = _coerce_snapshot(landmarks)
        if points is None:
            return ()
        return self._describe_points(points)

    @staticmethod
    def _match(template: GestureTemplate, pose: Sequence[FingerPose]) -> GestureMatch:
        observed: Dict[Finger, FingerPose] = {p.finger: p for p in pose}
        score = 0.0
        for rule in template.curls:
            if observed[rule.finger].curl is rule.curl:
                score += rule.weight
        for rule in template.directions:
            if observed[rule.finger].direction is rule.direction:
                score += rule.weight

        max_score = template.max_score
        confidence = CONFIDENCE_SCALE * score / max_score if max_score > 0 else 0.0
        return GestureMatch(
            name=template.name,
            score=score,
            max_score=max_score,
            confidence=min(confidence, CONFIDENCE_SCALE),
        )

    def estimate(self, landmarks, min_confidence: Optional[float] = None) -> EstimationResult:
        """
        Score the snapshot against all templates. Matches are ranked by
        confidence, then raw score, then registration order, so the first
        entry is the one `select_gesture` would pick.
        `min_confidence` drops matches below that confidence (0..10).
        """
        points = _coerce_snapshot(landmarks)
        if points is None:
            return EstimationResult.empty()

        pose = self._describe_points(points)
        matches = [self._match(template, pose) for template in self.templates]
        ranked = sorted(matches, key=lambda m: (m.confidence, m.score), reverse=True)
        if min_confidence is not None:
            ranked = [m for m in ranked if m.confidence >= min_confidence]
        return EstimationResult(gestures=tuple(ranked), pose_data=pose)


def select_gesture(result: EstimationResult, threshold: float = 9.9) -> Optional[GestureMatch]:
    """Best match whose confidence is strictly above `threshold`, if any."""
    if not result.gestures:
        return None
    best = max(result.gestures, key=lambda m: m.confidence)
    if best.confidence > threshold:
        return best
    return None
