from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from FingerCurl import FingerCurl
from FingerDirection import FingerDirection
from Fingers import Finger, as_finger

GESTURE_SYMBOLS: Dict[str, str] = {
    "thumbs_up": "\U0001F44D",
    "victory": "✌\U0001F3FB",
    "thumbs_down": "\U0001F44E",
}


@dataclass(frozen=True)
class CurlRule:
    finger: Finger
    curl: FingerCurl
    weight: float


@dataclass(frozen=True)
class DirectionRule:
    finger: Finger
    direction: FingerDirection
    weight: float


@dataclass(frozen=True)
class GestureTemplate:
    """Immutable set of weighted curl / direction expectations for one gesture."""

    name: str
    curls: Tuple[CurlRule, ...] = ()
    directions: Tuple[DirectionRule, ...] = ()

    def __post_init__(self):
        keys = [(r.finger, r.curl) for r in self.curls] + [(r.finger, r.direction) for r in self.directions]
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate rule in gesture {self.name!r}")

    @property
    def total_weight(self) -> float:
        return sum(r.weight for r in self.curls) + sum(r.weight for r in self.directions)

    @property
    def max_score(self) -> float:
        """
        Best score a single snapshot can reach. A finger has exactly one curl and
        one direction, so alternatives for the same finger never add up.
        """
        best: Dict[Tuple[str, Finger], float] = {}
        for kind, rules in (("curl", self.curls), ("direction", self.directions)):
            for rule in rules:
                key = (kind, rule.finger)
                best[key] = max(best.get(key, 0.0), rule.weight)
        return sum(best.values())


def _check_weight(weight) -> float:
    weight = float(weight)
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"Weight must be within [0, 1], got {weight}")
    return weight


class GestureDescription:
    """
    Builder for a gesture template:

        desc = GestureDescription("thumbs_down")
        desc.add_curl(Finger.THUMB, FingerCurl.NO_CURL)
        desc.add_direction(Finger.THUMB, FingerDirection.VERTICAL_DOWN, 1.0)
        template = desc.freeze()
    """

    def __init__(self, name: str):
        if not name:
            raise ValueError("Gesture name must not be empty")
        self.name = name
        self._curls: List[CurlRule] = []
        self._directions: List[DirectionRule] = []

    def add_curl(self, finger: Union[Finger, str], curl: Union[FingerCurl, str], weight: float = 1.0):
        try:
            curl = FingerCurl(curl)
        except ValueError:
            raise ValueError(f"Unknown finger curl: {curl!r}") from None
        finger = as_finger(finger)
        if any(r.finger is finger and r.curl is curl for r in self._curls):
            raise ValueError(f"Duplicate rule: {finger.value} already expects {curl.value}")
        self._curls.append(CurlRule(finger, curl, _check_weight(weight)))
        return self

    def add_direction(
        self, finger: Union[Finger, str], direction: Union[FingerDirection, str], weight: float = 1.0
    ):
        try:
            direction = FingerDirection(direction)
        except ValueError:
            raise ValueError(f"Unknown finger direction: {direction!r}") from None
        finger = as_finger(finger)
        if any(r.finger is finger and r.direction is direction for r in self._directions):
            raise ValueError(f"Duplicate rule: {finger.value} already expects {direction.value}")
        self._directions.append(DirectionRule(finger, direction, _check_weight(weight)))
        return self

    def freeze(self) -> GestureTemplate:
        return GestureTemplate(self.name, tuple(self._curls), tuple(self._directions))


# --------------------------------------------------------
# BUILT-IN GESTURES
# --------------------------------------------------------
def victory_gesture() -> GestureTemplate:
    desc = GestureDescription("victory")
    for finger in (Finger.INDEX, Finger.MIDDLE):
        desc.add_curl(finger, FingerCurl.NO_CURL, 1.0)
        desc.add_direction(finger, FingerDirection.VERTICAL_UP, 1.0)
        # spread V: the two fingers lean apart
        desc.add_direction(finger, FingerDirection.DIAGONAL_UP_LEFT, 1.0)
        desc.add_direction(finger, FingerDirection.DIAGONAL_UP_RIGHT, 1.0)
    for finger in (Finger.RING, Finger.PINKY):
        desc.add_curl(finger, FingerCurl.FULL_CURL, 1.0)
    return desc.freeze()


def thumbs_up_gesture() -> GestureTemplate:
    desc = GestureDescription("thumbs_up")
    desc.add_curl(Finger.THUMB, FingerCurl.NO_CURL, 1.0)
    desc.add_direction(Finger.THUMB, FingerDirection.VERTICAL_UP, 1.0)
    desc.add_direction(Finger.THUMB, FingerDirection.DIAGONAL_UP_LEFT, 0.9)
    desc.add_direction(Finger.THUMB, FingerDirection.DIAGONAL_UP_RIGHT, 0.9)
    for finger in (Finger.INDEX, Finger.MIDDLE, Finger.RING, Finger.PINKY):
        desc.add_curl(finger, FingerCurl.FULL_CURL, 1.0)
        desc.add_curl(finger, FingerCurl.HALF_CURL, 0.9)
    return desc.freeze()


def thumbs_down_gesture() -> GestureTemplate:
    desc = GestureDescription("thumbs_down")
    desc.add_curl(Finger.THUMB, FingerCurl.NO_CURL)
    desc.add_direction(Finger.THUMB, FingerDirection.VERTICAL_DOWN, 1.0)
    desc.add_direction(Finger.THUMB, FingerDirection.DIAGONAL_DOWN_LEFT, 0.9)
    desc.add_direction(Finger.THUMB, FingerDirection.DIAGONAL_DOWN_RIGHT, 0.9)
    for finger in (Finger.INDEX, Finger.MIDDLE, Finger.RING, Finger.PINKY):
        desc.add_curl(finger, FingerCurl.FULL_CURL, 0.9)
        desc.add_curl(finger, FingerCurl.HALF_CURL, 0.9)
    return desc.freeze()


def default_gestures() -> List[GestureTemplate]:
    return [victory_gesture(), thumbs_up_gesture(), thumbs_down_gesture()]
