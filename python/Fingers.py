from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from Geometry import Point, to_point


class Finger(str, Enum):
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    PINKY = "pinky"


FINGERS: Tuple[Finger, ...] = tuple(Finger)

WRIST = 0
LANDMARK_COUNT = 21

# Landmark indices from the wrist out to each fingertip.
FINGER_INDICES: Mapping[Finger, Tuple[int, ...]] = MappingProxyType(
    {
        Finger.THUMB: (0, 1, 2, 3, 4),
        Finger.INDEX: (0, 5, 6, 7, 8),
        Finger.MIDDLE: (0, 9, 10, 11, 12),
        Finger.RING: (0, 13, 14, 15, 16),
        Finger.PINKY: (0, 17, 18, 19, 20),
    }
)

# BGR, for OpenCV drawing.
FINGER_COLORS: Mapping[str, Tuple[int, int, int]] = MappingProxyType(
    {
        Finger.THUMB.value: (0, 0, 255),
        Finger.INDEX.value: (255, 0, 0),
        Finger.MIDDLE.value: (0, 255, 255),
        Finger.RING.value: (0, 255, 0),
        Finger.PINKY.value: (203, 192, 255),
        "palm_base": (255, 255, 255),
    }
)


def _check_chains() -> None:
    for finger, chain in FINGER_INDICES.items():
        if len(chain) < 2 or chain[0] != WRIST:
            raise ValueError(f"Finger chain for {finger.value} must start at the wrist")
        if any(b <= a for a, b in zip(chain, chain[1:])):
            raise ValueError(f"Finger chain for {finger.value} must be strictly increasing")
        if chain[-1] >= LANDMARK_COUNT:
            raise ValueError(f"Finger chain for {finger.value} leaves the landmark set")


_check_chains()


def as_finger(value) -> Finger:
    """Accept a Finger or its name ("index", "Thumb", ...)."""
    if isinstance(value, Finger):
        return value
    try:
        return Finger(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown finger: {value!r}") from None


def finger_points(landmarks: Sequence[object], finger: Finger) -> List[Point]:
    """Points of one finger chain, wrist first."""
    return [to_point(landmarks[idx]) for idx in FINGER_INDICES[as_finger(finger)]]
