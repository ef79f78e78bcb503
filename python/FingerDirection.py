import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence, Tuple

from Geometry import EPSILON, Point


class FingerDirection(str, Enum):
    VERTICAL_UP = "vertical_up"
    VERTICAL_DOWN = "vertical_down"
    HORIZONTAL_LEFT = "horizontal_left"
    HORIZONTAL_RIGHT = "horizontal_right"
    DIAGONAL_UP_LEFT = "diagonal_up_left"
    DIAGONAL_UP_RIGHT = "diagonal_up_right"
    DIAGONAL_DOWN_LEFT = "diagonal_down_left"
    DIAGONAL_DOWN_RIGHT = "diagonal_down_right"


@dataclass(frozen=True)
class DirectionBands:
    """
    Half-widths (degrees) of the vertical and horizontal sectors. Whatever
    falls between them is diagonal, so the diagonals get the wider sectors.
    """

    vertical: float = 15.0
    horizontal: float = 15.0

    def __post_init__(self):
        for name in ("vertical", "horizontal"):
            value = getattr(self, name)
            if not 0.0 <= value <= 45.0:
                raise ValueError(f"{name} band must be within [0, 45] degrees, got {value}")

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, float]]) -> "DirectionBands":
        if not cfg:
            return cls()
        default = cls()
        return cls(
            vertical=float(cfg.get("vertical", default.vertical)),
            horizontal=float(cfg.get("horizontal", default.horizontal)),
        )


DEFAULT_BANDS = DirectionBands()


def finger_vector(points: Sequence[Point]) -> Tuple[float, float]:
    """Normalized image-plane vector from the finger's base joint to its tip."""
    base = points[1] if len(points) > 2 else points[0]
    tip = points[-1]
    dx = tip[0] - base[0]
    dy = tip[1] - base[1]
    length = math.hypot(dx, dy)
    if length <= EPSILON:
        return (0.0, 0.0)
    return (dx / length, dy / length)


def finger_heading(points: Sequence[Point]) -> Optional[float]:
    """Heading in degrees [0, 360) with 0 to the right and 90 up; None for a zero vector."""
    vx, vy = finger_vector(points)
    if vx == 0.0 and vy == 0.0:
        return None
    # image y grows downwards
    return math.degrees(math.atan2(-vy, vx)) % 360.0


def _off(heading: float, target: float) -> float:
    return abs((heading - target + 180.0) % 360.0 - 180.0)


def classify_direction(points: Sequence[Point], bands: DirectionBands = DEFAULT_BANDS) -> FingerDirection:
    """Sector of the finger's base->tip heading; a zero-length finger reads as vertical up."""
    heading = finger_heading(points)
    if heading is None:
        return FingerDirection.VERTICAL_UP

    if _off(heading, 90.0) <= bands.vertical + EPSILON:
        return FingerDirection.VERTICAL_UP
    if _off(heading, 270.0) <= bands.vertical + EPSILON:
        return FingerDirection.VERTICAL_DOWN
    if _off(heading, 180.0) <= bands.horizontal + EPSILON:
        return FingerDirection.HORIZONTAL_LEFT
    if _off(heading, 0.0) <= bands.horizontal + EPSILON:
        return FingerDirection.HORIZONTAL_RIGHT

    up = heading < 180.0
    left = 90.0 < heading < 270.0
    if up:
        return FingerDirection.DIAGONAL_UP_LEFT if left else FingerDirection.DIAGONAL_UP_RIGHT
    return FingerDirection.DIAGONAL_DOWN_LEFT if left else FingerDirection.DIAGONAL_DOWN_RIGHT
