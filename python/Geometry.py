import math
from typing import Mapping, Sequence, Tuple, Union

Point = Tuple[float, float, float]
LandmarkLike = Union[Sequence[float], Mapping[str, float]]

EPSILON = 1e-6


# ==========================================
# 1. MATH & GEOMETRY (Pure Functions)
# ==========================================
def to_point(entry: Union[LandmarkLike, object]) -> Point:
    """Coerce a landmark (x/y/z object, mapping or 3-sequence) into a float tuple."""
    if hasattr(entry, "x") and hasattr(entry, "y") and hasattr(entry, "z"):
        return (float(entry.x), float(entry.y), float(entry.z))
    if isinstance(entry, dict):
        return (float(entry["x"]), float(entry["y"]), float(entry["z"]))
    # lists, tuples and numpy rows
    if not isinstance(entry, (str, bytes)) and hasattr(entry, "__len__") and len(entry) >= 3:
        return (float(entry[0]), float(entry[1]), float(entry[2]))
    raise ValueError("Unsupported landmark format; expected object with x,y,z or sequence of 3 values.")


def vec_sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_len(v: Point) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Point) -> Point:
    length = vec_len(v)
    if length <= EPSILON:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two landmarks."""
    return vec_len(vec_sub(p, q))


def angle_between(a: Point, origin: Point, b: Point) -> float:
    """
    Angle (radians, 0..pi) between the vectors origin->a and origin->b.
    Returns 0.0 when either vector has no length.
    """
    v1 = vec_sub(a, origin)
    v2 = vec_sub(b, origin)
    mag1 = vec_len(v1)
    mag2 = vec_len(v2)
    if mag1 <= EPSILON or mag2 <= EPSILON:
        return 0.0
    cosine = dot(v1, v2) / (mag1 * mag2)
    cosine = max(-1.0, min(1.0, cosine))
    return math.acos(cosine)


def bend_angle(prev: Point, joint: Point, nxt: Point) -> float:
    """How far (radians) the segment leaving `joint` turns away from the one entering it."""
    if distance(prev, joint) <= EPSILON or distance(nxt, joint) <= EPSILON:
        return 0.0
    return math.pi - angle_between(prev, joint, nxt)
