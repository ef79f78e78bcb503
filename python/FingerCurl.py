import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence

from Fingers import Finger, as_finger
from Geometry import Point, bend_angle


class FingerCurl(str, Enum):
    NO_CURL = "no_curl"
    HALF_CURL = "half_curl"
    FULL_CURL = "full_curl"


@dataclass(frozen=True)
class CurlThresholds:
    """
    Total-bend limits in degrees. Bend below `no_curl_max` is no curl,
    below `half_curl_max` half curl, anything above is a full curl.
    Calibrated by hand against MediaPipe output.
    """

    no_curl_max: float = 60.0
    half_curl_max: float = 160.0
    thumb_no_curl_max: float = 45.0
    thumb_half_curl_max: float = 100.0

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, float]]) -> "CurlThresholds":
        if not cfg:
            return cls()
        default = cls()
        return cls(
            no_curl_max=float(cfg.get("no_curl_max", default.no_curl_max)),
            half_curl_max=float(cfg.get("half_curl_max", default.half_curl_max)),
            thumb_no_curl_max=float(cfg.get("thumb_no_curl_max", default.thumb_no_curl_max)),
            thumb_half_curl_max=float(cfg.get("thumb_half_curl_max", default.thumb_half_curl_max)),
        )


DEFAULT_THRESHOLDS = CurlThresholds()


def total_bend(points: Sequence[Point]) -> float:
    """Sum of the bend (degrees) at every interior joint of a chain."""
    total = 0.0
    for i in range(1, len(points) - 1):
        total += bend_angle(points[i - 1], points[i], points[i + 1])
    return math.degrees(total)


def classify_curl(
    points: Sequence[Point],
    finger: Finger = Finger.INDEX,
    thresholds: CurlThresholds = DEFAULT_THRESHOLDS,
) -> FingerCurl:
    """
    Bucket a finger chain (wrist first) into a curl state.
    The thumb is measured from its CMC joint, so the wrist segment is dropped.
    """
    if as_finger(finger) is Finger.THUMB:
        bend = total_bend(points[1:])
        no_max, half_max = thresholds.thumb_no_curl_max, thresholds.thumb_half_curl_max
    else:
        bend = total_bend(points)
        no_max, half_max = thresholds.no_curl_max, thresholds.half_curl_max

    if bend < no_max:
        return FingerCurl.NO_CURL
    if bend < half_max:
        return FingerCurl.HALF_CURL
    return FingerCurl.FULL_CURL
