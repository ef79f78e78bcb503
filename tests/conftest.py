from __future__ import annotations

import math

import pytest

from Fingers import FINGER_INDICES, Finger

WRIST_POS = (200.0, 400.0, 0.0)

# Turns (degrees) at the base, middle and distal joints of a long finger.
STRAIGHT = (0.0, 0.0, 0.0)
HALF = (40.0, 50.0, 0.0)
FIST = (90.0, 90.0, 60.0)

# Turns at the thumb's MCP and IP joints.
THUMB_STRAIGHT = (0.0, 0.0)
THUMB_FOLDED = (60.0, 60.0)


def chain_points(first_heading, turns, lengths, start=WRIST_POS):
    """
    Walk from `start` in image space (y down). Headings are degrees with
    90 pointing up; each turn is applied before its segment.
    """
    points = [start]
    heading = first_heading
    x, y, _ = start
    for turn, length in zip(turns, lengths):
        heading += turn
        x += length * math.cos(math.radians(heading))
        y -= length * math.sin(math.radians(heading))
        points.append((x, y, 0.0))
    return points


def build_hand(
    thumb=(135.0, THUMB_STRAIGHT),
    index=(100.0, STRAIGHT),
    middle=(90.0, STRAIGHT),
    ring=(80.0, FIST),
    pinky=(70.0, FIST),
    thumb_cmc_turn=0.0,
):
    """21-point snapshot; defaults describe a victory sign."""
    landmarks = [None] * 21
    chains = {
        Finger.THUMB: chain_points(
            thumb[0], (0.0, thumb_cmc_turn) + tuple(thumb[1]), (40.0, 30.0, 30.0, 25.0)
        ),
        Finger.INDEX: chain_points(index[0], (0.0,) + tuple(index[1]), (100.0, 30.0, 30.0, 30.0)),
        Finger.MIDDLE: chain_points(middle[0], (0.0,) + tuple(middle[1]), (100.0, 30.0, 30.0, 30.0)),
        Finger.RING: chain_points(ring[0], (0.0,) + tuple(ring[1]), (95.0, 28.0, 28.0, 28.0)),
        Finger.PINKY: chain_points(pinky[0], (0.0,) + tuple(pinky[1]), (90.0, 24.0, 24.0, 24.0)),
    }
    for finger, points in chains.items():
        for idx, point in zip(FINGER_INDICES[finger], points):
            landmarks[idx] = point
    return landmarks


@pytest.fixture
def victory_hand():
    return build_hand()


@pytest.fixture
def thumbs_up_hand():
    return build_hand(
        thumb=(90.0, THUMB_STRAIGHT),
        index=(100.0, FIST),
        middle=(90.0, FIST),
        ring=(80.0, FIST),
        pinky=(70.0, FIST),
    )


@pytest.fixture
def thumbs_down_hand():
    return build_hand(
        thumb=(270.0, THUMB_STRAIGHT),
        index=(100.0, FIST),
        middle=(90.0, FIST),
        ring=(80.0, FIST),
        pinky=(70.0, FIST),
    )


@pytest.fixture
def fist_hand():
    return build_hand(
        thumb=(135.0, THUMB_FOLDED),
        index=(100.0, FIST),
        middle=(90.0, FIST),
        ring=(80.0, FIST),
        pinky=(70.0, FIST),
    )
