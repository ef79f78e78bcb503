from __future__ import annotations

from types import SimpleNamespace

import pytest

from conftest import FIST, HALF, STRAIGHT, THUMB_STRAIGHT, build_hand
from FingerCurl import FingerCurl
from FingerDirection import FingerDirection
from Fingers import Finger
from GestureDescription import GestureDescription, default_gestures, victory_gesture
from GestureEstimator import EstimationResult, GestureEstimator, select_gesture


@pytest.fixture
def estimator() -> GestureEstimator:
    return GestureEstimator(default_gestures())


def _by_name(result: EstimationResult):
    return {m.name: m for m in result.gestures}


def test_one_bounded_score_per_template(estimator, victory_hand, fist_hand, thumbs_down_hand) -> None:
    totals = {t.name: t.total_weight for t in estimator.templates}
    for hand in (victory_hand, fist_hand, thumbs_down_hand):
        result = estimator.estimate(hand)

        assert sorted(m.name for m in result.gestures) == sorted(totals)
        for match in result.gestures:
            assert 0.0 <= match.score <= totals[match.name]
            assert 0.0 <= match.confidence <= 10.0


def test_ranked_by_confidence(estimator, victory_hand) -> None:
    confidences = [m.confidence for m in estimator.estimate(victory_hand).gestures]

    assert confidences == sorted(confidences, reverse=True)


def test_higher_raw_score_does_not_outrank_better_fit(victory_hand) -> None:
    wide = GestureDescription("wide")
    for finger in Finger:
        wide.add_curl(finger, FingerCurl.NO_CURL)
        wide.add_direction(finger, FingerDirection.VERTICAL_UP)
    wide.add_curl(Finger.RING, FingerCurl.FULL_CURL).add_curl(Finger.PINKY, FingerCurl.FULL_CURL)
    result = GestureEstimator([wide, victory_gesture()]).estimate(victory_hand)
    matches = _by_name(result)

    # wide matches more weight in total but a smaller share of what it could
    assert matches["wide"].score > matches["victory"].score
    assert matches["wide"].confidence < matches["victory"].confidence
    assert result.gestures[0].name == "victory"
    assert select_gesture(result, 0.0) == result.gestures[0]


def test_exact_victory_reaches_max_score(estimator, victory_hand) -> None:
    result = estimator.estimate(victory_hand)
    victory = _by_name(result)["victory"]

    assert result.gestures[0].name == "victory"
    assert victory.score == pytest.approx(victory_gesture().max_score)
    assert victory.confidence == pytest.approx(10.0)
    assert select_gesture(result).name == "victory"


@pytest.mark.parametrize("spread", [25.0, 30.0])
def test_spread_victory_is_accepted(estimator, spread: float) -> None:
    hand = build_hand(index=(90.0 + spread, STRAIGHT), middle=(90.0 - spread, STRAIGHT))
    result = estimator.estimate(hand)
    pose = {p.finger: p.direction for p in result.pose_data}
    victory = _by_name(result)["victory"]

    assert pose[Finger.INDEX] is FingerDirection.DIAGONAL_UP_LEFT
    assert pose[Finger.MIDDLE] is FingerDirection.DIAGONAL_UP_RIGHT
    assert victory.score == pytest.approx(6.0)
    assert victory.confidence == pytest.approx(10.0)
    assert select_gesture(result).name == "victory"


def test_fist_scores_low_on_victory(estimator, fist_hand) -> None:
    result = estimator.estimate(fist_hand)
    victory = _by_name(result)["victory"]

    # only the ring / pinky curl expectations can match a fist
    assert victory.score <= 2.0
    assert victory.confidence < 5.0
    assert select_gesture(result) is None


def test_thumbs_up(estimator, thumbs_up_hand) -> None:
    result = estimator.estimate(thumbs_up_hand)

    assert _by_name(result)["thumbs_up"].score == pytest.approx(6.0)
    assert select_gesture(result).name == "thumbs_up"


def test_thumbs_down_full_match(estimator, thumbs_down_hand) -> None:
    result = estimator.estimate(thumbs_down_hand)
    pose = {p.finger: p for p in result.pose_data}
    thumbs_down = _by_name(result)["thumbs_down"]

    assert pose[Finger.THUMB].curl is FingerCurl.NO_CURL
    assert pose[Finger.THUMB].direction is FingerDirection.VERTICAL_DOWN
    assert thumbs_down.score == pytest.approx(1.0 + 1.0 + 4 * 0.9)
    assert select_gesture(result).name == "thumbs_down"


def test_thumbs_down_accepts_half_curled_fingers(estimator) -> None:
    hand = build_hand(
        thumb=(270.0, THUMB_STRAIGHT),
        index=(100.0, HALF),
        middle=(90.0, HALF),
        ring=(80.0, FIST),
        pinky=(70.0, FIST),
    )

    assert _by_name(estimator.estimate(hand))["thumbs_down"].score == pytest.approx(5.6)


def test_diagonal_thumb_falls_under_default_threshold(estimator) -> None:
    hand = build_hand(
        thumb=(225.0, THUMB_STRAIGHT),
        index=(100.0, FIST),
        middle=(90.0, FIST),
        ring=(80.0, FIST),
        pinky=(70.0, FIST),
    )
    result = estimator.estimate(hand)

    assert _by_name(result)["thumbs_down"].score == pytest.approx(1.0 + 0.9 + 4 * 0.9)
    assert select_gesture(result, 9.9) is None
    assert select_gesture(result, 9.5).name == "thumbs_down"


def test_unmet_expectations_do_not_penalize(victory_hand) -> None:
    plain = GestureEstimator([victory_gesture()])
    extra = (
        GestureDescription("victory")
        .add_curl(Finger.INDEX, FingerCurl.NO_CURL)
        .add_direction(Finger.INDEX, FingerDirection.VERTICAL_UP)
        .add_curl(Finger.MIDDLE, FingerCurl.NO_CURL)
        .add_direction(Finger.MIDDLE, FingerDirection.VERTICAL_UP)
        .add_curl(Finger.RING, FingerCurl.FULL_CURL)
        .add_curl(Finger.PINKY, FingerCurl.FULL_CURL)
        .add_direction(Finger.RING, FingerDirection.HORIZONTAL_LEFT, 0.5)
    )

    assert GestureEstimator([extra]).estimate(victory_hand).gestures[0].score == pytest.approx(
        plain.estimate(victory_hand).gestures[0].score
    )


@pytest.mark.parametrize(
    "landmarks",
    [
        None,
        [],
        [(0.0, 0.0, 0.0)] * 20,
        [(0.0, 0.0, 0.0)] * 22,
        [(0.0, 0.0)] * 21,
        ["not a point"] * 21,
        [{"x": 1.0, "y": 2.0}] * 21,
    ],
)
def test_empty_or_malformed_snapshot_gives_empty_result(estimator, landmarks) -> None:
    result = estimator.estimate(landmarks)

    assert result == EstimationResult.empty()
    assert result.is_empty
    assert select_gesture(result) is None
    assert estimator.describe(landmarks) == ()


def test_accepts_mediapipe_style_landmarks(estimator, victory_hand) -> None:
    objects = [SimpleNamespace(x=x, y=y, z=z) for x, y, z in victory_hand]

    assert estimator.estimate(objects) == estimator.estimate(victory_hand)


def test_accepts_numpy_snapshot(estimator, victory_hand) -> None:
    np = pytest.importorskip("numpy")

    assert estimator.estimate(np.array(victory_hand)) == estimator.estimate(victory_hand)


def test_estimate_is_deterministic(estimator, thumbs_up_hand) -> None:
    first = estimator.estimate(thumbs_up_hand)

    for _ in range(3):
        assert estimator.estimate(thumbs_up_hand) == first


def test_min_confidence_filters_matches(estimator, victory_hand) -> None:
    result = estimator.estimate(victory_hand, min_confidence=9.0)

    assert [m.name for m in result.gestures] == ["victory"]
    assert len(result.pose_data) == 5


def test_describe_returns_pose_per_finger(estimator, victory_hand) -> None:
    pose = {p.finger: (p.curl, p.direction) for p in estimator.describe(victory_hand)}

    assert pose[Finger.INDEX] == (FingerCurl.NO_CURL, FingerDirection.VERTICAL_UP)
    assert pose[Finger.MIDDLE] == (FingerCurl.NO_CURL, FingerDirection.VERTICAL_UP)
    assert pose[Finger.RING][0] is FingerCurl.FULL_CURL
    assert pose[Finger.PINKY][0] is FingerCurl.FULL_CURL


def test_accepts_builders_and_rejects_duplicates() -> None:
    desc = GestureDescription("open").add_curl(Finger.INDEX, FingerCurl.NO_CURL)

    assert GestureEstimator([desc]).templates[0].name == "open"
    with pytest.raises(ValueError, match="Duplicate gesture name"):
        GestureEstimator([victory_gesture(), victory_gesture()])


def test_update_config_changes_curl_limits(estimator, victory_hand) -> None:
    estimator.update_config({"estimator": {"curl_limits": {"no_curl_max": 0.0, "half_curl_max": 0.0}}})
    pose = {p.finger: p.curl for p in estimator.describe(victory_hand)}

    assert pose[Finger.INDEX] is FingerCurl.FULL_CURL


def test_to_dict_is_json_friendly(estimator, victory_hand) -> None:
    data = estimator.estimate(victory_hand).to_dict()

    assert data["gestures"][0]["name"] == "victory"
    assert ["index", "no_curl", "vertical_up"] in data["pose_data"]


def test_update_config_changes_direction_bands(estimator) -> None:
    hand = build_hand(index=(120.0, STRAIGHT))
    before = {p.finger: p.direction for p in estimator.describe(hand)}
    estimator.update_config({"estimator": {"direction_bands": {"vertical": 35.0}}})
    after = {p.finger: p.direction for p in estimator.describe(hand)}

    assert before[Finger.INDEX] is FingerDirection.DIAGONAL_UP_LEFT
    assert after[Finger.INDEX] is FingerDirection.VERTICAL_UP
    assert estimator.bands.horizontal == 15.0
