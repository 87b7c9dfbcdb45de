import dataclasses

import pytest

from core.domain.analysis import ShotType
from core.domain.errors import InvalidInputError
from core.services.frame_comparator import CLEAR_KEYPOINTS, SMASH_KEYPOINTS
from core.services.pose_comparison import PoseComparisonService, compare_poses

from conftest import static_sequence, uniform_frame


@pytest.fixture
def service():
    return PoseComparisonService()


def assert_scores_in_range(result):
    scores = [result.overall_score, *result.key_point_scores.values()]
    scores += [
        result.details.position_accuracy,
        result.details.timing,
        result.details.stability,
    ]
    assert all(0.0 <= score <= 100.0 for score in scores)


def test_identical_sequences_score_perfectly(service, reference_sequence):
    copy = [dataclasses.replace(frame) for frame in reference_sequence]

    result = service.compare_poses(reference_sequence, copy, ShotType.SMASH)

    assert result.overall_score == pytest.approx(100.0)
    assert set(result.key_point_scores) == set(SMASH_KEYPOINTS)
    assert all(s == pytest.approx(100.0) for s in result.key_point_scores.values())
    assert result.details.stability == pytest.approx(100.0)
    assert result.details.timing == pytest.approx(100.0)
    assert_scores_in_range(result)


def test_wrist_offset_scenario(service, wrist_offset_pair):
    reference, user = wrist_offset_pair

    result = service.compare_poses(reference, user, "smash")

    assert result.key_point_scores == {"right_wrist": pytest.approx(90.0)}
    assert result.overall_score == pytest.approx(90.0)
    assert result.details.position_accuracy == pytest.approx(90.0)


@pytest.mark.parametrize(
    "reference, user",
    [([], static_sequence(3)), (static_sequence(3), []), ([], [])],
)
def test_empty_sequences_rejected(service, reference, user):
    with pytest.raises(InvalidInputError):
        service.compare_poses(reference, user, ShotType.SMASH)


def test_invalid_input_is_value_error(service):
    with pytest.raises(ValueError, match="Invalid pose data"):
        service.compare_poses([], static_sequence(2))


def test_unrecognized_shot_type_uses_smash(service, reference_sequence):
    result = service.compare_poses(reference_sequence, reference_sequence, "backhand")
    assert set(result.key_point_scores) == set(SMASH_KEYPOINTS)


def test_shot_type_selects_importance_set(service, reference_sequence):
    result = service.compare_poses(reference_sequence, reference_sequence, ShotType.CLEAR)
    assert list(result.key_point_scores) == CLEAR_KEYPOINTS


def test_position_accuracy_ignores_shot_type(service):
    # Only position 8 differs: outside the clear set, inside the smash set
    reference = static_sequence(5)
    user = [uniform_frame(overrides={8: (0.9, 0.5, 0.9)}) for _ in range(5)]

    result = service.compare_poses(reference, user, ShotType.CLEAR)

    assert result.overall_score == pytest.approx(100.0)
    assert result.details.position_accuracy == pytest.approx((9 * 100 + 60) / 10)


def test_unequal_lengths_truncate_to_shorter(service):
    reference = static_sequence(40)
    user = static_sequence(20, x=0.55)

    result = service.compare_poses(reference, user)

    assert result.overall_score == pytest.approx(95.0)
    assert result.details.timing == pytest.approx(50.0)


def test_long_sequences_normalized_before_timing(service):
    result = service.compare_poses(static_sequence(120), static_sequence(90))
    # both decimate to 60 frames
    assert result.details.timing == pytest.approx(100.0)


def test_no_confident_keypoints_resolves_to_zero(service):
    sequence = static_sequence(6, confidence=0.1)

    result = service.compare_poses(sequence, sequence)

    assert result.overall_score == 0.0
    assert result.key_point_scores == {}
    assert result.details.position_accuracy == 0.0
    assert result.details.stability == 100.0
    assert_scores_in_range(result)


def test_feedback_generated_for_poor_attempt(service):
    reference = static_sequence(10)
    user = static_sequence(30, x=0.95)

    result = service.compare_poses(reference, user, ShotType.SERVE)

    assert len(result.feedback) >= 3  # tier + timing + per-joint notes
    assert result.recommendations[0] == "서브 시 무게중심을 앞으로 이동하세요."
    assert_scores_in_range(result)


def test_module_level_helper_uses_language():
    result = compare_poses(static_sequence(3), static_sequence(3), language="en")
    assert result.feedback == ("🎯 Excellent! Your form is very accurate.",)


def test_result_collections_are_read_only(service, wrist_offset_pair):
    reference, user = wrist_offset_pair

    result = service.compare_poses(reference, user, ShotType.SMASH)

    with pytest.raises(TypeError):
        result.key_point_scores["right_wrist"] = 0.0  # type: ignore[index]
    with pytest.raises(AttributeError):
        result.feedback.append("extra")  # type: ignore[attr-defined]
    assert isinstance(result.recommendations, tuple)
