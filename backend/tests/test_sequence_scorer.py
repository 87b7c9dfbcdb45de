import pytest

from core.services.sequence_scorer import midpoint_weights, weighted_score


def test_empty_scores_zero():
    assert weighted_score([]) == 0.0


@pytest.mark.parametrize("score", [0.0, 42.5, 100.0])
def test_single_score_returned(score):
    assert weighted_score([score]) == pytest.approx(score)


def test_constant_scores_unchanged():
    assert weighted_score([80.0] * 17) == pytest.approx(80.0)


def test_weights_peak_at_midpoint():
    weights = midpoint_weights(4)
    # mid = 2: |i - 2| / 2 * 0.5
    assert list(weights) == pytest.approx([0.5, 0.75, 1.0, 0.75])


def test_midpoint_frames_dominate():
    centered = weighted_score([0.0, 0.0, 100.0, 0.0])
    edge = weighted_score([100.0, 0.0, 0.0, 0.0])
    assert centered > edge
    assert centered == pytest.approx(100.0 / 3.0)
    assert edge == pytest.approx(50.0 / 3.0)


def test_weighted_score_within_bounds():
    scores = [0.0, 100.0, 37.0, 99.0, 12.5]
    assert 0.0 <= weighted_score(scores) <= 100.0
