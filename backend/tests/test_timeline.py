import pytest

from core.services.timeline import normalize_timeline

from conftest import static_sequence


def test_short_sequence_returned_unchanged():
    sequence = static_sequence(45)
    assert normalize_timeline(sequence) is sequence


def test_sequence_at_budget_returned_unchanged():
    sequence = static_sequence(60)
    assert normalize_timeline(sequence, 60) is sequence


def test_normalize_is_idempotent_within_budget():
    sequence = static_sequence(12)
    once = normalize_timeline(sequence)
    assert normalize_timeline(once) == once


@pytest.mark.parametrize("length", [61, 90, 120, 337])
def test_long_sequence_decimated_to_budget(length):
    sequence = static_sequence(length)
    normalized = normalize_timeline(sequence, 60)

    assert len(normalized) == 60
    source_ids = {id(frame) for frame in sequence}
    assert all(id(frame) in source_ids for frame in normalized)


def test_decimation_picks_nearest_previous_frame():
    sequence = static_sequence(90)
    normalized = normalize_timeline(sequence, 60)

    # floor(i * 90 / 60)
    expected = [sequence[(i * 3) // 2] for i in range(60)]
    assert all(a is b for a, b in zip(normalized, expected))
    assert normalized[1] is sequence[1]
    assert normalized[2] is sequence[3]


def test_decimation_keeps_time_order():
    sequence = static_sequence(200)
    normalized = normalize_timeline(sequence, 60)
    timestamps = [frame.timestamp_ms for frame in normalized]
    assert timestamps == sorted(timestamps)
    assert normalized[0] is sequence[0]
