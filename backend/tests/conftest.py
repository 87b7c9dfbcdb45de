"""
Shared fixtures and frame builders.
"""

from typing import Iterable, Optional

import pytest

from core.domain.pose import Keypoint, PoseFrame


def make_frame(
    points: Iterable[tuple],
    timestamp_ms: float = 0.0,
) -> PoseFrame:
    """Build a frame from (x, y, confidence) tuples in template order."""
    return PoseFrame(
        keypoints=[Keypoint(x, y, c) for x, y, c in points],
        timestamp_ms=timestamp_ms,
    )


def uniform_frame(
    count: int = 33,
    x: float = 0.5,
    y: float = 0.5,
    confidence: float = 0.9,
    timestamp_ms: float = 0.0,
    overrides: Optional[dict] = None,
) -> PoseFrame:
    """Frame with every keypoint at (x, y); `overrides` maps index -> (x, y, c)."""
    points = [(x, y, confidence)] * count
    for index, point in (overrides or {}).items():
        points[index] = point
    return make_frame(points, timestamp_ms)


def static_sequence(length: int, **kwargs) -> list:
    """`length` identical frames 33 ms apart."""
    return [uniform_frame(timestamp_ms=i * 33.3, **kwargs) for i in range(length)]


@pytest.fixture
def reference_sequence():
    return static_sequence(10)


@pytest.fixture
def wrist_offset_pair():
    """
    Three-frame sequences where only position 5 (right_wrist in the
    smash set) is confident; the user's is shifted 0.1 to the right.
    """
    reference = [
        uniform_frame(count=10, confidence=0.1, overrides={5: (0.5, 0.5, 0.9)})
        for _ in range(3)
    ]
    user = [
        uniform_frame(count=10, confidence=0.1, overrides={5: (0.6, 0.5, 0.9)})
        for _ in range(3)
    ]
    return reference, user
