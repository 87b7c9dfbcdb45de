"""
Sequence Scorer

Aggregates per-frame scores into one overall score, weighting the
middle of the motion (presumed moment of impact) most heavily.
"""

from typing import Sequence

import numpy as np

from ..config import MIDPOINT_WEIGHT_FALLOFF


def midpoint_weights(
    length: int,
    falloff: float = MIDPOINT_WEIGHT_FALLOFF,
) -> np.ndarray:
    """
    Weight for each index of a sequence of `length` scores.

    weight(i) = 1 - (|i - mid| / mid) * falloff with mid = length / 2,
    i.e. 1.0 at the center tapering to 1 - falloff at the first frame.
    """
    if length <= 0:
        return np.zeros(0)
    mid = length / 2
    indices = np.arange(length, dtype=float)
    return 1.0 - (np.abs(indices - mid) / mid) * falloff


def weighted_score(frame_scores: Sequence[float]) -> float:
    """
    Midpoint-weighted mean of frame scores.

    Returns 0 for an empty input; a single score is returned as-is.
    """
    if len(frame_scores) == 0:
        return 0.0

    weights = midpoint_weights(len(frame_scores))
    total_weight = weights.sum()
    if total_weight <= 0:
        return 0.0

    scores = np.asarray(frame_scores, dtype=float)
    return float(np.dot(scores, weights) / total_weight)
