"""
Detail Metrics Engine

Derives the three detail summaries of a comparison:
- position accuracy (reference vs user, fixed smash keypoint set)
- timing (duration similarity from sequence lengths)
- stability (user motion only, from finite-difference kinematics)

All values are 0-100.
"""

from typing import Optional

from ..config import (
    CONFIDENCE_THRESHOLD,
    MIN_STABILITY_FRAMES,
    SCORE_MAX,
    STABILITY_SCALE,
)
from ..domain.analysis import ComparisonDetails
from ..domain.pose import PoseFrame, PoseSequence
from .frame_comparator import FrameComparator, SMASH_KEYPOINTS


class DetailMetrics:
    """
    Computes detail metrics for a pair of (already normalized) sequences.

    Usage:
        metrics = DetailMetrics()
        details = metrics.analyze(reference, user)
        print(details.stability)
    """

    def __init__(
        self,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
        comparator: Optional[FrameComparator] = None,
    ):
        self.confidence_threshold = confidence_threshold
        self.comparator = comparator or FrameComparator(confidence_threshold)

    def analyze(
        self,
        reference: PoseSequence,
        user: PoseSequence,
    ) -> ComparisonDetails:
        return ComparisonDetails(
            position_accuracy=self.position_accuracy(reference, user),
            timing=self.timing(reference, user),
            stability=self.stability(user),
        )

    # -------------------------------------------------------------------------
    # Position accuracy
    # -------------------------------------------------------------------------

    def position_accuracy(
        self,
        reference: PoseSequence,
        user: PoseSequence,
    ) -> float:
        """
        Mean frame score over the overlapping frames.

        Always scored on the smash keypoint set, whatever the shot type.
        """
        min_length = min(len(reference), len(user))
        if min_length == 0:
            return 0.0

        total = sum(
            self.comparator.compare(reference[i], user[i], SMASH_KEYPOINTS).score
            for i in range(min_length)
        )
        return total / min_length

    # -------------------------------------------------------------------------
    # Timing
    # -------------------------------------------------------------------------

    @staticmethod
    def timing(reference: PoseSequence, user: PoseSequence) -> float:
        """
        Ratio of the shorter to the longer sequence length, as a percentage.

        This is a duration proxy only; it says nothing about phase
        alignment inside the clip.
        """
        longest = max(len(reference), len(user))
        if longest == 0:
            return 0.0
        return min(len(reference), len(user)) / longest * SCORE_MAX

    # -------------------------------------------------------------------------
    # Stability
    # -------------------------------------------------------------------------

    def stability(self, user: PoseSequence) -> float:
        """
        Smoothness of the user motion.

        For every interior frame, averages |v2 - v1| over confident
        keypoints, where v1 and v2 are the displacements into and out of
        that frame. The mean of those variations costs STABILITY_SCALE
        points per unit.
        """
        if len(user) < MIN_STABILITY_FRAMES:
            return SCORE_MAX

        variations = [
            self.frame_variation(user[i - 1], user[i], user[i + 1])
            for i in range(1, len(user) - 1)
        ]
        avg_variation = sum(variations) / len(variations)

        return max(0.0, SCORE_MAX - avg_variation * STABILITY_SCALE)

    def frame_variation(
        self,
        prev: PoseFrame,
        curr: PoseFrame,
        next_: PoseFrame,
    ) -> float:
        """Mean acceleration magnitude across keypoints confident in all three frames."""
        count = min(len(prev.keypoints), len(curr.keypoints), len(next_.keypoints))
        accelerations = []

        for i in range(count):
            prev_kp = prev.keypoints[i]
            curr_kp = curr.keypoints[i]
            next_kp = next_.keypoints[i]

            if not all(
                kp.is_confident(self.confidence_threshold)
                for kp in (prev_kp, curr_kp, next_kp)
            ):
                continue

            velocity1 = prev_kp.distance_to(curr_kp)
            velocity2 = curr_kp.distance_to(next_kp)
            accelerations.append(abs(velocity2 - velocity1))

        if not accelerations:
            return 0.0
        return sum(accelerations) / len(accelerations)
