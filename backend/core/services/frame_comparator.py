"""
Frame Comparator

Scores one reference frame against one user frame over the keypoints
that matter for a shot type.

Keypoints are matched by position: the k-th name of an importance set is
scored against keypoints[k] of both frames, not against the landmark of
that name in the skeleton template. Scores therefore depend on the order
of each importance set, and that order must not be changed or replaced by
a name lookup without treating it as a scoring change.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import CONFIDENCE_THRESHOLD, SCORE_MAX
from ..domain.analysis import ShotType
from ..domain.pose import PoseFrame


# -----------------------------------------------------------------------------
# Importance sets (ordered; see module docstring)
# -----------------------------------------------------------------------------

SMASH_KEYPOINTS: List[str] = [
    "left_shoulder", "right_shoulder",
    "left_elbow", "right_elbow",
    "left_wrist", "right_wrist",
    "left_hip", "right_hip",
    "left_knee", "right_knee",
]

SERVE_KEYPOINTS: List[str] = [
    "left_shoulder", "right_shoulder",
    "left_elbow", "right_elbow",
    "left_wrist", "right_wrist",
    "left_hip", "right_hip",
]

CLEAR_KEYPOINTS: List[str] = [
    "left_shoulder", "right_shoulder",
    "left_elbow", "right_elbow",
    "left_wrist", "right_wrist",
]

IMPORTANT_KEYPOINTS: Dict[ShotType, List[str]] = {
    ShotType.SMASH: SMASH_KEYPOINTS,
    ShotType.SERVE: SERVE_KEYPOINTS,
    ShotType.CLEAR: CLEAR_KEYPOINTS,
}


def important_keypoints_for(shot_type: Optional[ShotType]) -> List[str]:
    """Importance set for a shot type; drop, net and unknown use the smash set."""
    if shot_type is None:
        return SMASH_KEYPOINTS
    return IMPORTANT_KEYPOINTS.get(shot_type, SMASH_KEYPOINTS)


@dataclass
class FrameComparison:
    """Score of one frame pair plus the per-keypoint scores that qualified."""
    score: float = 0.0
    per_keypoint: Dict[str, float] = field(default_factory=dict)


class FrameComparator:
    """
    Compares frames keypoint by keypoint.

    Per-keypoint score is 100 minus 100 times the Euclidean distance in
    normalized coordinates, floored at 0. The frame score is the mean of
    the keypoints where both frames are confident; 0 when none are.

    Usage:
        comparator = FrameComparator()
        result = comparator.compare(ref_frame, user_frame, SMASH_KEYPOINTS)
        print(result.score, result.per_keypoint)
    """

    def __init__(self, confidence_threshold: float = CONFIDENCE_THRESHOLD):
        self.confidence_threshold = confidence_threshold

    @staticmethod
    def keypoint_score(distance: float) -> float:
        """Convert a normalized distance to a 0-100 score."""
        return max(0.0, SCORE_MAX - distance * SCORE_MAX)

    def compare(
        self,
        ref_frame: PoseFrame,
        user_frame: PoseFrame,
        important_keypoints: Sequence[str],
    ) -> FrameComparison:
        per_keypoint: Dict[str, float] = {}
        limit = min(len(ref_frame.keypoints), len(user_frame.keypoints))

        for index, name in enumerate(important_keypoints):
            if index >= limit:
                break

            ref_kp = ref_frame.keypoints[index]
            user_kp = user_frame.keypoints[index]

            if not (ref_kp.is_confident(self.confidence_threshold)
                    and user_kp.is_confident(self.confidence_threshold)):
                continue

            per_keypoint[name] = self.keypoint_score(ref_kp.distance_to(user_kp))

        if not per_keypoint:
            return FrameComparison()

        score = sum(per_keypoint.values()) / len(per_keypoint)
        return FrameComparison(score=score, per_keypoint=per_keypoint)
