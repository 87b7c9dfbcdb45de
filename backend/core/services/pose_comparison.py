"""
Pose Comparison Service

Main entry point for comparing a user's motion against a reference
motion. Wires the comparison stages together:

    normalize -> compare frames -> aggregate -> generate feedback

Each stage is a pure function of its inputs. The service holds only
configuration, so one instance can be shared between callers as long
as each call owns its input sequences.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from ..config import (
    CONFIDENCE_THRESHOLD,
    DEFAULT_LANGUAGE,
    SCORE_MAX,
    SCORE_MIN,
    TARGET_FRAMES,
)
from ..domain.analysis import ComparisonDetails, ComparisonResult, ShotType
from ..domain.errors import InvalidInputError
from ..domain.pose import PoseSequence
from .detail_metrics import DetailMetrics
from .feedback import FeedbackGenerator
from .frame_comparator import FrameComparator, important_keypoints_for
from .sequence_scorer import weighted_score
from .timeline import normalize_timeline

logger = logging.getLogger(__name__)


@dataclass
class SequenceComparison:
    """Per-frame scores and per-keypoint score streams of a sequence pair."""
    frame_scores: List[float] = field(default_factory=list)
    key_point_streams: Dict[str, List[float]] = field(default_factory=dict)


def clamp_score(score: float) -> float:
    """Clamp a score into [0, 100]."""
    return float(np.clip(score, SCORE_MIN, SCORE_MAX))


def resolve_shot_type(value: Union[ShotType, str, None]) -> ShotType:
    """Parse a shot type, falling back to smash for unrecognized values."""
    shot_type = ShotType.parse(value)
    if shot_type is None:
        logger.warning(f"Unrecognized shot type {value!r}, falling back to smash")
        return ShotType.SMASH
    return shot_type


# =============================================================================
# Stages
# =============================================================================

def compare_sequences(
    reference: PoseSequence,
    user: PoseSequence,
    important_keypoints: Sequence[str],
    comparator: FrameComparator,
) -> SequenceComparison:
    """Compare frames pairwise over the shorter of the two sequences."""
    result = SequenceComparison()

    for ref_frame, user_frame in zip(reference, user):
        frame = comparator.compare(ref_frame, user_frame, important_keypoints)
        result.frame_scores.append(frame.score)
        for name, score in frame.per_keypoint.items():
            result.key_point_streams.setdefault(name, []).append(score)

    return result


def average_key_point_scores(streams: Dict[str, List[float]]) -> Dict[str, float]:
    """Average each keypoint's score stream independently."""
    return {
        name: clamp_score(sum(scores) / len(scores))
        for name, scores in streams.items()
        if scores
    }


# =============================================================================
# Service
# =============================================================================

class PoseComparisonService:
    """
    Compares two pose sequences and produces a ComparisonResult.

    Usage:
        service = PoseComparisonService()
        result = service.compare_poses(reference, user, ShotType.SMASH)
        print(f"Overall score: {result.overall_score:.1f}")
    """

    def __init__(
        self,
        target_frames: int = TARGET_FRAMES,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
        language: str = DEFAULT_LANGUAGE,
    ):
        self.target_frames = target_frames
        self.comparator = FrameComparator(confidence_threshold)
        self.detail_metrics = DetailMetrics(confidence_threshold, self.comparator)
        self.feedback_generator = FeedbackGenerator(language)

    def compare_poses(
        self,
        reference: PoseSequence,
        user: PoseSequence,
        shot_type: Union[ShotType, str] = ShotType.SMASH,
    ) -> ComparisonResult:
        """
        Compare a user motion against a reference motion.

        Args:
            reference: Reference (coach/pro) frames
            user: User-performed frames
            shot_type: Shot being compared; unrecognized values use smash

        Returns:
            ComparisonResult with every score in [0, 100]

        Raises:
            InvalidInputError: If either sequence is empty
        """
        if not reference or not user:
            raise InvalidInputError()

        shot = resolve_shot_type(shot_type)

        # 1. Normalize timelines
        normalized_reference = normalize_timeline(reference, self.target_frames)
        normalized_user = normalize_timeline(user, self.target_frames)
        logger.debug(
            f"Comparing {len(normalized_reference)} reference frames "
            f"with {len(normalized_user)} user frames ({shot.value})"
        )

        # 2. Frame-by-frame comparison
        comparison = compare_sequences(
            normalized_reference,
            normalized_user,
            important_keypoints_for(shot),
            self.comparator,
        )

        # 3. Aggregate
        overall_score = clamp_score(weighted_score(comparison.frame_scores))
        key_point_scores = average_key_point_scores(comparison.key_point_streams)

        raw_details = self.detail_metrics.analyze(normalized_reference, normalized_user)
        details = ComparisonDetails(
            position_accuracy=clamp_score(raw_details.position_accuracy),
            timing=clamp_score(raw_details.timing),
            stability=clamp_score(raw_details.stability),
        )

        # 4. Feedback
        feedback, recommendations = self.feedback_generator.generate(
            key_point_scores, details, shot
        )

        return ComparisonResult(
            overall_score=overall_score,
            key_point_scores=key_point_scores,
            feedback=feedback,
            recommendations=recommendations,
            details=details,
        )


def compare_poses(
    reference: PoseSequence,
    user: PoseSequence,
    shot_type: Union[ShotType, str] = ShotType.SMASH,
    language: Optional[str] = None,
) -> ComparisonResult:
    """Convenience wrapper using default settings."""
    service = PoseComparisonService(language=language or DEFAULT_LANGUAGE)
    return service.compare_poses(reference, user, shot_type)
