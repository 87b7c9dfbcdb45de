"""
Services Layer

Business logic for badminton pose comparison.

The MediaPipe-backed PoseDetector lives in `core.services.pose_detector`
and is imported from there, so the comparison core stays independent of
the keypoint estimation technology.
"""

from .timeline import normalize_timeline
from .frame_comparator import FrameComparator, FrameComparison, important_keypoints_for
from .sequence_scorer import weighted_score
from .detail_metrics import DetailMetrics
from .feedback import FeedbackGenerator
from .pose_comparison import PoseComparisonService, compare_poses
from .keypoint_producer import KeypointProducer, collect_sequence
from .analysis_pipeline import VideoComparisonPipeline

__all__ = [
    "normalize_timeline",
    "FrameComparator",
    "FrameComparison",
    "important_keypoints_for",
    "weighted_score",
    "DetailMetrics",
    "FeedbackGenerator",
    "PoseComparisonService",
    "compare_poses",
    "KeypointProducer",
    "collect_sequence",
    "VideoComparisonPipeline",
]
