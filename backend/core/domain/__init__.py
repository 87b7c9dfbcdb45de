"""
Domain Models

Pure data structures for badminton pose comparison.
No external dependencies - just Python dataclasses and enums.
"""

from .pose import Keypoint, PoseFrame, PoseSequence, BodyPart, KEYPOINT_NAMES
from .analysis import (
    ShotType,
    ComparisonDetails,
    ComparisonResult,
    AnalysisResult,
    AnalysisStage,
    AnalysisProgress,
)
from .errors import InvalidInputError, KeypointProducerError

__all__ = [
    "Keypoint",
    "PoseFrame",
    "PoseSequence",
    "BodyPart",
    "KEYPOINT_NAMES",
    "ShotType",
    "ComparisonDetails",
    "ComparisonResult",
    "AnalysisResult",
    "AnalysisStage",
    "AnalysisProgress",
    "InvalidInputError",
    "KeypointProducerError",
]
