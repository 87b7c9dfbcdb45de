"""
Comparison Domain Models

Data structures for pose comparison results, shot types,
and staged analysis progress.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .pose import PoseSequence


class ShotType(Enum):
    """
    Badminton shot types.

    Selects which keypoints are diagnostic for scoring and which
    recommendation branch fires.
    """
    SMASH = "smash"
    SERVE = "serve"
    CLEAR = "clear"
    DROP = "drop"
    NET = "net"

    @classmethod
    def parse(cls, value: Union["ShotType", str, None]) -> Optional["ShotType"]:
        """Return the matching shot type, or None if the value is unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class ComparisonDetails:
    """
    Detail metrics, each 0-100.

    Attributes:
        position_accuracy: Mean frame match over the fixed smash keypoint set
        timing: Length ratio of the two sequences (not phase alignment)
        stability: Smoothness of the user motion (low acceleration = stable)
    """
    position_accuracy: float
    timing: float
    stability: float


@dataclass(frozen=True)
class ComparisonResult:
    """
    Outcome of comparing a user motion against a reference motion.

    Produced once per comparison and owned by the caller. Collections are
    frozen on construction: scores become a read-only mapping and the
    message lists become tuples.
    """
    overall_score: float
    key_point_scores: Mapping[str, float]
    feedback: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    details: ComparisonDetails

    def __post_init__(self) -> None:
        object.__setattr__(self, "key_point_scores", MappingProxyType(dict(self.key_point_scores)))
        object.__setattr__(self, "feedback", tuple(self.feedback))
        object.__setattr__(self, "recommendations", tuple(self.recommendations))


@dataclass
class AnalysisResult:
    """
    Presentation aggregate for one analyzed attempt.

    `id` and `created_at` are assigned by the presentation layer,
    not by the comparison core.
    """
    id: str
    pose_data: PoseSequence
    score: float
    feedback: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    comparison: Optional[ComparisonResult] = None


class AnalysisStage(Enum):
    """Stages of the video comparison pipeline."""
    EXTRACTING_REFERENCE = "extracting_reference"
    EXTRACTING_USER = "extracting_user"
    COMPARING = "comparing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class AnalysisProgress:
    """A progress report emitted by the pipeline (percent 0-100)."""
    stage: AnalysisStage
    percent: float
    frames_processed: int = 0
