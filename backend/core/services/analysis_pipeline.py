"""
Video Comparison Pipeline

End-to-end flow for comparing two recorded attempts:
extract reference keypoints -> extract user keypoints -> compare.

Progress is reported as AnalysisProgress values passed to a caller
supplied callback; the pipeline keeps no status of its own.
"""

import logging
import math
import uuid
from datetime import datetime
from typing import Any, Callable, Optional, Union

from ..config import (
    ASSUMED_FPS,
    DEFAULT_VIDEO_DURATION_S,
    PROGRESS_COMPLETE,
    PROGRESS_REFERENCE_DONE,
    PROGRESS_USER_DONE,
)
from ..domain.analysis import AnalysisProgress, AnalysisResult, AnalysisStage, ShotType
from ..domain.pose import PoseFrame, PoseSequence
from .keypoint_producer import KeypointProducer, ProducerFactory, collect_sequence
from .pose_comparison import PoseComparisonService, resolve_shot_type

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[AnalysisProgress], None]


def estimate_total_frames(
    producer: KeypointProducer,
    source: Any,
    duration_s: Optional[float] = None,
) -> int:
    """Expected frame count: producer's estimate, else duration at the assumed fps."""
    expected = producer.expected_frames(source)
    if expected:
        return expected
    return max(1, math.floor((duration_s or DEFAULT_VIDEO_DURATION_S) * ASSUMED_FPS))


class VideoComparisonPipeline:
    """
    Compares a reference video against a user video.

    Each video is read by a fresh producer from `producer_factory`, so
    tracking state from the reference clip never leaks into the user clip.

    Usage:
        pipeline = VideoComparisonPipeline(PoseDetector)
        result = pipeline.compare_videos(
            "coach.mp4", "me.mp4", ShotType.SMASH,
            on_progress=lambda p: print(p.stage.value, p.percent),
        )
    """

    def __init__(
        self,
        producer_factory: ProducerFactory,
        comparison_service: Optional[PoseComparisonService] = None,
    ):
        self.producer_factory = producer_factory
        self.comparison_service = comparison_service or PoseComparisonService()

    def extract(
        self,
        source: Any,
        shot_type: ShotType,
        stage: AnalysisStage,
        start_percent: float,
        end_percent: float,
        on_progress: Optional[ProgressCallback] = None,
        duration_s: Optional[float] = None,
    ) -> PoseSequence:
        """Collect one sequence, reporting progress between start and end percent."""
        producer = self.producer_factory()
        try:
            total = estimate_total_frames(producer, source, duration_s)
            span = end_percent - start_percent
            processed = 0

            def report(percent: float) -> None:
                if on_progress is not None:
                    on_progress(AnalysisProgress(stage, percent, processed))

            def on_frame(_frame: PoseFrame) -> None:
                nonlocal processed
                processed += 1
                report(start_percent + min(processed / total * span, span))

            report(start_percent)
            frames = collect_sequence(producer, source, shot_type, on_frame)
            report(end_percent)
            return frames
        finally:
            producer.close()

    def compare_videos(
        self,
        reference_source: Any,
        user_source: Any,
        shot_type: Union[ShotType, str] = ShotType.SMASH,
        on_progress: Optional[ProgressCallback] = None,
        reference_duration_s: Optional[float] = None,
        user_duration_s: Optional[float] = None,
    ) -> AnalysisResult:
        """
        Extract both sequences and compare them.

        Raises:
            KeypointProducerError: If extraction fails for either video
            InvalidInputError: If either video yields no frames
        """
        shot = resolve_shot_type(shot_type)

        reference = self.extract(
            reference_source, shot, AnalysisStage.EXTRACTING_REFERENCE,
            0, PROGRESS_REFERENCE_DONE, on_progress, reference_duration_s,
        )
        user = self.extract(
            user_source, shot, AnalysisStage.EXTRACTING_USER,
            PROGRESS_REFERENCE_DONE, PROGRESS_USER_DONE, on_progress, user_duration_s,
        )

        if on_progress is not None:
            on_progress(AnalysisProgress(AnalysisStage.COMPARING, PROGRESS_USER_DONE))

        comparison = self.comparison_service.compare_poses(reference, user, shot)
        logger.info(
            f"Compared {len(reference)} reference / {len(user)} user frames: "
            f"score {comparison.overall_score:.1f}"
        )

        if on_progress is not None:
            on_progress(AnalysisProgress(AnalysisStage.COMPLETED, PROGRESS_COMPLETE))

        return AnalysisResult(
            id=str(uuid.uuid4()),
            pose_data=user,
            score=comparison.overall_score,
            feedback=list(comparison.feedback),
            recommendations=list(comparison.recommendations),
            created_at=datetime.now(),
            comparison=comparison,
        )
