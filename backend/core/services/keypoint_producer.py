"""
Keypoint Producer Contract

Interface between the comparison core and whatever estimates keypoints
from pixels (MediaPipe, a mobile SDK, a recorded fixture...).

A producer streams frames one at a time through `on_frame` and calls
`on_complete` exactly once when the source is exhausted. Failing
mid-stream is signalled by raising from `stream()`. The core only
accepts fully materialized sequences: `collect_sequence` buffers the
stream and discards the buffer on failure.

Producers may carry tracking state between frames, so one producer
instance reads one source. Callers that read several sources take a
factory and build a fresh producer per source.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from ..domain.analysis import ShotType
from ..domain.errors import KeypointProducerError
from ..domain.pose import PoseFrame, PoseSequence

logger = logging.getLogger(__name__)

FrameCallback = Callable[[PoseFrame], None]
CompleteCallback = Callable[[], None]


class KeypointProducer(ABC):
    """Abstract base for any keypoint estimator."""

    @abstractmethod
    def stream(
        self,
        source: Any,
        on_frame: FrameCallback,
        on_complete: CompleteCallback,
    ) -> None:
        """
        Emit one PoseFrame per analyzed frame of `source`, then call
        `on_complete` once. Raise on failure.
        """
        ...

    def expected_frames(self, source: Any) -> Optional[int]:
        """Best estimate of how many frames `source` will yield, if known."""
        return None

    def close(self) -> None:
        """Release any resources held by the producer."""


ProducerFactory = Callable[[], KeypointProducer]


def collect_sequence(
    producer: KeypointProducer,
    source: Any,
    shot_type: Optional[ShotType] = None,
    on_frame: Optional[FrameCallback] = None,
) -> PoseSequence:
    """
    Run a producer to completion and return the collected frames.

    Args:
        producer: Keypoint producer to drive
        source: Whatever the producer reads (path, URI, ...)
        shot_type: Tag every collected frame with this shot type
        on_frame: Optional observer called after each buffered frame

    Returns:
        Frames in the order the producer emitted them

    Raises:
        KeypointProducerError: If the producer fails or never completes
    """
    frames: List[PoseFrame] = []
    completed = False

    def handle_frame(frame: PoseFrame) -> None:
        if shot_type is not None:
            frame = PoseFrame(
                keypoints=frame.keypoints,
                timestamp_ms=frame.timestamp_ms,
                shot_type=shot_type,
            )
        frames.append(frame)
        if on_frame is not None:
            on_frame(frame)

    def handle_complete() -> None:
        nonlocal completed
        completed = True

    try:
        producer.stream(source, handle_frame, handle_complete)
    except Exception as e:
        logger.error(f"Keypoint producer failed after {len(frames)} frames: {e}")
        raise KeypointProducerError(f"Keypoint extraction failed: {e}") from e

    if not completed:
        raise KeypointProducerError("Keypoint producer ended without completion signal")

    logger.info(f"Collected {len(frames)} frames from {source}")
    return frames
