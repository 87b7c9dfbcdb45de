"""
Pose Detector Service

MediaPipe Pose implementation of the keypoint producer contract.
Handles all MediaPipe/OpenCV-specific logic and converts results to
our domain models.

Note: MediaPipe's type stubs are incomplete, so we use type: ignore comments
for mp.solutions access. This is a known issue with the mediapipe package.
"""

import base64
from typing import Any, Generator, List, Optional

import cv2
import mediapipe as mp
import numpy as np

from ..config import (
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
    MODEL_COMPLEXITY,
)
from ..domain.pose import Keypoint, PoseFrame
from .keypoint_producer import CompleteCallback, FrameCallback, KeypointProducer


class PoseDetector(KeypointProducer):
    """
    Detects body keypoints using MediaPipe Pose.

    MediaPipe Pose provides 33 landmarks; each becomes a Keypoint with
    its visibility used as confidence.

    Usage:
        with PoseDetector() as detector:
            frame = detector.detect_pose(image)

            # Stream a video through the producer contract
            detector.stream("smash.mp4", on_frame, on_complete)
    """

    # MediaPipe solutions (type stubs are incomplete, so we store as Any)
    _mp_pose: Any

    def __init__(
        self,
        model_complexity: int = MODEL_COMPLEXITY,
        min_detection_confidence: float = MIN_DETECTION_CONFIDENCE,
        min_tracking_confidence: float = MIN_TRACKING_CONFIDENCE,
        static_image_mode: bool = False,
    ):
        """
        Initialize the pose detector.

        Args:
            model_complexity: 0, 1, or 2. Higher = more accurate but slower.
            min_detection_confidence: Minimum confidence for person detection.
            min_tracking_confidence: Minimum confidence for landmark tracking.
            static_image_mode: Treat every input as an unrelated image.
        """
        # MediaPipe's type stubs don't include solutions, but it exists at runtime
        self._mp_pose = mp.solutions.pose  # type: ignore[attr-defined]

        self.pose = self._mp_pose.Pose(
            static_image_mode=static_image_mode,
            model_complexity=model_complexity,
            smooth_landmarks=True,
            enable_segmentation=False,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )

    def __enter__(self) -> "PoseDetector":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any]
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release MediaPipe resources."""
        self.pose.close()

    # -------------------------------------------------------------------------
    # Core Detection Methods
    # -------------------------------------------------------------------------

    def detect_pose(
        self,
        image: np.ndarray,
        timestamp_ms: float = 0.0,
    ) -> Optional[PoseFrame]:
        """
        Detect keypoints in a single image.

        Args:
            image: BGR image (OpenCV format)
            timestamp_ms: Milliseconds since the start of the sequence

        Returns:
            PoseFrame with 33 keypoints, or None if no person detected
        """
        # MediaPipe expects RGB
        if len(image.shape) == 3 and image.shape[2] == 3:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        else:
            image_rgb = image

        results = self.pose.process(image_rgb)

        if not results.pose_landmarks:
            return None

        return PoseFrame(
            keypoints=self._convert_landmarks(results.pose_landmarks.landmark),
            timestamp_ms=timestamp_ms,
        )

    def process_video(
        self,
        video_path: str,
        max_frames: Optional[int] = None,
        frame_skip: int = 1,
    ) -> Generator[PoseFrame, None, None]:
        """
        Process a video file and yield pose frames.

        Frames where no person is detected are skipped.

        Args:
            video_path: Path to video file
            max_frames: Maximum frames to yield (None = all)
            frame_skip: Process every Nth frame (1 = all, 2 = every other, etc.)
        """
        cap = cv2.VideoCapture(video_path)

        if not cap.isOpened():
            raise ValueError(f"Could not open video: {video_path}")

        fps = cap.get(cv2.CAP_PROP_FPS)
        frame_count = 0
        processed_count = 0

        try:
            while True:
                ret, frame = cap.read()

                if not ret:
                    break

                if frame_count % frame_skip != 0:
                    frame_count += 1
                    continue

                timestamp_ms = (frame_count / fps) * 1000 if fps > 0 else 0.0

                pose_frame = self.detect_pose(frame, timestamp_ms=timestamp_ms)

                if pose_frame:
                    yield pose_frame
                    processed_count += 1

                frame_count += 1

                if max_frames and processed_count >= max_frames:
                    break

        finally:
            cap.release()

    def stream(
        self,
        source: Any,
        on_frame: FrameCallback,
        on_complete: CompleteCallback,
    ) -> None:
        """Keypoint producer contract: stream a video file frame by frame."""
        for pose_frame in self.process_video(str(source)):
            on_frame(pose_frame)
        on_complete()

    def expected_frames(self, source: Any) -> Optional[int]:
        """Frame count reported by the container, if any."""
        cap = cv2.VideoCapture(str(source))
        try:
            if not cap.isOpened():
                return None
            count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
            return count if count > 0 else None
        finally:
            cap.release()

    def detect_from_base64(
        self,
        base64_image: str,
        timestamp_ms: float = 0.0,
    ) -> Optional[PoseFrame]:
        """
        Detect keypoints in a base64-encoded JPEG/PNG image.

        Returns:
            PoseFrame or None if the image can't be decoded or no person found
        """
        image_bytes = base64.b64decode(base64_image)
        nparr = np.frombuffer(image_bytes, np.uint8)
        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if image is None:
            return None

        return self.detect_pose(image, timestamp_ms)

    # -------------------------------------------------------------------------
    # Private Helper Methods
    # -------------------------------------------------------------------------

    def _convert_landmarks(self, mp_landmarks: Any) -> List[Keypoint]:
        """Convert MediaPipe landmarks to keypoints clipped to the unit square."""
        return [
            Keypoint(
                x=float(np.clip(mp_lm.x, 0.0, 1.0)),
                y=float(np.clip(mp_lm.y, 0.0, 1.0)),
                confidence=float(np.clip(mp_lm.visibility, 0.0, 1.0)),
            )
            for mp_lm in mp_landmarks
        ]
