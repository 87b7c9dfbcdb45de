"""
Pose Domain Models

Data structures for representing body keypoints produced by an
external keypoint estimator (MediaPipe by default).

Keypoint order inside a frame is positional: index i is the landmark
at position i of the skeleton template. There is no name lookup inside
a frame.

MediaPipe Pose template (33 landmarks):
https://developers.google.com/mediapipe/solutions/vision/pose_landmarker
"""

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .analysis import ShotType


class BodyPart(IntEnum):
    """MediaPipe Pose landmark indices (full 33-point template)."""
    # Face
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10

    # Upper body
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16

    # Hands
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22

    # Lower body
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28

    # Feet
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


# Snake-case landmark names in template order
KEYPOINT_NAMES: List[str] = [part.name.lower() for part in BodyPart]


@dataclass(frozen=True)
class Keypoint:
    """
    A single body keypoint in normalized image coordinates.

    Attributes:
        x: Horizontal position (0.0 = left edge, 1.0 = right edge)
        y: Vertical position (0.0 = top edge, 1.0 = bottom edge)
        confidence: Detector certainty (0.0 to 1.0)
    """
    x: float
    y: float
    confidence: float

    def is_confident(self, threshold: float) -> bool:
        """True when confidence is strictly above threshold."""
        return self.confidence > threshold

    def distance_to(self, other: "Keypoint") -> float:
        """Euclidean distance in normalized 2D coordinates."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class PoseFrame:
    """
    All keypoints for one instant of a recorded motion.

    Attributes:
        keypoints: Keypoints in skeleton-template order (33 for MediaPipe)
        timestamp_ms: Milliseconds since the start of the sequence
        shot_type: Optional tag of the shot this frame belongs to
    """
    keypoints: List[Keypoint] = field(default_factory=list)
    timestamp_ms: float = 0.0
    shot_type: Optional["ShotType"] = None


# Time-ordered frames of one motion; never re-sorted.
PoseSequence = List[PoseFrame]
