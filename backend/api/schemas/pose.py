"""
Pose API Schemas

Pydantic models for keypoint/frame requests and responses,
including the WebSocket streaming protocol.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from core.domain.pose import Keypoint, PoseFrame, KEYPOINT_NAMES
from core.domain.analysis import ShotType


class KeypointSchema(BaseModel):
    """
    Single body keypoint.

    Coordinates are normalized (0.0 to 1.0).
    Frontend multiplies by canvas dimensions to get pixel positions.
    """
    x: float = Field(..., ge=0.0, le=1.0, description="Horizontal position (0=left, 1=right)")
    y: float = Field(..., ge=0.0, le=1.0, description="Vertical position (0=top, 1=bottom)")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Detection confidence")
    name: Optional[str] = Field(None, description="Template landmark name (e.g., 'left_shoulder')")

    class Config:
        json_schema_extra = {
            "example": {
                "x": 0.45,
                "y": 0.32,
                "confidence": 0.95,
                "name": "left_shoulder"
            }
        }


class PoseFrameSchema(BaseModel):
    """
    All keypoints of one frame, in skeleton-template order.

    Position in the list is the keypoint's identity; `name` is informational.
    """
    keypoints: List[KeypointSchema] = Field(..., description="Keypoints in template order")
    timestamp_ms: float = Field(0.0, ge=0.0, description="Milliseconds since sequence start")
    shot_type: Optional[str] = Field(None, description="Optional shot tag")

    class Config:
        json_schema_extra = {
            "example": {
                "keypoints": [
                    {"x": 0.5, "y": 0.2, "confidence": 0.99, "name": "nose"}
                ],
                "timestamp_ms": 33.3,
                "shot_type": "smash"
            }
        }


class PoseDetectionRequest(BaseModel):
    """
    Request to detect keypoints in a base64-encoded image.
    """
    image_base64: str = Field(..., description="Base64 encoded JPEG/PNG image")
    timestamp_ms: float = Field(0.0, ge=0.0, description="Optional timestamp")


class PoseDetectionResponse(BaseModel):
    """
    Response from pose detection.
    """
    success: bool = Field(..., description="Whether detection succeeded")
    pose: Optional[PoseFrameSchema] = Field(None, description="Detected pose (null if no person found)")
    error: Optional[str] = Field(None, description="Error message if failed")
    processing_time_ms: float = Field(..., description="Time taken to process in milliseconds")


# =============================================================================
# WebSocket Message Schemas
# =============================================================================

class WebSocketMessageType(str, Enum):
    """Types of WebSocket messages."""
    # Client -> Server
    START_SESSION = "start_session"    # Choose shot type / language
    FRAME = "frame"                    # Send video frame for a role
    END_SESSION = "end_session"        # Compare buffered sequences

    # Server -> Client
    SESSION_STARTED = "session_started"
    POSE_RESULT = "pose_result"        # Keypoints for one frame
    COMPARISON_RESULT = "comparison_result"
    ERROR = "error"
    SESSION_ENDED = "session_ended"


class LanguageEnum(str, Enum):
    """Feedback languages."""
    KO = "ko"
    EN = "en"


class CaptureRole(str, Enum):
    """Which sequence a streamed frame belongs to."""
    REFERENCE = "reference"
    USER = "user"


class WebSocketMessage(BaseModel):
    """
    Base WebSocket message structure.

    All WebSocket communication uses this format.
    """
    type: WebSocketMessageType = Field(..., description="Message type")
    data: dict = Field(default_factory=dict, description="Message payload")
    timestamp: int = Field(..., description="Unix timestamp in milliseconds")


class FrameMessage(BaseModel):
    """
    WebSocket payload containing a video frame.
    """
    image_base64: str = Field(..., description="Base64 encoded frame")
    role: CaptureRole = Field(CaptureRole.USER, description="Sequence this frame belongs to")
    frame_number: int = Field(0, ge=0, description="Frame sequence number")
    timestamp_ms: float = Field(0.0, ge=0.0, description="Milliseconds since capture start")


class StartSessionMessage(BaseModel):
    """WebSocket payload opening a comparison session."""
    shot_type: str = Field("smash", description="Shot type; unknown values use smash")
    language: LanguageEnum = Field(LanguageEnum.KO, description="Feedback language")


# =============================================================================
# Conversions
# =============================================================================

def keypoint_name(index: int) -> Optional[str]:
    return KEYPOINT_NAMES[index] if index < len(KEYPOINT_NAMES) else None


def frame_to_schema(frame: PoseFrame) -> PoseFrameSchema:
    """Convert a domain PoseFrame to its API schema."""
    return PoseFrameSchema(
        keypoints=[
            KeypointSchema(
                x=kp.x,
                y=kp.y,
                confidence=kp.confidence,
                name=keypoint_name(i),
            )
            for i, kp in enumerate(frame.keypoints)
        ],
        timestamp_ms=frame.timestamp_ms,
        shot_type=frame.shot_type.value if frame.shot_type else None,
    )


def frame_from_schema(schema: PoseFrameSchema) -> PoseFrame:
    """Convert an API frame to the domain model (names are ignored)."""
    return PoseFrame(
        keypoints=[
            Keypoint(x=kp.x, y=kp.y, confidence=kp.confidence)
            for kp in schema.keypoints
        ],
        timestamp_ms=schema.timestamp_ms,
        shot_type=ShotType.parse(schema.shot_type),
    )
