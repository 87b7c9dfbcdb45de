"""
API Schemas

Pydantic models for request/response validation.
"""

from .pose import (
    KeypointSchema,
    PoseFrameSchema,
    PoseDetectionRequest,
    PoseDetectionResponse,
    WebSocketMessageType,
    WebSocketMessage,
    CaptureRole,
    FrameMessage,
    StartSessionMessage,
    LanguageEnum,
    frame_to_schema,
    frame_from_schema,
)

from .analysis import (
    ShotTypeEnum,
    ComparisonDetailsSchema,
    ComparisonRequest,
    ComparisonResponse,
    AnalysisResultResponse,
    HealthResponse,
    comparison_to_response,
    analysis_to_response,
)

__all__ = [
    # Pose schemas
    "KeypointSchema",
    "PoseFrameSchema",
    "PoseDetectionRequest",
    "PoseDetectionResponse",
    "WebSocketMessageType",
    "WebSocketMessage",
    "CaptureRole",
    "FrameMessage",
    "StartSessionMessage",
    "LanguageEnum",
    "frame_to_schema",
    "frame_from_schema",
    # Comparison schemas
    "ShotTypeEnum",
    "ComparisonDetailsSchema",
    "ComparisonRequest",
    "ComparisonResponse",
    "AnalysisResultResponse",
    "HealthResponse",
    "comparison_to_response",
    "analysis_to_response",
]
