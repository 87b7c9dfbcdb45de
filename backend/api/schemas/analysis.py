"""
Comparison API Schemas

Pydantic models for pose comparison requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum
from datetime import datetime

from core.domain.analysis import AnalysisResult, ComparisonResult
from .pose import LanguageEnum, PoseFrameSchema, frame_to_schema


class ShotTypeEnum(str, Enum):
    """Shot types for API documentation."""
    SMASH = "smash"
    SERVE = "serve"
    CLEAR = "clear"
    DROP = "drop"
    NET = "net"


class ComparisonDetailsSchema(BaseModel):
    """
    Detail metrics of a comparison, each 0-100.
    """
    position_accuracy: float = Field(..., ge=0, le=100, description="Keypoint position match (smash set)")
    timing: float = Field(..., ge=0, le=100, description="Sequence length similarity")
    stability: float = Field(..., ge=0, le=100, description="Smoothness of the user motion")


class ComparisonRequest(BaseModel):
    """
    Request to compare two keypoint sequences.

    Used when the client has already run pose estimation.
    """
    reference: List[PoseFrameSchema] = Field(..., description="Reference motion frames")
    user: List[PoseFrameSchema] = Field(..., description="User motion frames")
    shot_type: str = Field("smash", description="Shot type; unrecognized values use smash")
    language: LanguageEnum = Field(LanguageEnum.KO, description="Feedback language")

    class Config:
        json_schema_extra = {
            "example": {
                "reference": [
                    {"keypoints": [{"x": 0.5, "y": 0.5, "confidence": 0.9}], "timestamp_ms": 0}
                ],
                "user": [
                    {"keypoints": [{"x": 0.6, "y": 0.5, "confidence": 0.9}], "timestamp_ms": 0}
                ],
                "shot_type": "smash",
                "language": "en"
            }
        }


class ComparisonResponse(BaseModel):
    """
    Result of comparing a user motion against a reference.
    """
    overall_score: float = Field(..., ge=0, le=100, description="Midpoint-weighted overall score")
    key_point_scores: dict[str, float] = Field(default_factory=dict, description="Keypoint -> average score")
    feedback: List[str] = Field(default_factory=list, description="Feedback messages in display order")
    recommendations: List[str] = Field(default_factory=list, description="Practice recommendations")
    details: ComparisonDetailsSchema = Field(..., description="Detail metrics")

    class Config:
        json_schema_extra = {
            "example": {
                "overall_score": 90.0,
                "key_point_scores": {"left_shoulder": 90.0},
                "feedback": ["🎯 Excellent! Your form is very accurate."],
                "recommendations": [],
                "details": {"position_accuracy": 90.0, "timing": 100.0, "stability": 100.0}
            }
        }


class AnalysisResultResponse(BaseModel):
    """
    Complete analysis of an uploaded attempt.
    """
    id: str = Field(..., description="Unique analysis ID")
    created_at: datetime = Field(..., description="When analysis was performed")
    shot_type: ShotTypeEnum = Field(..., description="Shot analyzed")
    score: float = Field(..., ge=0, le=100, description="Overall score")
    feedback: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    key_point_scores: dict[str, float] = Field(default_factory=dict)
    details: Optional[ComparisonDetailsSchema] = Field(None, description="Detail metrics")
    pose_data: List[PoseFrameSchema] = Field(default_factory=list, description="User keypoint sequence")


class HealthResponse(BaseModel):
    """
    Health check response.
    """
    status: str = Field("healthy", description="Service status")
    version: str = Field(..., description="API version")
    mediapipe_available: bool = Field(..., description="Whether MediaPipe is working")


# =============================================================================
# Conversions
# =============================================================================

def comparison_to_response(result: ComparisonResult) -> ComparisonResponse:
    """Convert a domain ComparisonResult to the API response schema."""
    return ComparisonResponse(
        overall_score=result.overall_score,
        key_point_scores=dict(result.key_point_scores),
        feedback=list(result.feedback),
        recommendations=list(result.recommendations),
        details=ComparisonDetailsSchema(
            position_accuracy=result.details.position_accuracy,
            timing=result.details.timing,
            stability=result.details.stability,
        ),
    )


def analysis_to_response(result: AnalysisResult, shot_type: str) -> AnalysisResultResponse:
    """Convert a domain AnalysisResult to the API response schema."""
    comparison = result.comparison
    return AnalysisResultResponse(
        id=result.id,
        created_at=result.created_at,
        shot_type=ShotTypeEnum(shot_type),
        score=result.score,
        feedback=result.feedback,
        recommendations=result.recommendations,
        key_point_scores=dict(comparison.key_point_scores) if comparison else {},
        details=comparison_to_response(comparison).details if comparison else None,
        pose_data=[frame_to_schema(frame) for frame in result.pose_data],
    )
