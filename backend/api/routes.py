"""
REST API Routes

FastAPI routes for badminton pose comparison.
Handles HTTP requests for keypoint detection and motion comparison.
"""

import os
import tempfile
import time
import logging
from fastapi import APIRouter, HTTPException, UploadFile, File, Form

from .schemas import (
    PoseDetectionRequest,
    PoseDetectionResponse,
    ComparisonRequest,
    ComparisonResponse,
    AnalysisResultResponse,
    LanguageEnum,
    HealthResponse,
    frame_to_schema,
    frame_from_schema,
    comparison_to_response,
    analysis_to_response,
)
from core.config import API_VERSION
from core.domain.errors import InvalidInputError, KeypointProducerError
from core.services import PoseComparisonService, VideoComparisonPipeline
from core.services.pose_comparison import resolve_shot_type
from core.services.pose_detector import PoseDetector

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

# =============================================================================
# Health Check
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check endpoint"
)
async def health_check() -> HealthResponse:
    """
    Check if the API is running and MediaPipe is available.
    """
    mediapipe_ok = False
    try:
        with PoseDetector():
            mediapipe_ok = True
    except Exception as e:
        logger.warning(f"MediaPipe not available: {e}")

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        mediapipe_available=mediapipe_ok
    )


# =============================================================================
# Pose Detection
# =============================================================================

@router.post(
    "/pose/detect",
    response_model=PoseDetectionResponse,
    tags=["Pose Detection"],
    summary="Detect keypoints in a single image"
)
async def detect_pose(request: PoseDetectionRequest) -> PoseDetectionResponse:
    """
    Detect body keypoints in a base64-encoded image.

    For streamed capture, use the WebSocket endpoint instead.
    """
    start_time = time.time()

    try:
        with PoseDetector(static_image_mode=True) as detector:
            pose_frame = detector.detect_from_base64(
                request.image_base64,
                timestamp_ms=request.timestamp_ms,
            )

        processing_time = (time.time() - start_time) * 1000

        if pose_frame is None:
            return PoseDetectionResponse(
                success=False,
                pose=None,
                error="No person detected in image",
                processing_time_ms=processing_time
            )

        return PoseDetectionResponse(
            success=True,
            pose=frame_to_schema(pose_frame),
            error=None,
            processing_time_ms=processing_time
        )

    except Exception as e:
        logger.error(f"Pose detection failed: {e}")
        processing_time = (time.time() - start_time) * 1000
        return PoseDetectionResponse(
            success=False,
            pose=None,
            error=str(e),
            processing_time_ms=processing_time
        )


# =============================================================================
# Comparison
# =============================================================================

@router.post(
    "/comparison",
    response_model=ComparisonResponse,
    tags=["Comparison"],
    summary="Compare two keypoint sequences"
)
async def compare_sequences(request: ComparisonRequest) -> ComparisonResponse:
    """
    Compare a user keypoint sequence against a reference sequence.

    Returns:
        Overall score, per-keypoint scores, feedback and recommendations

    Raises:
        400 if either sequence is empty
    """
    reference = [frame_from_schema(frame) for frame in request.reference]
    user = [frame_from_schema(frame) for frame in request.user]

    service = PoseComparisonService(language=request.language.value)
    try:
        result = service.compare_poses(reference, user, request.shot_type)
    except InvalidInputError as e:
        logger.error(f"Comparison rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return comparison_to_response(result)


@router.post(
    "/analysis/videos",
    response_model=AnalysisResultResponse,
    tags=["Comparison"],
    summary="Compare an uploaded attempt against a reference video"
)
async def analyze_videos(
    reference_video: UploadFile = File(..., description="Reference video (MP4, MOV)"),
    user_video: UploadFile = File(..., description="User video (MP4, MOV)"),
    shot_type: str = Form("smash", description="Shot type"),
    language: LanguageEnum = Form(LanguageEnum.KO, description="Feedback language"),
) -> AnalysisResultResponse:
    """
    Extract keypoints from both videos with MediaPipe and compare them.

    The videos are saved temporarily, processed frame by frame,
    compared, and deleted.
    """
    temp_paths = []
    try:
        for upload in (reference_video, user_video):
            suffix = os.path.splitext(upload.filename or ".mp4")[1]
            with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as temp_file:
                temp_paths.append(temp_file.name)
                temp_file.write(await upload.read())

        shot = resolve_shot_type(shot_type)
        # One detector per video; MediaPipe tracking is stateful
        pipeline = VideoComparisonPipeline(
            PoseDetector,
            PoseComparisonService(language=language.value),
        )
        result = pipeline.compare_videos(
            temp_paths[0],
            temp_paths[1],
            shot,
            on_progress=lambda p: logger.debug(f"{p.stage.value}: {p.percent:.0f}%"),
        )

        return analysis_to_response(result, shot.value)

    except (InvalidInputError, KeypointProducerError) as e:
        logger.error(f"Video analysis rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Video analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    finally:
        for path in temp_paths:
            if os.path.exists(path):
                os.unlink(path)
