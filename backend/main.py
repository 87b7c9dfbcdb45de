"""
BadForce Backend API

FastAPI application comparing a user's badminton motion against a
reference motion from body keypoints.

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8000

API docs available at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as api_router
from api.websocket import websocket_endpoint
from core.config import API_VERSION

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    """
    logger.info(" BadForce API starting up...")
    logger.info(" API docs: http://localhost:8000/docs")
    logger.info(" WebSocket: ws://localhost:8000/ws/pose")

    # Test MediaPipe availability
    try:
        from core.services.pose_detector import PoseDetector
        with PoseDetector():
            logger.info(" MediaPipe initialized successfully")
    except Exception as e:
        logger.warning(f" MediaPipe initialization warning: {e}")

    yield

    logger.info(" BadForce API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="BadForce API",
    description="""
    **Badminton Motion Comparison**

    Compares a user's shot against a reference motion using body keypoints.

    ## Features

    - **Keypoint Detection** via MediaPipe (REST and WebSocket)
    - **Motion Comparison** with midpoint-weighted scoring
    - **Detail Metrics** (position accuracy, timing, stability)
    - **Feedback & Recommendations** per shot type (ko / en)

    ## Endpoints

    - `GET /api/health` - Health check
    - `POST /api/pose/detect` - Single image keypoint detection
    - `POST /api/comparison` - Compare two keypoint sequences
    - `POST /api/analysis/videos` - Compare two uploaded videos
    - `WS /ws/pose` - Streamed capture and comparison
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",      # React dev server
        "http://localhost:8081",      # Expo / Metro bundler
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8081",
        "*",                          # Allow all for development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

app.include_router(api_router, prefix="/api")
app.websocket("/ws/pose")(websocket_endpoint)


@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "BadForce API",
        "version": API_VERSION,
        "description": "Badminton motion comparison",
        "docs": "/docs",
        "health": "/api/health",
        "websocket": "ws://localhost:8000/ws/pose"
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
