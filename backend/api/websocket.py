"""
WebSocket Handler

Streamed keypoint capture via WebSocket connection.
The frontend streams reference and user frames; the server answers each
frame with its keypoints and compares the buffered sequences when the
session ends.
"""

import json
import time
import logging
from dataclasses import dataclass, field
from typing import Optional
from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .schemas import (
    WebSocketMessageType,
    WebSocketMessage,
    CaptureRole,
    FrameMessage,
    StartSessionMessage,
    frame_to_schema,
    comparison_to_response,
)
from core.config import DEFAULT_LANGUAGE
from core.domain.errors import InvalidInputError
from core.domain.pose import PoseFrame
from core.services import PoseComparisonService
from core.services.pose_comparison import resolve_shot_type
from core.services.pose_detector import PoseDetector

# Configure logging
logger = logging.getLogger(__name__)


@dataclass
class CaptureSession:
    """Frames buffered for one connection, per role."""
    shot_type: str = "smash"
    language: str = DEFAULT_LANGUAGE
    frames: dict[CaptureRole, list[PoseFrame]] = field(
        default_factory=lambda: {role: [] for role in CaptureRole}
    )
    detectors: dict[CaptureRole, PoseDetector] = field(default_factory=dict)

    def detector(self, role: CaptureRole) -> PoseDetector:
        """Dedicated detector per role so tracking never mixes two videos."""
        if role not in self.detectors:
            self.detectors[role] = PoseDetector()
        return self.detectors[role]

    def close(self) -> None:
        for detector in self.detectors.values():
            detector.close()
        self.detectors.clear()


class ConnectionManager:
    """
    Manages WebSocket connections and their capture sessions.
    """

    def __init__(self):
        self.active_connections: list[WebSocket] = []
        self.sessions: dict[WebSocket, CaptureSession] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept new WebSocket connection."""
        await websocket.accept()
        self.active_connections.append(websocket)
        self.sessions[websocket] = CaptureSession()
        logger.info(f"New WebSocket connection. Total: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket) -> None:
        """Handle WebSocket disconnection."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

        session = self.sessions.pop(websocket, None)
        if session:
            session.close()

        logger.info(f"WebSocket disconnected. Remaining: {len(self.active_connections)}")

    def reset_session(self, websocket: WebSocket, shot_type: str, language: str) -> CaptureSession:
        """Replace the connection's session, dropping any buffered frames."""
        old = self.sessions.get(websocket)
        if old:
            old.close()
        session = CaptureSession(shot_type=shot_type, language=language)
        self.sessions[websocket] = session
        return session

    def get_session(self, websocket: WebSocket) -> Optional[CaptureSession]:
        return self.sessions.get(websocket)

    async def send(self, websocket: WebSocket, msg_type: WebSocketMessageType, data: dict) -> None:
        """Send a typed message to a specific connection."""
        message = WebSocketMessage(
            type=msg_type,
            data=data,
            timestamp=int(time.time() * 1000),
        )
        try:
            await websocket.send_json(message.model_dump(mode="json"))
        except Exception as e:
            logger.error(f"Failed to send WebSocket message: {e}")


# Global connection manager
manager = ConnectionManager()


async def websocket_endpoint(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for streamed capture and comparison.

    Protocol:
    1. Client connects (session defaults: smash, Korean feedback)
    2. Optional "start_session" {shot_type, language} resets buffers
    3. "frame" {role, image_base64, frame_number, timestamp_ms}
       -> "pose_result" with the frame's keypoints
    4. "end_session" -> "comparison_result" (or "error") then "session_ended"
    """
    await manager.connect(websocket)

    try:
        await manager.send(websocket, WebSocketMessageType.SESSION_STARTED, {
            "message": "Connected to BadForce pose comparison"
        })

        while True:
            try:
                data = await websocket.receive_json()
                msg_type = data.get("type")

                if msg_type == WebSocketMessageType.START_SESSION.value:
                    await handle_start_session(websocket, data)

                elif msg_type == WebSocketMessageType.FRAME.value:
                    await handle_frame(websocket, data)

                elif msg_type == WebSocketMessageType.END_SESSION.value:
                    await handle_end_session(websocket)
                    await manager.send(websocket, WebSocketMessageType.SESSION_ENDED, {
                        "message": "Session ended"
                    })
                    break

                else:
                    await manager.send(websocket, WebSocketMessageType.ERROR, {
                        "error": f"Unknown message type: {msg_type}"
                    })

            except json.JSONDecodeError:
                await manager.send(websocket, WebSocketMessageType.ERROR, {
                    "error": "Invalid JSON"
                })

    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        manager.disconnect(websocket)


async def handle_start_session(websocket: WebSocket, message: dict) -> None:
    """Open a fresh session with the requested shot type and language."""
    try:
        payload = StartSessionMessage(**message.get("data", {}))
    except ValidationError as e:
        await manager.send(websocket, WebSocketMessageType.ERROR, {"error": str(e)})
        return

    shot = resolve_shot_type(payload.shot_type)
    manager.reset_session(websocket, shot.value, payload.language.value)
    await manager.send(websocket, WebSocketMessageType.SESSION_STARTED, {
        "shot_type": shot.value,
        "language": payload.language.value,
    })


async def handle_frame(websocket: WebSocket, message: dict) -> None:
    """
    Detect keypoints in a streamed frame and buffer them for its role.
    """
    start_time = time.time()

    try:
        payload = FrameMessage(**message.get("data", {}))
    except ValidationError as e:
        await manager.send(websocket, WebSocketMessageType.ERROR, {"error": str(e)})
        return

    session = manager.get_session(websocket)
    if not session:
        await manager.send(websocket, WebSocketMessageType.ERROR, {
            "error": "Session not initialized"
        })
        return

    try:
        pose_frame = session.detector(payload.role).detect_from_base64(
            payload.image_base64,
            timestamp_ms=payload.timestamp_ms,
        )
    except Exception as e:
        logger.error(f"Frame processing error: {e}")
        await manager.send(websocket, WebSocketMessageType.ERROR, {"error": str(e)})
        return

    if pose_frame:
        pose_frame.shot_type = resolve_shot_type(session.shot_type)
        session.frames[payload.role].append(pose_frame)

    await manager.send(websocket, WebSocketMessageType.POSE_RESULT, {
        "role": payload.role.value,
        "frame_number": payload.frame_number,
        "pose": frame_to_schema(pose_frame).model_dump(mode="json") if pose_frame else None,
        "processing_time_ms": (time.time() - start_time) * 1000,
    })


async def handle_end_session(websocket: WebSocket) -> None:
    """Compare the buffered reference and user sequences."""
    session = manager.get_session(websocket)
    if not session:
        return

    service = PoseComparisonService(language=session.language)
    try:
        result = service.compare_poses(
            session.frames[CaptureRole.REFERENCE],
            session.frames[CaptureRole.USER],
            session.shot_type,
        )
    except InvalidInputError as e:
        await manager.send(websocket, WebSocketMessageType.ERROR, {"error": str(e)})
        return

    await manager.send(
        websocket,
        WebSocketMessageType.COMPARISON_RESULT,
        comparison_to_response(result).model_dump(mode="json"),
    )
