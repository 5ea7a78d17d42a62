"""
WebSocket endpoint for streamed kolam playback.

The server runs the playback engine; the browser only paints the draw
instructions it receives.
"""

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState

from kolam.core.exceptions import KolamError
from kolam.core.logging import get_logger
from kolam.playback.controller import KolamController
from kolam.playback.engine import PlaybackProgress, PlaybackState
from kolam.playback.renderer import RecordingRenderer
from kolam.playback.scheduler import AsyncioScheduler

logger = get_logger(__name__)

router = APIRouter()

# Seconds between draw-instruction flushes
FLUSH_INTERVAL = 0.03


class PlaybackSession:
    """
    One client's playback: controller, recording renderer and flush task.

    Engine callbacks are synchronous, so progress and state events are
    queued and sent together with the recorded draw calls.
    """

    def __init__(self, session_id: str, send: Callable[[dict], Awaitable[bool]]):
        self.session_id = session_id
        self.send = send
        self.renderer = RecordingRenderer()
        self.events: List[dict] = []
        self.controller = KolamController(
            renderer=self.renderer,
            scheduler=AsyncioScheduler(),
            on_progress=self._on_progress,
            on_state_change=self._on_state_change
        )
        self._flush_task: Optional[asyncio.Task] = None

    def _on_progress(self, progress: PlaybackProgress) -> None:
        self.events.append({"type": "progress", "data": progress.to_dict()})

    def _on_state_change(self, state: PlaybackState) -> None:
        self.events.append({"type": "state", "data": state.to_dict()})

    async def start(self) -> None:
        self._flush_task = asyncio.create_task(self._flush_loop())
        logger.info("playback_session_started", session_id=self.session_id)

    async def stop(self) -> None:
        self.controller.pause()
        if self._flush_task is not None:
            self._flush_task.cancel()
            try:
                await self._flush_task
            except asyncio.CancelledError:
                pass
            self._flush_task = None
        logger.info("playback_session_stopped", session_id=self.session_id)

    async def flush(self) -> None:
        """Send recorded draw calls first, then queued events."""
        calls = self.renderer.drain()
        if calls:
            await self.send({
                "type": "draw",
                "calls": [call.to_dict() for call in calls]
            })
        events, self.events = self.events, []
        for event in events:
            await self.send(event)

    async def _flush_loop(self) -> None:
        while True:
            try:
                await self.flush()
            except Exception as e:
                logger.error(
                    "playback_flush_failed",
                    session_id=self.session_id,
                    error=str(e)
                )
                self.controller.pause()
                return
            await asyncio.sleep(FLUSH_INTERVAL)

    async def handle(self, message: Dict) -> None:
        """Apply one client message to the controller."""
        message_type = message.get("type")

        if message_type == "select_pattern":
            self.controller.select_pattern(message.get("index"))
        elif message_type == "next_pattern":
            self.controller.next_pattern()
        elif message_type == "play":
            self.controller.play()
        elif message_type == "pause":
            self.controller.pause()
        elif message_type == "toggle":
            self.controller.toggle()
        elif message_type == "reset":
            self.controller.reset()
        elif message_type == "set_speed":
            applied = self.controller.set_speed(message.get("factor"))
            await self.send({"type": "speed", "data": {"factor": applied}})
        elif message_type == "get_progress":
            stroke_index, total, metadata = self.controller.get_progress()
            await self.send({
                "type": "progress",
                "data": {
                    "stroke_index": stroke_index,
                    "total_strokes": total,
                    "pattern": metadata
                }
            })
        elif message_type == "list_patterns":
            await self.send({"type": "patterns", "data": self.controller.patterns()})
        else:
            await self.send({
                "type": "error",
                "code": "UNKNOWN_MESSAGE_TYPE",
                "message": f"Unknown message type: {message_type}"
            })


class ConnectionManager:
    """
    Manages WebSocket connections and their playback sessions.
    """

    def __init__(self) -> None:
        self.active_connections: Dict[str, WebSocket] = {}
        self.sessions: Dict[str, PlaybackSession] = {}

    async def connect(self, websocket: WebSocket, session_id: str) -> None:
        """Accept and register a new WebSocket connection."""
        await websocket.accept()
        self.active_connections[session_id] = websocket
        logger.info("websocket_connected", session_id=session_id)

    def disconnect(self, session_id: str) -> None:
        """Remove a WebSocket connection."""
        self.active_connections.pop(session_id, None)
        logger.info("websocket_disconnected", session_id=session_id)

    async def send_message(self, session_id: str, message: dict) -> bool:
        """
        Send message to a specific session.

        Returns:
            True if sent successfully, False if connection doesn't exist
        """
        websocket = self.active_connections.get(session_id)
        if websocket and websocket.client_state == WebSocketState.CONNECTED:
            await websocket.send_json(message)
            return True
        return False


# Global connection manager
manager = ConnectionManager()


@router.websocket("/ws/playback/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """
    WebSocket endpoint for kolam playback.

    Client sends:
    - select_pattern {index}, next_pattern
    - play, pause, toggle, reset
    - set_speed {factor}
    - get_progress, list_patterns

    Server sends:
    - draw: batched renderer calls to paint
    - progress: stroke index / total / pattern metadata
    - state: playback state after each intent
    - speed, patterns: replies to the matching requests
    - error: error messages
    """
    await manager.connect(websocket, session_id)

    async def send(message: dict) -> bool:
        return await manager.send_message(session_id, message)

    session = PlaybackSession(session_id, send)
    manager.sessions[session_id] = session
    await session.start()

    try:
        while True:
            message = await websocket.receive_json()
            try:
                await session.handle(message)
            except KolamError as e:
                logger.warning(
                    "playback_intent_rejected",
                    session_id=session_id,
                    code=e.code,
                    message=e.message
                )
                await send({
                    "type": "error",
                    "code": e.code,
                    "message": e.message
                })

    except WebSocketDisconnect:
        logger.info("websocket_client_disconnected", session_id=session_id)

    except Exception as e:
        logger.exception(
            "websocket_error",
            session_id=session_id,
            error=str(e)
        )
        await send({
            "type": "error",
            "code": "WEBSOCKET_ERROR",
            "message": str(e)
        })

    finally:
        await session.stop()
        manager.sessions.pop(session_id, None)
        manager.disconnect(session_id)
