"""
Real-Time Notifier - pushes job events to every connected Socket.IO client.

Events:
- job:created  full job record
- job:updated  full post-update job record
- job:deleted  job id string

Delivery is fire-and-forget: no acknowledgement, no per-client filtering.
Job records carry a "version" that increases by one for every event about
that job, so clients can drop records older than the one they hold.
Versions are only kept for jobs that still exist; a delete forgets them.
"""

import logging
from typing import Any, Dict, Optional

import socketio
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

JOB_CREATED = "job:created"
JOB_UPDATED = "job:updated"
JOB_DELETED = "job:deleted"


class JobNotifier:
    """Broadcasts job events over a Socket.IO server."""

    def __init__(self, sio: Optional[socketio.AsyncServer] = None):
        self.sio = sio or socketio.AsyncServer(async_mode="asgi", cors_allowed_origins="*")
        self.versions: Dict[str, int] = {}
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.info("A user connected: %s", sid)

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        logger.info("User disconnected: %s", sid)

    def next_version(self, job_id: str) -> int:
        self.versions[job_id] = self.versions.get(job_id, 0) + 1
        return self.versions[job_id]

    async def broadcast(self, event: str, payload: Any) -> None:
        """Emit an event to every client. Failures are logged, never raised."""
        data = jsonable_encoder(payload)
        if isinstance(data, dict):
            data["version"] = self.next_version(str(data.get("_id")))
        else:
            self.versions.pop(str(data), None)
        try:
            await self.sio.emit(event, data)
        except Exception as e:
            logger.warning("Broadcast of %s failed: %s", event, e)

    def asgi_app(self, other_asgi_app) -> socketio.ASGIApp:
        """Serve /socket.io/ and hand every other request to other_asgi_app."""
        return socketio.ASGIApp(self.sio, other_asgi_app=other_asgi_app)
