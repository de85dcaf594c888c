import logging
from typing import Any, Optional


class SocketIOBroadcaster:
    """Outbound side of the transport, backed by a Flask-SocketIO server.

    Sends are fire-and-forget: a failed delivery is logged and swallowed so
    the caller's game state is never rolled back by a dead connection.
    """

    def __init__(self, socketio, namespace: str = '/', logger: Optional[logging.Logger] = None):
        self.socketio = socketio
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)

    def emit(self, event: str, payload: Any = None, to: Optional[str] = None, skip: Optional[str] = None) -> None:
        args = () if payload is None else (payload,)
        try:
            self.socketio.emit(event, *args, to=to, skip_sid=skip, namespace=self.namespace)
        except Exception as exc:
            self.logger.warning(f"[broadcast-failure] event={event} target={to} error={exc}")

    def enter_room(self, sid: str, room_id: str) -> bool:
        """Subscribe a connection to a room. Returns False if the sid is gone."""
        try:
            self.socketio.server.enter_room(sid, room_id, namespace=self.namespace)
        except Exception as exc:
            self.logger.warning(f"[enter-room-failure] sid={sid} room={room_id} error={exc}")
            return False
        return True

    def leave_room(self, sid: str, room_id: str) -> None:
        try:
            self.socketio.server.leave_room(sid, room_id, namespace=self.namespace)
        except Exception as exc:
            self.logger.warning(f"[leave-room-failure] sid={sid} room={room_id} error={exc}")

    def close_room(self, room_id: str) -> None:
        """Unsubscribe every connection from a finished room."""
        try:
            self.socketio.server.close_room(room_id, namespace=self.namespace)
        except Exception as exc:
            self.logger.warning(f"[close-room-failure] room={room_id} error={exc}")
