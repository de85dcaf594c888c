import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import request

from arena.models import Room
from arena.services.rooms import simulation
from arena.services.rooms.constants import VALID_DIRECTIONS
from arena.services.rooms.registry import RoomRegistry


# Recently disconnected sids kept to catch joins that race their disconnect
DEPARTED_MEMORY = 1024


class SessionGateway:
    """Maps connections to room seats and relays their events.

    The participant id is the connection sid. A connection holds at most
    one seat; the seat is released on disconnect, or dropped lazily when
    the room it pointed at has since ended.

    Handlers may run on separate threads, so a join can still be in flight
    when its connection disconnects. Recent disconnects are remembered in
    `_departed`; a join for such a sid is dropped, or undone if it already
    took a seat.
    """

    def __init__(self, registry: RoomRegistry, broadcaster, logger: Optional[logging.Logger] = None):
        self.registry = registry
        self.broadcaster = broadcaster
        self.logger = logger or logging.getLogger(__name__)
        self._sid_to_room: Dict[str, str] = {}
        self._departed: "OrderedDict[str, None]" = OrderedDict()
        self._lock = threading.Lock()

    def room_of(self, sid: str) -> Optional[str]:
        with self._lock:
            return self._sid_to_room.get(sid)

    def has_departed(self, sid: str) -> bool:
        with self._lock:
            return sid in self._departed

    def _error(self, sid: str, message: str) -> None:
        self.broadcaster.emit('error', {'message': message}, to=sid)

    def _release_stale_seat(self, sid: str) -> bool:
        """Forget a seat whose room is gone. Returns True if a live seat remains."""
        room_id = self.room_of(sid)
        if room_id is None:
            return False
        room = self.registry.get(room_id)
        if room is not None:
            with room.lock:
                if not room.closed and sid in room.players:
                    return True
        with self._lock:
            self._sid_to_room.pop(sid, None)
        self.broadcaster.leave_room(sid, room_id)
        return False

    def handle_connect(self, sid: str) -> None:
        self.logger.info(f"[connect] sid={sid}")

    def handle_join_game(self, sid: str, room_id: Any) -> None:
        if not isinstance(room_id, str) or not room_id:
            self._error(sid, 'roomId is required')
            return
        if self.has_departed(sid):
            return
        if self._release_stale_seat(sid):
            self._error(sid, 'already joined a room')
            return

        while True:
            room = self.registry.get_or_create(room_id)
            with room.lock:
                if room.closed:
                    # Ended between lookup and lock; pick up the replacement
                    continue
                try:
                    self._seat(sid, room)
                finally:
                    if not room.players:
                        self.registry.remove(room_id, room)
                return

    def _seat(self, sid: str, room: Room) -> None:
        # Caller holds room.lock
        if not self.broadcaster.enter_room(sid, room.id):
            return
        result = simulation.join(room, sid, self.broadcaster)
        if not result.accepted:
            self.broadcaster.leave_room(sid, room.id)
            self.broadcaster.emit('roomFull', to=sid)
            self.logger.info(f"[room-full] room={room.id} sid={sid}")
            return
        with self._lock:
            gone = sid in self._departed
            if not gone:
                self._sid_to_room[sid] = room.id
        if gone:
            simulation.remove_participant(room, sid, self.broadcaster)
            self.logger.info(f"[join-abandoned] room={room.id} sid={sid}")
            return
        self.logger.info(f"[join] room={room.id} sid={sid} players={len(room)}")

    def handle_update_direction(self, sid: str, data: Any) -> None:
        if not isinstance(data, dict):
            self._error(sid, 'payload must be an object')
            return
        room_id = data.get('roomId')
        direction = data.get('direction')
        if not isinstance(room_id, str) or not room_id:
            self._error(sid, 'roomId is required')
            return
        if direction not in VALID_DIRECTIONS:
            self._error(sid, f"direction must be one of {sorted(VALID_DIRECTIONS)}")
            return
        room = self.registry.get(room_id)
        if room is None:
            return
        with room.lock:
            simulation.set_direction(room, sid, direction)

    def handle_disconnect(self, sid: str) -> None:
        self.logger.info(f"[disconnect] sid={sid}")
        with self._lock:
            room_id = self._sid_to_room.pop(sid, None)
            self._departed[sid] = None
            if len(self._departed) > DEPARTED_MEMORY:
                self._departed.popitem(last=False)
        if room_id is None:
            return
        room = self.registry.get(room_id)
        if room is None:
            return
        with room.lock:
            if room.closed:
                return
            simulation.remove_participant(room, sid, self.broadcaster)
            if not room.players:
                self.registry.remove(room_id, room)


def register_socketio_handlers(socketio, gateway: SessionGateway, namespace: str = '/') -> None:
    """Bind the gateway to Socket.IO events on `namespace`."""

    def handle_connect(auth=None):
        gateway.handle_connect(request.sid)

    def handle_disconnect(reason=None):
        gateway.handle_disconnect(request.sid)

    def handle_join_game(room_id=None):
        gateway.handle_join_game(request.sid, room_id)

    def handle_update_direction(data=None):
        gateway.handle_update_direction(request.sid, data)

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('updateDirection', handle_update_direction, namespace=namespace)
