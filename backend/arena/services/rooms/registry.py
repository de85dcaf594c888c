import logging
import threading
from typing import Callable, Dict, List, Optional

from arena.models import Position, Room
from .grid import random_position


class RoomRegistry:
    """Process-wide owner of live rooms, keyed by caller-supplied id.

    The mapping itself is guarded by one lock. Callers that hold a room's
    own lock may call `remove`; nothing here takes a room lock, so that
    ordering never inverts.
    """

    def __init__(self, sampler: Callable[[], Position] = random_position, logger: Optional[logging.Logger] = None):
        self.sampler = sampler
        self.logger = logger or logging.getLogger(__name__)
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def get_or_create(self, room_id: str) -> Room:
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                room = Room(room_id, self.sampler())
                self._rooms[room_id] = room
                self.logger.info(f"[room-create] room={room_id} food={tuple(room.food)}")
            return room

    def get(self, room_id: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(room_id)

    def remove(self, room_id: str, room: Optional[Room] = None) -> bool:
        """Drop a room. Safe to call repeatedly.

        When `room` is given, only that exact instance is removed, so a
        stale caller cannot delete a newer room that reused the id.
        """
        with self._lock:
            current = self._rooms.get(room_id)
            if current is None or (room is not None and current is not room):
                return False
            del self._rooms[room_id]
            current.closed = True
        self.logger.info(f"[room-remove] room={room_id}")
        return True

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __contains__(self, room_id):
        with self._lock:
            return room_id in self._rooms

    def __len__(self):
        with self._lock:
            return len(self._rooms)
