import logging
import time
from typing import Callable, Optional

from arena.models import Position
from .constants import TICK_INTERVAL_SEC
from .grid import random_position
from .registry import RoomRegistry
from .simulation import advance


class TickScheduler:
    """Fixed-rate driver that advances every live room once per tick.

    - One background task runs the loop; ticks never overlap
    - Each room is stepped under its own lock and skipped if already closed
    - A room that ends its game is removed and its subscribers dropped before its lock is released
    - An error in one room is logged and does not stop the others
    """

    def __init__(
        self,
        registry: RoomRegistry,
        emitter,
        interval: float = TICK_INTERVAL_SEC,
        sampler: Callable[[], Position] = random_position,
        logger: Optional[logging.Logger] = None,
        heartbeat_sec: int = 0,
    ):
        self.registry = registry
        self.emitter = emitter
        self.interval = interval
        self.sampler = sampler
        self.logger = logger or logging.getLogger(__name__)
        self.heartbeat_sec = heartbeat_sec
        self.ticks = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def tick(self) -> int:
        """Advance all rooms once. Returns how many rooms were stepped."""
        stepped = 0
        for room in self.registry.rooms():
            with room.lock:
                if room.closed:
                    continue
                try:
                    outcome = advance(room, self.emitter, self.sampler)
                except Exception:
                    self.logger.exception(f"[tick-error] room={room.id}")
                    continue
                stepped += 1
                if outcome is not None:
                    self.logger.info(
                        f"[game-over] room={room.id} loser={outcome.loser_id} winner={outcome.winner_id}"
                    )
                    self.registry.remove(room.id, room)
                    self.emitter.close_room(room.id)
        self.ticks += 1
        return stepped

    def start(self, socketio) -> None:
        if self._running:
            self.logger.info("[loop-skip] game loop already running")
            return
        self._running = True
        self.logger.info(f"[loop-start] interval={self.interval}s")
        socketio.start_background_task(self._worker, socketio.sleep)

    def stop(self) -> None:
        self._running = False

    def _worker(self, sleep: Callable[[float], None] = time.sleep) -> None:
        last_heartbeat = time.monotonic()
        while self._running:
            started = time.monotonic()
            self.tick()
            if self.heartbeat_sec and started - last_heartbeat >= self.heartbeat_sec:
                last_heartbeat = started
                self.logger.info(f"[loop-heartbeat] ticks={self.ticks} rooms={len(self.registry)}")
            elapsed = time.monotonic() - started
            sleep(max(0.0, self.interval - elapsed))
        self.logger.info(f"[loop-stop] ticks={self.ticks}")
