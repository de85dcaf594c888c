import threading
from collections import deque
from typing import Dict, Iterable, NamedTuple, Optional

from arena.services.rooms.constants import ROOM_CAPACITY


class Position(NamedTuple):
    x: int
    y: int

    def to_list(self):
        return [self.x, self.y]


class Participant:
    """One player's snake inside a room.

    `body` runs head (index 0) to tail. `direction` is written by intent
    messages and read by the tick step only.
    """

    def __init__(self, participant_id: str, body: Iterable[Position], direction: str, score: int = 0):
        self.id = participant_id
        self.body = deque(body)
        self.direction = direction
        self.score = score

    @property
    def head(self) -> Position:
        return self.body[0]

    def to_dict(self):
        return {
            'snake': [segment.to_list() for segment in self.body],
            'direction': self.direction,
            'score': self.score,
        }


class Room:
    """A single game instance: up to two participants and one food cell.

    All reads and writes go through `lock`. `closed` is set once the room
    has been removed from its registry; holders of a stale reference must
    check it after acquiring the lock.
    """

    def __init__(self, room_id: str, food: Position):
        self.id = room_id
        self.food = food
        self.players: Dict[str, Participant] = {}
        self.lock = threading.RLock()
        self.closed = False

    def __len__(self):
        return len(self.players)

    def to_dict(self):
        return {
            'players': {pid: p.to_dict() for pid, p in self.players.items()},
            'food': self.food.to_list(),
            'roomId': self.id,
        }

    def summary(self):
        return {
            'roomId': self.id,
            'players': list(self.players),
            'full': len(self.players) >= ROOM_CAPACITY,
        }


class JoinResult:
    ACCEPTED = 'accepted'
    ROOM_FULL = 'room_full'

    def __init__(self, status: str, snapshot: Optional[dict] = None):
        self.status = status
        self.snapshot = snapshot

    @property
    def accepted(self) -> bool:
        return self.status == self.ACCEPTED

    @classmethod
    def room_full(cls):
        return cls(cls.ROOM_FULL)

    def __repr__(self):
        return f"JoinResult({self.status!r})"


class GameOver:
    def __init__(self, loser_id: str, winner_id: Optional[str]):
        self.loser_id = loser_id
        self.winner_id = winner_id

    def to_dict(self):
        return {'loserId': self.loser_id, 'winnerId': self.winner_id}
