"""Per-room game rules: joining, steering and the tick step.

Every function here expects the caller to hold ``room.lock`` and to have
checked ``room.closed``. Outbound messages go through an emitter exposing
``emit(event, payload=None, to=None, skip=None)``; delivery is fire-and-forget.
"""
from typing import Callable, Optional

from arena.models import GameOver, JoinResult, Participant, Position, Room
from .constants import ROOM_CAPACITY, START_CONFIGS, VALID_DIRECTIONS
from .grid import create_body, random_position, step


def join(room: Room, participant_id: str, emitter) -> JoinResult:
    """Seat a participant, or report that the room is full.

    The start cell depends only on how many players are already seated.
    """
    count = len(room.players)
    if count >= ROOM_CAPACITY:
        return JoinResult.room_full()

    (start_x, start_y), direction = START_CONFIGS[count]
    room.players[participant_id] = Participant(
        participant_id,
        create_body(start_x, start_y, direction),
        direction,
    )
    snapshot = room.to_dict()

    emitter.emit('gameState', snapshot, to=participant_id)
    emitter.emit('playerJoined', participant_id, to=room.id, skip=participant_id)
    if len(room.players) == ROOM_CAPACITY:
        emitter.emit('startGame', to=room.id)
    return JoinResult(JoinResult.ACCEPTED, snapshot)


def set_direction(room: Optional[Room], participant_id: str, direction: str) -> bool:
    """Overwrite a participant's heading. Reversing is allowed.

    Returns False without raising when the room or participant is gone.
    """
    if direction not in VALID_DIRECTIONS:
        raise ValueError(f"unknown direction {direction!r}")
    if room is None or room.closed:
        return False
    player = room.players.get(participant_id)
    if player is None:
        return False
    player.direction = direction
    return True


def remove_participant(room: Room, participant_id: str, emitter) -> bool:
    """Take a participant out and tell whoever is left."""
    if room.players.pop(participant_id, None) is None:
        return False
    emitter.emit('playerLeft', participant_id, to=room.id, skip=participant_id)
    return True


def _collides(room: Room, mover: Participant) -> bool:
    head = mover.head
    for other in room.players.values():
        segments = list(other.body)
        if other is mover:
            segments = segments[1:]
        if head in segments:
            return True
    return False


def _winner_for(room: Room, loser_id: str) -> Optional[str]:
    for pid in room.players:
        if pid != loser_id:
            return pid
    return None


def advance(room: Room, emitter, sampler: Callable[[], Position] = random_position) -> Optional[GameOver]:
    """Run one tick for the room.

    Players move in seating order. The first collision ends the game: a
    ``gameOver`` event goes out and the rest of the tick is skipped, so the
    caller must then remove the room. Otherwise food is respawned once if
    anyone ate, and the new snapshot is broadcast.
    """
    food_eaten = False

    for pid, player in list(room.players.items()):
        head = step(player.head, player.direction)
        player.body.appendleft(head)

        if head == room.food:
            player.score += 1
            food_eaten = True
        else:
            player.body.pop()

        if _collides(room, player):
            outcome = GameOver(pid, _winner_for(room, pid))
            emitter.emit('gameOver', outcome.to_dict(), to=room.id)
            return outcome

    if food_eaten:
        room.food = sampler()

    emitter.emit('gameState', room.to_dict(), to=room.id)
    return None
