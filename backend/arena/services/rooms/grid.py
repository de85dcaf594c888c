import random
from typing import List, Optional

from arena.models import Position
from .constants import DIRECTION_DELTAS, GRID_SIZE, INITIAL_SNAKE_LENGTH


def random_position(rng: Optional[random.Random] = None) -> Position:
    """Sample a cell uniformly from the grid."""
    rng = rng or random
    return Position(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))


def create_body(start_x: int, start_y: int, direction: str, length: int = INITIAL_SNAKE_LENGTH) -> List[Position]:
    """Build a body of `length` cells trailing back from the head.

    Segments run opposite to `direction` and are not wrapped; callers pick
    start cells that keep every segment on the grid.
    """
    dx, dy = DIRECTION_DELTAS[direction]
    return [Position(start_x - dx * i, start_y - dy * i) for i in range(length)]


def step(position: Position, direction: str) -> Position:
    """Move one cell in `direction`, wrapping around the grid edges."""
    dx, dy = DIRECTION_DELTAS[direction]
    return Position((position.x + dx) % GRID_SIZE, (position.y + dy) % GRID_SIZE)
