"""
Fixed game constants.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_DIRECTIONS = {UP, DOWN, LEFT, RIGHT}

# Cell offset per direction; y grows downward
DIRECTION_DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Game settings
GRID_SIZE = 20
INITIAL_SNAKE_LENGTH = 3
TICK_INTERVAL_SEC = 0.1
ROOM_CAPACITY = 2

# Starting cell and heading by join order
START_CONFIGS = (
    ((5, 5), RIGHT),
    ((GRID_SIZE - 5, GRID_SIZE - 5), LEFT),
)
