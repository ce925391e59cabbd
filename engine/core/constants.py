# engine/core/constants.py
from enum import StrEnum

# --- Board Dimensions ---
ROWS = 6
COLS = 7
CONNECT = 4

# --- Cell Values ---
# Same encoding as the snapshots handed over by the game loop.
EMPTY = 0
SIDE_1 = 1
SIDE_2 = -1


class Direction(StrEnum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    ASCENDING = "ascending"
    DESCENDING = "descending"


# (row step, column step). Row 0 is the TOP, so "ascending" walks up-right.
DIRECTION_STEPS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DESCENDING: (1, 1),
    Direction.ASCENDING: (-1, 1),
}

# --- Scoring System ---
# Uncontested window worth, indexed by number of own tokens in it.
WINDOW_SCORES = (0, 1, 10, 100)

# Numeric stand-in for a decided position.
# 69 windows * 100 on a 7x6 board stays far below the threshold.
WIN_SCORE = 1_000_000
WIN_THRESHOLD = 100_000

# --- Search ---
DEFAULT_DEPTH = 1
