"""
Game constants for SnakeRules.
"""

# Movement directions (y grows upward)
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

DIRECTION_VECTORS = {
    UP: (0, 1),
    DOWN: (0, -1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Snake settings
SNAKE_MAX_HEALTH = 100
SNAKE_START_SIZE = 3

# Elimination causes
NOT_ELIMINATED = ""
ELIMINATED_BY_OUT_OF_HEALTH = "out-of-health"
ELIMINATED_BY_WALL = "wall-collision"
ELIMINATED_BY_SELF_COLLISION = "snake-self-collision"
ELIMINATED_BY_COLLISION = "snake-collision"
ELIMINATED_BY_HEAD_TO_HEAD = "head-collision"
ELIMINATED_BY_SQUAD = "squad-eliminated"

# Ruleset names
GAME_TYPE_STANDARD = "standard"
GAME_TYPE_SOLO = "solo"
GAME_TYPE_SQUAD = "squad"
GAME_TYPE_ROYALE = "royale"
GAME_TYPE_CONSTRICTOR = "constrictor"

# Default settings (match the CLI defaults)
DEFAULT_FOOD_SPAWN_CHANCE = 15
DEFAULT_MINIMUM_FOOD = 1
DEFAULT_HAZARD_DAMAGE_PER_TURN = 14
DEFAULT_SHRINK_EVERY_N_TURNS = 25
