"""
Tests for the domain model: Snake, BoardState and Settings.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    BoardState,
    ConfigurationError,
    Point,
    Settings,
    Snake,
    SquadSettings,
    SNAKE_MAX_HEALTH,
)
from domain.constants import ELIMINATED_BY_WALL, NOT_ELIMINATED


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        """Snake starts at full health and not eliminated."""
        snake = Snake("a", [(5, 5), (4, 5), (3, 5)])
        assert snake.body == [Point(5, 5), Point(4, 5), Point(3, 5)]
        assert snake.health == SNAKE_MAX_HEALTH
        assert snake.eliminated_cause == NOT_ELIMINATED
        assert snake.eliminated_by == ""
        assert snake.eliminated_on_turn is None
        assert snake.is_eliminated is False

    def test_snake_head_and_length(self):
        snake = Snake("a", [(5, 5), (4, 5), (3, 5)])
        assert snake.head == Point(5, 5)
        assert snake.length == 3

    def test_grow_duplicates_tail(self):
        snake = Snake("a", [(5, 5), (4, 5)])
        snake.grow()
        assert snake.body == [Point(5, 5), Point(4, 5), Point(4, 5)]

    def test_eliminate_and_revive(self):
        snake = Snake("a", [(0, 0)])
        snake.eliminate(ELIMINATED_BY_WALL, "", 3)
        assert snake.is_eliminated
        assert snake.eliminated_on_turn == 3

        snake.revive()
        assert not snake.is_eliminated
        assert snake.eliminated_by == ""
        assert snake.eliminated_on_turn is None

    def test_clone_is_independent(self):
        snake = Snake("a", [(1, 1), (1, 0)], health=50)
        copy = snake.clone()
        assert copy == snake

        copy.body.append(Point(9, 9))
        copy.health = 10
        assert snake.body == [Point(1, 1), Point(1, 0)]
        assert snake.health == 50


class TestBoardState:
    """Tests for the BoardState class."""

    def test_clone_deep_copies_snakes_and_points(self):
        board = BoardState(
            7, 7, turn=2,
            food=[(1, 1)],
            hazards=[(0, 0)],
            snakes=[Snake("a", [(3, 3), (3, 2)])],
        )
        copy = board.clone()
        assert copy == board

        copy.snakes[0].body.insert(0, Point(3, 4))
        copy.food.append(Point(2, 2))
        copy.hazards.clear()

        assert board.snakes[0].body == [Point(3, 3), Point(3, 2)]
        assert board.food == [Point(1, 1)]
        assert board.hazards == [Point(0, 0)]

    def test_duplicate_food_is_dropped_in_order(self):
        board = BoardState(5, 5, food=[(2, 2), (1, 1), (2, 2)], hazards=[(0, 0), (0, 0)])
        assert board.food == [Point(2, 2), Point(1, 1)]
        # Repeated hazards stack damage and are kept
        assert board.hazards == [Point(0, 0), Point(0, 0)]

    def test_living_snakes_and_lookup(self):
        alive = Snake("alive", [(1, 1)])
        dead = Snake("dead", [(2, 2)])
        dead.eliminate(ELIMINATED_BY_WALL, "", 1)
        board = BoardState(5, 5, snakes=[alive, dead])

        assert board.living_snakes() == [alive]
        assert board.get_snake("dead") is dead
        assert board.get_snake("missing") is None

    def test_is_in_bounds(self):
        board = BoardState(3, 4)
        assert board.is_in_bounds(Point(0, 0))
        assert board.is_in_bounds(Point(2, 3))
        assert not board.is_in_bounds(Point(3, 0))
        assert not board.is_in_bounds(Point(0, -1))

    def test_print_board_marks_food_hazards_and_snakes(self):
        """print_board() draws heads by index and bodies by letter, y=0 at the bottom."""
        board = BoardState(
            4, 3,
            food=[(3, 2)],
            hazards=[(0, 2)],
            snakes=[Snake("a", [(1, 0), (0, 0)])],
        )
        rows = board.print_board().split("\n")

        assert rows[0] == " 2 # . . F"
        assert rows[2] == " 0 a 0 . ."
        assert rows[-1] == "   0 1 2 3"

    def test_print_board_hides_eliminated_snakes(self):
        snake = Snake("a", [(1, 1)])
        snake.eliminate(ELIMINATED_BY_WALL, "", 1)
        board = BoardState(3, 3, snakes=[snake])
        assert " 1 . . ." in board.print_board()

    def test_repr(self):
        board = BoardState(5, 5, turn=4)
        assert "turn=4" in repr(board)


class TestSettings:
    """Tests for Settings validation and randomness."""

    def test_defaults(self):
        settings = Settings()
        assert settings.food_spawn_chance == 15
        assert settings.minimum_food == 1
        assert settings.hazard_damage_per_turn == 14
        assert settings.shrink_every_n_turns == 25

    @pytest.mark.parametrize("kwargs", [
        {"food_spawn_chance": -1},
        {"food_spawn_chance": 101},
        {"minimum_food": -1},
        {"hazard_damage_per_turn": -5},
        {"shrink_every_n_turns": -1},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ConfigurationError):
            Settings(**kwargs)

    def test_settings_are_immutable(self):
        settings = Settings()
        with pytest.raises(Exception):
            settings.minimum_food = 5

    def test_get_rand_is_deterministic_per_turn(self):
        settings = Settings(seed=99)
        first = [settings.get_rand(3).random() for _ in range(3)]
        second = [settings.get_rand(3).random() for _ in range(3)]
        assert first == second
        assert settings.get_rand(3).random() != settings.get_rand(4).random()

    def test_squad_membership(self):
        squads = SquadSettings(squad_map={"a": "red", "b": "red", "c": "blue"})
        assert squads.same_squad("a", "b")
        assert not squads.same_squad("a", "c")
        # Unassigned snakes are only in a squad with themselves
        assert squads.same_squad("x", "x")
        assert not squads.same_squad("x", "y")
        assert not squads.same_squad("a", "x")
        assert squads.squad_of("a") == "red"
        assert squads.squad_of("x") is None

    def test_squad_map_is_read_only(self):
        squads = SquadSettings(squad_map={"a": "red"})
        with pytest.raises(TypeError):
            squads.squad_map["b"] = "blue"

    def test_to_dict(self):
        data = Settings(seed=1, squad_settings=SquadSettings(shared_health=True)).to_dict()
        assert data["foodSpawnChance"] == 15
        assert data["royale"] == {"shrinkEveryNTurns": 25}
        assert data["squad"]["sharedHealth"] is True
        assert data["squad"]["allowBodyCollisions"] is False
