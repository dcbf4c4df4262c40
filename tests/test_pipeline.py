"""
Tests for the stage registry and Pipeline execution.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import BoardState, ConfigurationError, Point, Settings, Snake, SnakeMove
from domain.constants import UP
from rules.pipeline import (
    STAGE_GAME_OVER_STANDARD,
    STAGE_MOVEMENT_STANDARD,
    STAGE_REGISTRY,
    Pipeline,
    get_stage,
)
from rules.stages import move_snakes_standard


class TestRegistry:
    def test_lookup_by_name(self):
        assert get_stage(STAGE_MOVEMENT_STANDARD) is move_snakes_standard

    def test_unknown_stage_raises(self):
        with pytest.raises(ConfigurationError):
            get_stage("snake.teleport.standard")

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            STAGE_REGISTRY["custom.stage"] = move_snakes_standard
        assert "custom.stage" not in STAGE_REGISTRY

    def test_all_stage_names_registered(self):
        expected = {
            "snake.movement.standard",
            "health.reduce.standard",
            "hazard.damage.standard",
            "snake.eatfood.standard",
            "food.spawn.standard",
            "snake.eliminate.standard",
            "snake.collision.squad",
            "snake.share.squad",
            "hazard.spawn.royale",
            "food.remove.constrictor",
            "snake.grow.constrictor",
            "gameover.standard",
            "gameover.solo",
            "gameover.squad",
        }
        assert set(STAGE_REGISTRY) == expected


class TestPipeline:
    """Tests for Pipeline construction and execute()."""

    def test_unknown_stage_fails_at_construction(self):
        with pytest.raises(ConfigurationError):
            Pipeline(STAGE_MOVEMENT_STANDARD, "not.a.stage")

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            Pipeline("not.a.stage")

    def test_execute_does_not_mutate_input(self):
        board = BoardState(5, 5, turn=1, snakes=[Snake("a", [(2, 2), (2, 1)])])
        before = board.clone()

        ended, next_board = Pipeline(STAGE_MOVEMENT_STANDARD).execute(
            board, Settings(), [SnakeMove("a", UP)]
        )

        assert ended is False
        assert board == before
        assert next_board.snakes[0].head == Point(2, 3)
        assert next_board is not board

    def test_terminating_stage_stops_pipeline(self):
        board = BoardState(5, 5, turn=1, snakes=[Snake("a", [(2, 2), (2, 1)])])
        pipeline = Pipeline(STAGE_GAME_OVER_STANDARD, STAGE_MOVEMENT_STANDARD)

        ended, next_board = pipeline.execute(board, Settings(), [SnakeMove("a", UP)])

        assert ended is True
        # Movement never ran
        assert next_board.snakes[0].head == Point(2, 2)

    def test_empty_pipeline_returns_copy(self):
        board = BoardState(3, 3, turn=2, food=[(1, 1)])
        ended, next_board = Pipeline().execute(board, Settings(), [])
        assert ended is False
        assert next_board == board
        assert len(Pipeline()) == 0

    def test_stage_names_are_kept_in_order(self):
        pipeline = Pipeline(STAGE_MOVEMENT_STANDARD, STAGE_GAME_OVER_STANDARD)
        assert pipeline.stage_names == [STAGE_MOVEMENT_STANDARD, STAGE_GAME_OVER_STANDARD]
        assert len(pipeline) == 2
        assert "gameover.standard" in repr(pipeline)
