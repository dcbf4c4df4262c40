"""
Tests for the local random player and the HTTP agent player.
"""

import os
import random
import sys
from unittest.mock import Mock

import requests

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import BoardState, Snake
from players import HTTPPlayer, Player, RandomPlayer


def corner_board():
    return BoardState(5, 5, turn=1, snakes=[Snake("a", [(0, 0), (0, 0), (0, 0)])])


def fake_request_builder(board, snake_id):
    return {"turn": board.turn, "you": snake_id}


class TestPlayer:
    def test_name_defaults_to_snake_id(self):
        player = Player("snake-1")
        assert player.name == "snake-1"
        assert player.metadata == {"name": "snake-1"}
        assert player.last_move == "up"


class TestRandomPlayer:
    """Tests for RandomPlayer."""

    def test_avoids_walls(self):
        player = RandomPlayer("a", rand=random.Random(0))
        for _ in range(20):
            assert player.get_move(corner_board()) in ("up", "right")

    def test_avoids_bodies_and_hazards(self):
        board = BoardState(5, 5, turn=1, hazards=[(1, 0)], snakes=[
            Snake("a", [(0, 0), (0, 0), (0, 0)]),
            Snake("b", [(1, 2), (0, 1), (0, 2)]),
        ])
        player = RandomPlayer("a", rand=random.Random(0))
        # Every neighbour is blocked, so the last move is kept
        assert player.get_move(board) == "up"

    def test_same_seed_same_moves(self):
        board = BoardState(11, 11, turn=1, snakes=[Snake("a", [(5, 5), (5, 4), (5, 3)])])
        first = RandomPlayer("a", rand=random.Random(42))
        second = RandomPlayer("a", rand=random.Random(42))
        assert [first.get_move(board) for _ in range(10)] == [second.get_move(board) for _ in range(10)]

    def test_missing_snake_keeps_last_move(self):
        player = RandomPlayer("ghost")
        assert player.get_move(corner_board()) == "up"


class TestHTTPPlayer:
    """Tests for HTTPPlayer using a mocked requests session."""

    def _player(self, session):
        return HTTPPlayer(
            "a", "Agent", "http://localhost:8000/", fake_request_builder,
            timeout_ms=250, session=session,
        )

    def test_move_is_posted_and_parsed(self):
        session = Mock()
        session.post.return_value.json.return_value = {"move": "right", "shout": "hi"}
        player = self._player(session)

        move = player.get_move(corner_board())

        assert move == "right"
        assert player.last_move == "right"
        session.post.assert_called_once_with(
            "http://localhost:8000/move",
            json={"turn": 1, "you": "a"},
            timeout=0.25,
        )

    def test_connection_error_repeats_last_move(self):
        session = Mock()
        session.post.return_value.json.return_value = {"move": "left"}
        player = self._player(session)
        player.get_move(corner_board())

        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        assert player.get_move(corner_board()) == "left"

    def test_invalid_json_repeats_last_move(self):
        session = Mock()
        session.post.return_value.json.side_effect = ValueError("not json")
        player = self._player(session)
        assert player.get_move(corner_board()) == "up"

    def test_missing_move_repeats_last_move(self):
        session = Mock()
        session.post.return_value.json.return_value = {"shout": "no move"}
        player = self._player(session)
        assert player.get_move(corner_board()) == "up"

    def test_start_and_end_post_to_their_paths(self):
        session = Mock()
        player = self._player(session)
        player.start(corner_board())
        player.end(corner_board())
        urls = [call.args[0] for call in session.post.call_args_list]
        assert urls == ["http://localhost:8000/start", "http://localhost:8000/end"]

    def test_ping_reads_metadata(self):
        session = Mock()
        session.get.return_value.status_code = 200
        session.get.return_value.json.return_value = {
            "apiversion": "1",
            "author": "someone",
            "color": "#ff0000",
            "head": "smile",
            "tail": "bolt",
            "version": "0.1",
        }
        player = self._player(session)

        assert player.ping() is True
        assert player.status_code == 200
        assert player.metadata == {"name": "Agent", "color": "#ff0000", "head": "smile", "tail": "bolt"}
        assert player.author == "someone"

    def test_ping_failure_is_reported(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.Timeout("slow")
        player = self._player(session)

        assert player.ping() is False
        assert "slow" in player.error
        assert player.color == ""
