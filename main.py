import argparse
import logging
import os
import random
import sys
import time
import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from domain.board_state import BoardState
from domain.constants import GAME_TYPE_SOLO
from domain.errors import RulesError
from domain.point import SnakeMove
from maps import StandardMap, get_map
from players import HTTPPlayer, Player, RandomPlayer
from rules import RulesetBuilder, StandardRuleset
from rules.builder import (
    PARAM_FOOD_SPAWN_CHANCE,
    PARAM_GAME_TYPE,
    PARAM_HAZARD_DAMAGE_PER_TURN,
    PARAM_MINIMUM_FOOD,
    PARAM_SHRINK_EVERY_N_TURNS,
)
from services.game_exporter import GameExporter
from services.snake_request import build_game_info, build_snake_request

load_dotenv()

logger = logging.getLogger(__name__)


class LocalGame:
    """
    Runs one game locally:
      - Board setup through the game map
      - Move collection from every living snake's player (parallel or sequential)
      - Turn resolution through the ruleset, then the map's board update
      - Optional board printing and JSONL export
    """

    def __init__(
        self,
        ruleset: StandardRuleset,
        game_map: StandardMap,
        width: int,
        height: int,
        game_id: Optional[str] = None,
        timeout_ms: int = 500,
        sequential: bool = False,
        view_map: bool = False,
        turn_delay_ms: int = 0,
        turn_duration_ms: int = 0,
        output: Optional[str] = None,
    ):
        self.ruleset = ruleset
        self.game_map = game_map
        self.width = width
        self.height = height
        self.game_id = game_id or str(uuid.uuid4())
        self.timeout_ms = timeout_ms
        self.sequential = sequential
        self.view_map = view_map
        self.turn_delay_ms = turn_delay_ms
        self.turn_duration_ms = turn_duration_ms
        self.output = output

        self.players: Dict[str, Player] = {}
        self.squads: Dict[str, str] = {}
        self.board: Optional[BoardState] = None
        self.history: List[BoardState] = []
        self.game_over = False
        self.winner: Optional[Player] = None
        self.is_draw = False

        self.game_info = build_game_info(self.game_id, ruleset, game_map.ID, timeout_ms)
        self.exporter = GameExporter(self.game_info) if output else None

    def add_player(self, player: Player, squad: str = ""):
        if player.snake_id in self.players:
            raise ValueError(f"Snake with id {player.snake_id} already exists.")
        self.players[player.snake_id] = player
        if squad:
            self.squads[player.snake_id] = squad

    def build_request(self, board: BoardState, snake_id: str) -> Dict[str, Any]:
        snake_meta = {sid: player.metadata for sid, player in self.players.items()}
        return build_snake_request(self.game_info, board, snake_id, snake_meta, self.squads)

    def initialize_board(self) -> BoardState:
        """
        Create the turn 0 board through the map, apply the ruleset's initial
        adjustments, and tell every player the game is starting.
        """
        board = self.game_map.setup_board(
            self.ruleset.settings(), self.width, self.height, list(self.players)
        )
        self.board = self.ruleset.modify_initial_board_state(board)
        self.history.append(self.board)

        for player in self.players.values():
            player.start(self.board)

        return self.board

    def gather_moves_in_parallel(self) -> List[SnakeMove]:
        """
        Ask every living snake for a move using threads.

        Waits for every response (each bounded by the request timeout)
        before returning, then puts the moves in board order.
        """
        board = self.board
        living = [snake.id for snake in board.living_snakes() if snake.id in self.players]
        if not living:
            return []

        collected: Dict[str, str] = {}
        with ThreadPoolExecutor(max_workers=len(living)) as executor:
            futures = {
                executor.submit(self.players[snake_id].get_move, board): snake_id
                for snake_id in living
            }
            for future in as_completed(futures):
                snake_id = futures[future]
                collected[snake_id] = future.result()

        return [SnakeMove(snake_id, collected[snake_id]) for snake_id in living]

    def gather_moves_sequentially(self) -> List[SnakeMove]:
        board = self.board
        return [
            SnakeMove(snake.id, self.players[snake.id].get_move(board))
            for snake in board.living_snakes()
            if snake.id in self.players
        ]

    def run_round(self):
        """
        Execute one turn:
          1) Export the current board (so turn 0 is saved too)
          2) Collect one move per living snake
          3) Resolve the turn with the ruleset, then let the map update the board
          4) Check for game over
        """
        if self.game_over:
            logger.info("Game is already over. No more turns.")
            return

        end_time = None
        if self.turn_duration_ms > 0:
            end_time = time.monotonic() + self.turn_duration_ms / 1000.0

        if self.exporter is not None and self.players:
            first_id = next(iter(self.players))
            self.exporter.add_snake_request(self.build_request(self.board, first_id))

        if self.sequential:
            moves = self.gather_moves_sequentially()
        else:
            moves = self.gather_moves_in_parallel()

        for snake_move in moves:
            logger.debug(f"Snake {snake_move.id} ({self.players[snake_move.id].name}) chose move: {snake_move.move}")

        board = self.ruleset.create_next_board_state(self.board, moves)
        board = self.game_map.update_board(board, self.ruleset.settings())
        self.board = board
        self.history.append(board)

        if self.view_map:
            self.print_board()
        else:
            logger.info(f"[{board.turn}]: State: {board!r}")

        if self.turn_delay_ms > 0:
            time.sleep(self.turn_delay_ms / 1000.0)
        if end_time is not None:
            time.sleep(max(0.0, end_time - time.monotonic()))

        if self.ruleset.is_game_over(board):
            self.end_game()

    def run(self) -> Dict[str, Any]:
        """
        Play a full game.

        Raises:
            ConsistencyFault: If the ruleset hits a broken invariant; the
                game cannot continue.
        """
        if self.board is None:
            self.initialize_board()
        if self.view_map:
            self.print_board()

        if self.ruleset.is_game_over(self.board):
            self.end_game()
        while not self.game_over:
            self.run_round()

        if self.exporter is not None:
            self.exporter.set_result(
                self.winner.snake_id if self.winner else "",
                self.winner.name if self.winner else "",
                self.is_draw,
            )
            self.exporter.flush_to_file(self.output)

        return {
            "game_id": self.game_id,
            "turns": self.board.turn,
            "winner": self.winner.name if self.winner else None,
            "is_draw": self.is_draw,
            "eliminations": {
                snake.id: {
                    "cause": snake.eliminated_cause,
                    "by": snake.eliminated_by,
                    "turn": snake.eliminated_on_turn,
                }
                for snake in self.board.snakes
                if snake.is_eliminated
            },
        }

    def end_game(self):
        self.game_over = True
        board = self.board

        if self.ruleset.name() == GAME_TYPE_SOLO:
            self.winner = next(iter(self.players.values()), None)
            self.is_draw = False
            logger.info(f"[DONE]: Game completed after {board.turn} turns.")
        else:
            living = [snake for snake in board.living_snakes() if snake.id in self.players]
            if living:
                self.winner = self.players[living[0].id]
                self.is_draw = False
                logger.info(f"[DONE]: Game completed after {board.turn} turns. {self.winner.name} is the winner.")
            else:
                self.winner = None
                self.is_draw = True
                logger.info(f"[DONE]: Game completed after {board.turn} turns. It was a draw.")

        for player in self.players.values():
            player.end(board)

    def print_board(self):
        """
        Logs a visual representation of the current board.
        """
        settings = self.ruleset.settings()
        lines = [f"Ruleset: {self.ruleset.name()}, Seed: {settings.seed}, Turn: {self.board.turn}"]
        lines.append(f"Hazards #: {self.board.hazards}")
        lines.append(f"Food F: {self.board.food}")
        for i, snake in enumerate(self.board.snakes):
            name = self.players[snake.id].name if snake.id in self.players else snake.id
            lines.append(f"{name} {i % 10}: {snake!r}")
        lines.append(self.board.print_board())
        logger.info("\n" + "\n".join(lines) + "\n")


def build_players(
    snake_ids: Sequence[str],
    names: Sequence[str],
    urls: Sequence[str],
    seed: int,
    request_builder,
    timeout_ms: int,
    debug_requests: bool = False,
) -> List[Player]:
    """
    Pair names with URLs, one player per snake id. A snake without a URL
    is played by a local RandomPlayer seeded from the game seed.
    """
    if len(names) != len(urls):
        logger.warning("Number of names and URLs do not match: defaults will be applied to missing values")

    players: List[Player] = []
    for i, snake_id in enumerate(snake_ids):
        name = names[i] if i < len(names) else snake_id
        url = urls[i] if i < len(urls) else ""

        if not url:
            players.append(RandomPlayer(snake_id, name, rand=random.Random(seed + i)))
            continue

        player = HTTPPlayer(
            snake_id,
            name,
            url,
            request_builder=request_builder,
            timeout_ms=timeout_ms,
            debug_requests=debug_requests,
        )
        player.ping()
        players.append(player)

    return players


def run_game(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Build the ruleset, map and players from parsed arguments and play one game.

    Raises:
        ConfigurationError: For unknown rulesets/maps or malformed settings.
        ConsistencyFault: If turn resolution hits a broken invariant.
    """
    names = args.name or []
    urls = args.url or []
    squads = args.squad or []
    num_snakes = max(len(names), len(urls))

    # Snake ids are needed for the squad map before the ruleset exists
    snake_ids = [str(uuid.uuid4()) for _ in range(num_snakes)]

    builder = (
        RulesetBuilder()
        .with_seed(args.seed)
        .with_params({
            PARAM_GAME_TYPE: args.gametype,
            PARAM_FOOD_SPAWN_CHANCE: str(args.foodSpawnChance),
            PARAM_MINIMUM_FOOD: str(args.minimumFood),
            PARAM_HAZARD_DAMAGE_PER_TURN: str(args.hazardDamagePerTurn),
            PARAM_SHRINK_EVERY_N_TURNS: str(args.shrinkEveryNTurns),
        })
        .with_solo(num_snakes < 2)
    )
    for snake_id, squad in zip(snake_ids, squads):
        builder.add_snake_to_squad(snake_id, squad)
    ruleset = builder.build()

    game = LocalGame(
        ruleset=ruleset,
        game_map=get_map(args.map),
        width=args.width,
        height=args.height,
        timeout_ms=args.timeout,
        sequential=args.sequential,
        view_map=args.viewmap,
        turn_delay_ms=args.delay,
        turn_duration_ms=args.duration,
        output=args.output,
    )

    players = build_players(
        snake_ids, names, urls, args.seed, game.build_request, args.timeout, args.debug_requests
    )
    for i, player in enumerate(players):
        game.add_player(player, squads[i] if i < len(squads) else "")

    return game.run()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play a game of snake locally against local or remote snake agents."
    )
    parser.add_argument("-W", "--width", type=int, default=os.getenv("SNAKE_BOARD_WIDTH", "11"),
                        help="Width of Board")
    parser.add_argument("-H", "--height", type=int, default=os.getenv("SNAKE_BOARD_HEIGHT", "11"),
                        help="Height of Board")
    parser.add_argument("-n", "--name", action="append", help="Name of Snake (repeatable)")
    parser.add_argument("-u", "--url", action="append", help="URL of Snake (repeatable)")
    parser.add_argument("--squad", action="append", help="Squad of Snake, in the same order as --name (repeatable)")
    parser.add_argument("-t", "--timeout", type=int, default=os.getenv("SNAKE_REQUEST_TIMEOUT_MS", "500"),
                        help="Request Timeout in milliseconds")
    parser.add_argument("-s", "--sequential", action="store_true", help="Use Sequential Processing")
    parser.add_argument("-g", "--gametype", default=os.getenv("SNAKE_GAME_TYPE", "standard"),
                        help="Type of Game Rules")
    parser.add_argument("-m", "--map", default=os.getenv("SNAKE_MAP", "standard"),
                        help="Game map to use to populate the board")
    parser.add_argument("-v", "--viewmap", action="store_true", help="View the Map Each Turn")
    parser.add_argument("-r", "--seed", type=int, default=time.time_ns(), help="Random Seed")
    parser.add_argument("-d", "--delay", type=int, default=0, help="Turn Delay in Milliseconds")
    parser.add_argument("-D", "--duration", type=int, default=0, help="Minimum Turn Duration in Milliseconds")
    parser.add_argument("--debug-requests", action="store_true", help="Log body of all requests sent")
    parser.add_argument("-o", "--output", default=None,
                        help="File path to output game state to. Existing files will be overwritten")
    parser.add_argument("--foodSpawnChance", type=int, default=15,
                        help="Percentage chance of spawning a new food every round")
    parser.add_argument("--minimumFood", type=int, default=1,
                        help="Minimum food to keep on the board every turn")
    parser.add_argument("--hazardDamagePerTurn", type=int, default=14,
                        help="Health damage a snake will take when ending its turn in a hazard")
    parser.add_argument("--shrinkEveryNTurns", type=int, default=25,
                        help="In Royale mode, the number of turns between generating new hazards")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug_requests else logging.INFO)

    try:
        result = run_game(args)
    except RulesError as e:
        logger.error(f"Game aborted: {e}")
        raise SystemExit(1)
    except OSError as e:
        logger.error(f"Unable to export game: {e}")
        raise SystemExit(1)

    logger.info(f"Simulation Result Summary: {result}")
    return result


if __name__ == "__main__":
    main(sys.argv[1:])
