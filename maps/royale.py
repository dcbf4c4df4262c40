"""
Royale map: standard setup, and a hazard border that closes in every
``shrink_every_n_turns`` turns.
"""

from domain.board_state import BoardState
from domain.settings import Settings
from rules.variant_stages import royale_hazards

from .standard import StandardMap


class RoyaleMap(StandardMap):
    ID = "royale"

    def update_board(self, board: BoardState, settings: Settings) -> BoardState:
        # Recomputed from scratch, so running after the royale stage changes nothing
        board.hazards = royale_hazards(board.width, board.height, board.turn, settings)
        return board
