# engine_api.py

import logging
from typing import List, Optional

from MCTS import MCTS
from config import MCTSConfig
from errors import InvalidMoveError
from game import Position
from move import Move

logger = logging.getLogger(__name__)


def move_to_dict(move: Move) -> dict:
    return {
        "start": move.start,
        "offsets": [offset.name for offset in move.offsets],
        "text": str(move),
    }


def get_board_state(position: Position) -> dict:
    return {
        "fen": position.to_fen(),
        "current_player": position.active_player.value,
        "board": position.board_str(),
    }


def get_legal_moves(fen: str) -> List[dict]:
    position = Position(fen)
    return [move_to_dict(move) for move in position.get_legal_moves()]


def analyse(fen: str, duration_ms: Optional[int] = None, seed: Optional[int] = None,
            exploration: Optional[float] = None) -> dict:
    """
    Search ``fen`` for ``duration_ms`` and report the best move(s).

    Raises InvalidNotationError for a bad position and SearchError if the
    search itself blows up.
    """
    position = Position(fen)
    config = MCTSConfig(seed=seed)
    if duration_ms is not None:
        config.search_ms = duration_ms
    if exploration is not None:
        config.exploration = exploration

    searcher = MCTS(position, config)
    best_moves = searcher.search(config.search_ms)
    logger.debug("Best moves for %s: %s", fen, [str(move) for move in best_moves])

    return {
        "fen": position.to_fen(),
        "best_moves": [move_to_dict(move) for move in best_moves],
        "iterations": searcher.iterations,
        "root_visits": searcher.root.visits,
    }


def make_move(fen: str, move_index: int) -> dict:
    """
    Play the ``move_index``-th legal move of ``fen`` and return the new state.
    """
    position = Position(fen)
    legal_moves = position.get_legal_moves()
    if not 0 <= move_index < len(legal_moves):
        raise InvalidMoveError(
            f"move index {move_index} out of range, {len(legal_moves)} legal moves in {fen}"
        )

    move = legal_moves[move_index]
    new_position = position.play(move)
    return {"move": move_to_dict(move), "state": get_board_state(new_position)}


def get_game_status(fen: str) -> dict:
    position = Position(fen)
    if position.is_game_over():
        return {"status": "over", "winner": position.get_winner().value}
    return {"status": "ongoing", "current_player": position.active_player.value}
