import argparse
import logging
import math
import sys

from MCTS import MCTS
from config import MCTSConfig
from errors import InvalidNotationError, SearchError
from game import Position

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find the best draughts move with Monte Carlo Tree Search."
    )
    parser.add_argument("fen", help='position, e.g. "B:W21,22,23:B1,2,3"')
    parser.add_argument("duration_ms", help="search time in milliseconds")
    parser.add_argument("--exploration", type=float, default=math.sqrt(2.0),
                        help="UCT exploration constant (default: sqrt(2))")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for reproducible searches")
    parser.add_argument("--max-plies", type=int, default=1000,
                        help="ply cap for random playouts")
    parser.add_argument("--board", action="store_true",
                        help="print the position before searching")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        position = Position(args.fen)
    except InvalidNotationError as e:
        print(f"Please input a valid draughts FEN in argument 0 ({e}).")
        return 1

    try:
        duration_ms = int(args.duration_ms)
        if duration_ms < 0:
            raise ValueError(duration_ms)
    except ValueError:
        print("Please input a valid search duration in milliseconds in argument 1.")
        return 1

    if args.max_plies < 1:
        print("Please input a playout ply cap of at least 1 for --max-plies.")
        return 1

    if args.board:
        position.print_board()

    config = MCTSConfig(
        exploration=args.exploration,
        max_playout_plies=args.max_plies,
        search_ms=duration_ms,
        seed=args.seed,
    )
    logger.debug("Searching %s for %d ms with %s", position, duration_ms, config)
    try:
        best_moves = MCTS(position, config).search(duration_ms)
    except SearchError as e:
        print(f"An unexpected error occurred during the search: {e}")
        return 2

    print("Best Moves: [" + ", ".join(str(move) for move in best_moves) + "]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
