import logging
import math
import random
import time
from typing import List, Optional

from config import MCTSConfig
from errors import DraughtsError, SearchError
from game import Player, Position
from move import Move
from tree import Node, Tree

logger = logging.getLogger(__name__)


class MCTS:
    """
    Monte Carlo Tree Search with UCT selection and uniformly random playouts.

    The tree is rooted at a copy of ``position``. Every node stores the
    position reached *after* its move, with the turn already passed on, so a
    node's ``value`` counts results in favour of the side that moved into it.

        searcher = MCTS(Position(fen), MCTSConfig(seed=7))
        best = searcher.search(duration_ms=500)

    A single ``random.Random`` drives both expansion and playouts; pass
    ``rng`` (or ``config.seed``) to make a search reproducible.
    """
    def __init__(self, position: Position, config: Optional[MCTSConfig] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or MCTSConfig()
        self.c = self.config.exploration
        self.rng = rng or random.Random(self.config.seed)
        self.tree: Tree[Position] = Tree(position.clone())
        self.iterations = 0

    @property
    def root(self) -> Node[Position]:
        return self.tree.root

    def search(self, duration_ms: Optional[int] = None) -> List[Move]:
        """
        Run iterations until ``duration_ms`` (default ``config.search_ms``)
        has elapsed, then return the best move(s).

        The deadline is only checked between iterations.
        """
        if duration_ms is None:
            duration_ms = self.config.search_ms
        deadline = time.monotonic() + duration_ms / 1000.0
        start_iterations = self.iterations

        while time.monotonic() < deadline:
            self._guarded_search_once()

        logger.info("Searched %d iterations in %d ms (root visits: %d, tree size: %d)",
                    self.iterations - start_iterations, duration_ms,
                    self.root.visits, len(self.tree))
        return self.best_moves()

    def search_iterations(self, n_simulations: int) -> List[Move]:
        """
        Run exactly ``n_simulations`` iterations and return the best move(s).
        """
        for _ in range(n_simulations):
            self._guarded_search_once()
        logger.debug("Ran %d iterations (root visits: %d, tree size: %d)",
                     n_simulations, self.root.visits, len(self.tree))
        return self.best_moves()

    def _guarded_search_once(self):
        try:
            self.search_once()
        except DraughtsError:
            raise
        except Exception as exc:
            logger.exception("Search failed after %d iterations from %s",
                             self.iterations, self.root.data)
            raise SearchError(
                f"search failed after {self.iterations} iterations: {exc!r}"
            ) from exc

    def search_once(self):
        """
        One select -> expand -> simulate -> backpropagate cycle.
        """
        node = self._select(self.root)
        node = self._expand(node)
        winner = self._simulate(node)

        # The side to move at ``node`` is the one about to move, so a win
        # for it is a loss for the side that moved into ``node``.
        if winner == node.data.active_player:
            self._backpropagate(0.0, node)
        else:
            self._backpropagate(1.0, node)
        self.iterations += 1

    def uct_value(self, node: Node[Position]) -> float:
        """
        Exploitation plus exploration score of ``node``.

        Infinite for the root and for unvisited nodes, so every child is
        tried once before any is exploited.
        """
        if node.is_root() or node.visits == 0:
            return math.inf
        parent = self.tree.parent_of(node)
        exploitation = node.value / node.visits
        exploration = self.c * math.sqrt(math.log(parent.visits) / node.visits)
        return exploitation + exploration

    def _select(self, node: Node[Position]) -> Node[Position]:
        """
        Selection phase: descend the tree by choosing child nodes with the highest UCT,
        until reaching a leaf node. Ties go to the first child.
        """
        while not node.is_leaf():
            best_node = None
            best_score = -math.inf
            for child in self.tree.children_of(node):
                score = self.uct_value(child)
                if score > best_score:
                    best_score = score
                    best_node = child
                    if best_score == math.inf:
                        break
            node = best_node
        return node

    def _expand(self, node: Node[Position]) -> Node[Position]:
        """
        Expansion phase: create a child for every legal move of ``node`` and
        return one of them at random. A terminal node is returned as is.
        """
        position = node.data
        for move in position.get_legal_moves():
            self.tree.add_child(node, position.play(move))

        if node.is_leaf():
            return node
        return self.tree[self.rng.choice(node.children)]

    def _simulate(self, node: Node[Position]) -> Player:
        """
        Simulation (rollout) phase: from ``node``, play uniformly random moves
        until the side to move is stuck or the ply cap is reached.
        Return the side that made the last move.
        """
        temp_state = node.data.clone()

        for _ in range(self.config.max_playout_plies):
            moves = temp_state.get_legal_moves()
            if not moves:
                break
            temp_state.make_move(self.rng.choice(moves))
            temp_state.swap_active_player()

        # Return the winner, not the side left without a move
        temp_state.swap_active_player()
        return temp_state.active_player

    def _backpropagate(self, outcome: float, node: Node[Position]):
        """
        Backpropagation: add ``outcome`` to ``node`` and walk to the root,
        flipping it at every step since each ply changes whose win it is.
        """
        current: Optional[Node[Position]] = node
        while current is not None:
            current.visits += 1
            current.value += outcome
            outcome = 1.0 - outcome
            current = self.tree.parent_of(current)

    def best_moves(self) -> List[Move]:
        """
        The move(s) leading to the most visited child of the root.

        Children don't record their move, so every legal root move is
        replayed and kept if it reaches one of the most visited positions.
        All ties are returned; an unexpanded or terminal root gives [].
        """
        children = self.tree.children_of(self.root)
        if not children:
            return []

        max_visits = max(child.visits for child in children)
        best_states = [child.data for child in children if child.visits == max_visits]

        root_position = self.root.data
        return [
            move for move in root_position.get_legal_moves()
            if root_position.play(move) in best_states
        ]
