from enum import Enum
from typing import List, Optional

from errors import InvalidNotationError
from move import Move, Offset, SIMPLE_OFFSETS, SOUTHWARD, NORTHWARD

STARTING_FEN = "B:W21,22,23,24,25,26,27,28,29,30,31,32:B1,2,3,4,5,6,7,8,9,10,11,12"

NUM_SQUARES = 32
SQUARES_PER_ROW = 4

# A capture chain can never be longer than the number of opposing pieces
MAX_CAPTURE_CHAIN = 12


class Piece(Enum):
    NONE = "."
    WHITE_MAN = "w"
    WHITE_KING = "W"
    BLACK_MAN = "b"
    BLACK_KING = "B"


class Player(str, Enum):
    WHITE = "W"
    BLACK = "B"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self is Player.WHITE else Player.WHITE


class Position:
    """
    An English draughts position: 32 playable squares plus the side to move.

    Squares are stored zero-indexed (0..31) and numbered 1..32 everywhere
    else (moves, notation), counting the dark squares from the top left:

          0   1   2   3   4   5   6   7
        0 .  [1]  .  [2]  .  [3]  .  [4]
        1 [5]  .  [6]  .  [7]  .  [8]  .
        ...
        7 [29] . [30]  . [31]  . [32]  .

    Black starts on squares 1-12 and moves south (towards 32), White starts
    on 21-32 and moves north. Men promote on the far row: indices >= 28 for
    Black, <= 3 for White.

    Positions are built from a notation string such as
    ``"B:W21,22,...,32:B1,2,...,12"`` (the default is the starting position)
    and are mutated only by ``make_move`` and ``swap_active_player``.
    """

    def __init__(self, fen: str = STARTING_FEN):
        squares, active_player = self._parse_fen(fen)
        self.squares: List[Piece] = squares
        self.active_player: Player = active_player

    @classmethod
    def from_fen(cls, fen: str) -> "Position":
        return cls(fen)

    def clone(self) -> "Position":
        """
        Return an independent copy of this position for experimentation.
        """
        new_position = Position.__new__(Position)
        new_position.squares = self.squares[:]
        new_position.active_player = self.active_player
        return new_position

    # ------------------------------------------------------------------
    # Notation

    @staticmethod
    def _parse_fen(fen: str):
        fields = fen.upper().split(":")
        if len(fields) != 3:
            raise InvalidNotationError(f"notation must have three ':'-separated fields: {fen!r}")

        try:
            active_player = Player(fields[0])
        except ValueError:
            raise InvalidNotationError(f'active player must be "W" or "B", got {fields[0]!r}') from None

        squares = [Piece.NONE] * NUM_SQUARES
        for field, colour, man, king in (
            (fields[1], "W", Piece.WHITE_MAN, Piece.WHITE_KING),
            (fields[2], "B", Piece.BLACK_MAN, Piece.BLACK_KING),
        ):
            if not field.startswith(colour):
                raise InvalidNotationError(f"piece list must start with {colour!r}, got {field!r}")

            for token in field[1:].split(","):
                if token == "":
                    continue
                is_king = token.startswith("K")
                number = token[1:] if is_king else token
                if not number.isdecimal():
                    raise InvalidNotationError(f"invalid square {token!r} in {fen!r}")
                square = int(number)
                if not 1 <= square <= NUM_SQUARES:
                    raise InvalidNotationError(f"square {square} is off the board in {fen!r}")
                squares[square - 1] = king if is_king else man

        return squares, active_player

    def to_fen(self) -> str:
        """
        Serialize to notation, pieces ordered by square ("W:WK1,5,7:B18,22").
        """
        white, black = [], []
        for index, piece in enumerate(self.squares):
            if piece is Piece.NONE:
                continue
            token = ("K" if self.is_king(piece) else "") + str(index + 1)
            if self.is_white_piece(piece):
                white.append(token)
            else:
                black.append(token)
        return f"{self.active_player.value}:W{','.join(white)}:B{','.join(black)}"

    def __str__(self) -> str:
        return self.to_fen()

    def __repr__(self) -> str:
        return f"Position({self.to_fen()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self.squares == other.squares and self.active_player == other.active_player

    __hash__ = None

    # ------------------------------------------------------------------
    # Pieces

    def is_white_piece(self, piece: Piece) -> bool:
        return piece in (Piece.WHITE_MAN, Piece.WHITE_KING)

    def is_black_piece(self, piece: Piece) -> bool:
        return piece in (Piece.BLACK_MAN, Piece.BLACK_KING)

    def is_king(self, piece: Piece) -> bool:
        return piece in (Piece.WHITE_KING, Piece.BLACK_KING)

    def owner(self, piece: Piece) -> Optional[Player]:
        if self.is_white_piece(piece):
            return Player.WHITE
        if self.is_black_piece(piece):
            return Player.BLACK
        return None

    def is_opponent(self, piece1: Piece, piece2: Piece) -> bool:
        """Check if piece1 and piece2 belong to opposite sides."""
        owner1, owner2 = self.owner(piece1), self.owner(piece2)
        return owner1 is not None and owner2 is not None and owner1 is not owner2

    def _move_directions(self, piece: Piece):
        """
        Simple-move offsets a piece may use: all four for a king, forward only for a man.
        """
        if self.is_king(piece):
            return SIMPLE_OFFSETS
        return SOUTHWARD if self.is_black_piece(piece) else NORTHWARD

    def swap_active_player(self):
        self.active_player = self.active_player.opponent

    # ------------------------------------------------------------------
    # Board geometry

    @staticmethod
    def step(offset: Offset, index: int) -> Optional[int]:
        """
        Find the square index reached by taking ``offset`` from ``index``.

        Returns None when the step would leave the board, either past the
        top/bottom row or by wrapping around a side edge.
        """
        row = index // SQUARES_PER_ROW
        even_row = row % 2 == 0
        if offset is Offset.MOVE_NORTHEAST:
            target = index - (3 if even_row else 4)
        elif offset is Offset.MOVE_NORTHWEST:
            target = index - (4 if even_row else 5)
        elif offset is Offset.MOVE_SOUTHEAST:
            target = index + (5 if even_row else 4)
        elif offset is Offset.MOVE_SOUTHWEST:
            target = index + (4 if even_row else 3)
        else:
            target = index + offset.delta

        if not 0 <= target < NUM_SQUARES:
            return None
        # Rows alone don't catch a step that wraps from one edge to the other
        if abs(target % SQUARES_PER_ROW - index % SQUARES_PER_ROW) > 1:
            return None
        return target

    # ------------------------------------------------------------------
    # Move generation

    def get_legal_moves(self) -> List[Move]:
        """
        Every legal move for the active player.

        Capturing is mandatory: when any capture exists, only captures are
        returned. Moves come in increasing order of start square, and within
        a square in the fixed direction order of ``Offset``. Different
        capture chains that end on the same square are kept apart.
        """
        own = [
            index for index, piece in enumerate(self.squares)
            if self.owner(piece) is self.active_player
        ]

        capture_moves = []
        for index in own:
            capture_moves.extend(self.get_captures(index))
        if capture_moves:
            return capture_moves

        moves = []
        for index in own:
            for offset in self._move_directions(self.squares[index]):
                target = self.step(offset, index)
                if target is not None and self.squares[target] is Piece.NONE:
                    moves.append(Move(index + 1, offset))
        return moves

    def get_captures(self, index: int, _depth: int = 0) -> List[Move]:
        """
        Recursively find every capture chain for the piece on ``index``.

        Each single jump is played out on a private copy of the board and
        the search continues from the landing square, unless the jump
        crowned a man: promotion always ends the turn.
        """
        piece = self.squares[index]
        if piece is Piece.NONE or _depth >= MAX_CAPTURE_CHAIN:
            return []

        moves = []
        for offset in self._move_directions(piece):
            jump = offset.jump
            landing = self.step(jump, index)
            if landing is None or self.squares[landing] is not Piece.NONE:
                continue
            jumped = self.step(offset, index)
            if jumped is None or not self.is_opponent(piece, self.squares[jumped]):
                continue

            hypothetical = self.clone()
            hypothetical.make_move(Move(index + 1, jump))

            continuations = []
            if hypothetical.squares[landing] is piece:
                continuations = hypothetical.get_captures(landing, _depth + 1)

            if continuations:
                for continuation in continuations:
                    moves.append(Move(index + 1, (jump,) + continuation.offsets))
            else:
                moves.append(Move(index + 1, jump))
        return moves

    def make_move(self, move: Move) -> int:
        """
        Play ``move`` on this board and return the 1-based landing square.

        The move is assumed to be legal. Captured pieces are removed and a
        man reaching the far row is crowned. The active player is NOT
        swapped; call ``swap_active_player`` for that.
        """
        location = move.start - 1
        moved = self.squares[location]
        self.squares[location] = Piece.NONE

        for offset in move.offsets:
            if offset.is_jump:
                # The captured piece sits where a simple move would have landed
                self.squares[self.step(offset.simple, location)] = Piece.NONE
            location = self.step(offset, location)

        if location >= 28 and moved is Piece.BLACK_MAN:
            self.squares[location] = Piece.BLACK_KING
        elif location <= 3 and moved is Piece.WHITE_MAN:
            self.squares[location] = Piece.WHITE_KING
        else:
            self.squares[location] = moved
        return location + 1

    def play(self, move: Move) -> "Position":
        """
        Return a copy with ``move`` made and the turn passed to the other side.
        """
        child = self.clone()
        child.make_move(move)
        child.swap_active_player()
        return child

    # ------------------------------------------------------------------
    # Game status

    def is_game_over(self) -> bool:
        return not self.get_legal_moves()

    def get_winner(self) -> Optional[Player]:
        """
        The side that made the last move when the side to move is stuck,
        or None while the game is still going.
        """
        if not self.is_game_over():
            return None
        return self.active_player.opponent

    def perft(self, depth: int) -> int:
        """
        Count the leaf moves of the full move tree ``depth`` plies deep.
        """
        if depth <= 0:
            raise ValueError("depth must be >= 1")
        moves = self.get_legal_moves()
        if depth == 1:
            return len(moves)
        return sum(self.play(move).perft(depth - 1) for move in moves)

    # ------------------------------------------------------------------
    # Display

    def board_str(self) -> str:
        """
        Render the board as an 8x8 ASCII diagram.
        """
        lines = ["  " + " ".join(str(c) for c in range(8))]
        for r in range(8):
            row_str = []
            for c in range(8):
                # Dark squares sit on odd columns of even rows and vice versa
                if (r + c) % 2 == 1:
                    row_str.append(self.squares[r * SQUARES_PER_ROW + c // 2].value)
                else:
                    row_str.append(" ")
            lines.append(f"{r} " + " ".join(row_str))
        return "\n".join(lines)

    def print_board(self):
        """
        Display the board in a simple ASCII format.
        """
        print(self.board_str())
        print()
