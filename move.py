from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union

from errors import InvalidMoveError


class Offset(Enum):
    """
    The eight ways a piece can step along a diagonal.

    Each member carries a linear delta into the 32-square board. That delta
    is only a first approximation: simple moves really depend on the parity
    of the row, see ``Position.step``.
    """
    MOVE_SOUTHEAST = 5
    MOVE_SOUTHWEST = 4
    MOVE_NORTHEAST = -4
    MOVE_NORTHWEST = -5
    JUMP_SOUTHEAST = 9
    JUMP_SOUTHWEST = 7
    JUMP_NORTHEAST = -7
    JUMP_NORTHWEST = -9

    @property
    def delta(self) -> int:
        return self.value

    @property
    def is_jump(self) -> bool:
        return self.name.startswith("JUMP_")

    @property
    def simple(self) -> "Offset":
        """The one-square move in the same direction (the square a jump passes over)."""
        if not self.is_jump:
            return self
        return Offset["MOVE_" + self.name[len("JUMP_"):]]

    @property
    def jump(self) -> "Offset":
        """The two-square jump in the same direction."""
        if self.is_jump:
            return self
        return Offset["JUMP_" + self.name[len("MOVE_"):]]


SIMPLE_OFFSETS = (
    Offset.MOVE_SOUTHEAST,
    Offset.MOVE_SOUTHWEST,
    Offset.MOVE_NORTHEAST,
    Offset.MOVE_NORTHWEST,
)
SOUTHWARD = (Offset.MOVE_SOUTHEAST, Offset.MOVE_SOUTHWEST)
NORTHWARD = (Offset.MOVE_NORTHEAST, Offset.MOVE_NORTHWEST)


@dataclass(frozen=True, init=False)
class Move:
    """
    Everything one side does in a single turn.

    ``start`` is the 1-based square (1-32, dark squares only, counted from
    the top left) the moving piece begins on. ``offsets`` are the steps it
    takes from there, in order: a single simple move, or one or more jumps.

        Move(19, Offset.MOVE_NORTHWEST)
        Move(5, [Offset.JUMP_SOUTHEAST, Offset.JUMP_NORTHEAST])

    ``None`` entries among the offsets are dropped.
    """
    start: int
    offsets: Tuple[Offset, ...]

    def __init__(self, start: int, *offsets: Union[Offset, Iterable[Offset], None]):
        if not 1 <= start <= 32:
            raise InvalidMoveError(f"start should be in the range 1-32 inclusive, got {start}")

        # Accept either varargs or a single list/tuple of offsets
        if len(offsets) == 1 and offsets[0] is not None and not isinstance(offsets[0], Offset):
            offsets = tuple(offsets[0])

        object.__setattr__(self, "start", start)
        object.__setattr__(self, "offsets", tuple(o for o in offsets if o is not None))

    @property
    def is_capture(self) -> bool:
        return any(o.is_jump for o in self.offsets)

    def __str__(self) -> str:
        return "Move: " + "-->".join([str(self.start)] + [o.name for o in self.offsets])
