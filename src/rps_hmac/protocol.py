from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal

Move = str
Result = Literal["win", "lose", "draw"]
Outcome = Literal["player_win", "computer_win", "draw"]

MIN_MOVES = 3


class RpsError(Exception):
    pass


class ConfigurationError(RpsError, ValueError):
    """The move list cannot be played: too short, even length, or duplicated."""


class InvalidMoveError(RpsError, ValueError):
    def __init__(self, move: str, valid: Iterable[str]) -> None:
        self.move = move
        self.valid = tuple(valid)
        super().__init__(f"invalid move: {move!r}. valid moves: {', '.join(self.valid)}")


class EntropyUnavailableError(RpsError, RuntimeError):
    pass


class RoundStateError(RpsError, RuntimeError):
    pass


@dataclass(frozen=True)
class MoveSet:
    moves: tuple[Move, ...]

    def __post_init__(self) -> None:
        problem = _move_list_problem(self.moves)
        if problem is not None:
            raise ConfigurationError(problem)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "MoveSet":
        return cls(tuple(names))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __contains__(self, move: object) -> bool:
        return move in self.moves

    def index(self, move: str) -> int:
        try:
            return self.moves.index(move)
        except ValueError:
            raise InvalidMoveError(move, self.moves) from None

    @property
    def half(self) -> int:
        return (len(self.moves) - 1) // 2


def _move_list_problem(moves: tuple[str, ...]) -> str | None:
    if len(moves) < MIN_MOVES:
        return f"need at least {MIN_MOVES} moves, got {len(moves)}"
    if len(moves) % 2 == 0:
        return f"need an odd number of moves, got {len(moves)}"
    if any(not isinstance(m, str) or not m for m in moves):
        return "move names must be non-empty strings"
    dupes = sorted(m for m, count in Counter(moves).items() if count > 1)
    if dupes:
        return "moves must be unique, repeated: " + ", ".join(dupes)
    return None


def is_valid_move(move_set: MoveSet, value: str) -> bool:
    return value in move_set


def compare(move_set: MoveSet, a: Move, b: Move) -> Result:
    """Decide how move ``a`` fares against move ``b``.

    Every move loses to the ``half`` moves that follow it in circular order
    and beats the ``half`` moves that precede it, so with
    ``[rock, paper, scissors]`` rock beats scissors and loses to paper.
    """
    i = move_set.index(a)
    j = move_set.index(b)
    if i == j:
        return "draw"
    n = len(move_set)
    return "win" if (i - j - 1) % n < move_set.half else "lose"


def beats(move_set: MoveSet, a: Move) -> tuple[Move, ...]:
    """Moves that ``a`` beats, nearest first."""
    i = move_set.index(a)
    n = len(move_set)
    return tuple(move_set.moves[(i - k) % n] for k in range(1, move_set.half + 1))


def beaten_by(move_set: MoveSet, a: Move) -> tuple[Move, ...]:
    """Moves that beat ``a``, nearest first."""
    i = move_set.index(a)
    n = len(move_set)
    return tuple(move_set.moves[(i + k) % n] for k in range(1, move_set.half + 1))


def determine_outcome(move_set: MoveSet, player: Move, computer: Move) -> Outcome:
    result = compare(move_set, player, computer)
    if result == "draw":
        return "draw"
    return "player_win" if result == "win" else "computer_win"


@dataclass(frozen=True)
class Challenge:
    commitment: str


@dataclass(frozen=True)
class Reveal:
    computer_move: Move
    player_move: Move
    outcome: Outcome
    key: str
    commitment: str
