"""One commit-reveal round against the computer.

A round is committed as soon as it is created: the computer's move is drawn,
a fresh key is generated and only the HMAC of the move is shown. Submitting a
valid player move resolves the round; only then do the key and the computer's
move become available, through ``Round.disclosure()``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .commit_reveal import KEY_BYTES, choose_move, compute_commitment, generate_key, verify_commitment
from .protocol import (
    Challenge,
    InvalidMoveError,
    Move,
    MoveSet,
    Outcome,
    Reveal,
    RoundStateError,
    determine_outcome,
    is_valid_move,
)

logger = logging.getLogger(__name__)

RoundState = Literal["awaiting_start", "committed", "resolved"]


@dataclass
class Round:
    move_set: MoveSet
    commitment: str
    _computer_move: Move = field(repr=False)
    _key: str = field(repr=False)
    _state: RoundState = "committed"
    _player_move: Move | None = None
    _outcome: Outcome | None = None

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def player_move(self) -> Move | None:
        return self._player_move

    @property
    def outcome(self) -> Outcome | None:
        return self._outcome

    def challenge(self) -> Challenge:
        return Challenge(commitment=self.commitment)

    def disclosure(self) -> Reveal:
        if self._state != "resolved" or self._player_move is None or self._outcome is None:
            raise RoundStateError("the computer's move and key are disclosed only after the round is resolved")
        return Reveal(
            computer_move=self._computer_move,
            player_move=self._player_move,
            outcome=self._outcome,
            key=self._key,
            commitment=self.commitment,
        )

    def verify(self) -> bool:
        reveal = self.disclosure()
        return verify_commitment(expected_commitment=reveal.commitment, key=reveal.key, move=reveal.computer_move)

    def _resolve(self, player_move: Move) -> None:
        if not verify_commitment(expected_commitment=self.commitment, key=self._key, move=self._computer_move):
            raise RoundStateError("the round no longer matches its commitment")
        self._player_move = player_move
        self._outcome = determine_outcome(self.move_set, player_move, self._computer_move)
        self._state = "resolved"


class RoundController:
    def __init__(self, moves: MoveSet | Iterable[str], *, key_bytes: int = KEY_BYTES) -> None:
        self.move_set = moves if isinstance(moves, MoveSet) else MoveSet.from_names(moves)
        self.key_bytes = key_bytes
        self.current: Round | None = None

    @property
    def state(self) -> RoundState:
        return self.current.state if self.current is not None else "awaiting_start"

    def start_round(self) -> Round:
        computer_move = choose_move(self.move_set.moves)
        key = generate_key(self.key_bytes)
        commitment = compute_commitment(key=key, move=computer_move)
        rnd = Round(move_set=self.move_set, commitment=commitment, _computer_move=computer_move, _key=key)
        self.current = rnd
        logger.debug("round committed: hmac=%s", commitment)
        return rnd

    def submit(self, rnd: Round, player_move: str) -> Round:
        if rnd.state != "committed":
            raise RoundStateError(f"cannot accept a move in state {rnd.state!r}")
        if not is_valid_move(rnd.move_set, player_move):
            logger.debug("rejected move %r, round stays committed", player_move)
            raise InvalidMoveError(player_move, rnd.move_set)

        rnd._resolve(player_move)
        logger.debug("round resolved: player=%s outcome=%s", player_move, rnd.outcome)
        return rnd
