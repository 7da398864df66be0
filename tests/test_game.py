from __future__ import annotations

import os
import random
import sys
from collections import Counter
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from rps_hmac.commit_reveal import compute_commitment  # noqa: E402
from rps_hmac.game import RoundController  # noqa: E402
from rps_hmac.protocol import (  # noqa: E402
    ConfigurationError,
    EntropyUnavailableError,
    InvalidMoveError,
    MoveSet,
    RoundStateError,
    compare,
)

MOVES = ["rock", "spock", "paper", "lizard", "scissors"]


def test_controller_validates_moves_up_front() -> None:
    with pytest.raises(ConfigurationError):
        RoundController(["rock", "paper"])
    with pytest.raises(ConfigurationError):
        RoundController(["rock", "paper", "paper"])


def test_start_round_commits() -> None:
    controller = RoundController(MOVES)
    assert controller.state == "awaiting_start"

    rnd = controller.start_round()
    assert controller.state == "committed"
    assert rnd.state == "committed"
    assert rnd.challenge().commitment == rnd.commitment
    assert rnd.player_move is None
    assert rnd.outcome is None


def test_committed_round_hides_key_and_move() -> None:
    controller = RoundController(MOVES)
    rnd = controller.start_round()

    assert not hasattr(rnd, "key")
    assert not hasattr(rnd, "computer_move")
    assert rnd._key not in repr(rnd)
    with pytest.raises(RoundStateError):
        rnd.disclosure()
    with pytest.raises(RoundStateError):
        rnd.verify()


def test_round_state_is_read_only() -> None:
    rnd = RoundController(MOVES).start_round()
    with pytest.raises(AttributeError):
        rnd.state = "resolved"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        rnd.outcome = "player_win"  # type: ignore[misc]


def test_tampered_round_is_not_resolved() -> None:
    controller = RoundController(MOVES)
    rnd = controller.start_round()
    replacement = next(m for m in MOVES if m != rnd._computer_move)
    rnd._computer_move = replacement

    with pytest.raises(RoundStateError):
        controller.submit(rnd, "paper")
    assert rnd.state == "committed"
    assert rnd.outcome is None


def test_start_round_surfaces_entropy_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(num_bytes: int) -> bytes:
        raise OSError("no entropy")

    monkeypatch.setattr(os, "urandom", broken)
    monkeypatch.setattr(random, "_urandom", broken)
    controller = RoundController(["rock", "paper", "scissors"])

    with pytest.raises(EntropyUnavailableError):
        controller.start_round()
    assert controller.state == "awaiting_start"


def test_round_fairness_replay() -> None:
    controller = RoundController(MOVES)
    for player_move in MOVES:
        rnd = controller.start_round()
        shown = rnd.challenge().commitment

        controller.submit(rnd, player_move)
        reveal = rnd.disclosure()

        assert controller.state == "resolved"
        assert reveal.commitment == shown
        assert reveal.player_move == player_move
        assert compute_commitment(key=reveal.key, move=reveal.computer_move) == shown
        assert rnd.verify()


def test_outcome_uses_committed_move() -> None:
    controller = RoundController(MoveSet.from_names(MOVES))
    expected_for = {"win": "player_win", "lose": "computer_win", "draw": "draw"}
    for _ in range(50):
        rnd = controller.start_round()
        shown = rnd.commitment
        controller.submit(rnd, "rock")
        reveal = rnd.disclosure()

        assert compute_commitment(key=reveal.key, move=reveal.computer_move) == shown
        assert rnd.outcome == expected_for[compare(controller.move_set, "rock", reveal.computer_move)]


def test_invalid_submission_keeps_commitment() -> None:
    controller = RoundController(MOVES)
    rnd = controller.start_round()
    shown = rnd.commitment

    with pytest.raises(InvalidMoveError):
        controller.submit(rnd, "dynamite")

    assert rnd.state == "committed"
    assert rnd.commitment == shown
    assert rnd.player_move is None

    controller.submit(rnd, "paper")
    reveal = rnd.disclosure()
    assert rnd.state == "resolved"
    assert reveal.commitment == shown
    assert compute_commitment(key=reveal.key, move=reveal.computer_move) == shown


def test_round_cannot_be_resolved_twice() -> None:
    controller = RoundController(MOVES)
    rnd = controller.start_round()
    controller.submit(rnd, "rock")
    with pytest.raises(RoundStateError):
        controller.submit(rnd, "paper")


def test_each_round_gets_fresh_key() -> None:
    controller = RoundController(MOVES)
    first = controller.start_round()
    controller.submit(first, "rock")
    second = controller.start_round()

    assert second is not first
    assert second.state == "committed"
    assert first.state == "resolved"
    assert controller.current is second

    controller.submit(second, "rock")
    assert second.disclosure().key != first.disclosure().key


def test_computer_move_is_roughly_uniform() -> None:
    controller = RoundController(["rock", "paper", "scissors"])
    counts: Counter[str] = Counter()
    for _ in range(300):
        rnd = controller.start_round()
        controller.submit(rnd, "rock")
        counts[rnd.disclosure().computer_move] += 1
    assert set(counts) == {"rock", "paper", "scissors"}
    assert all(count >= 50 for count in counts.values())


def test_larger_key_size() -> None:
    controller = RoundController(MOVES, key_bytes=64)
    rnd = controller.start_round()
    controller.submit(rnd, "rock")
    assert len(rnd.disclosure().key) == 128
