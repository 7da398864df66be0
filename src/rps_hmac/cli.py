from __future__ import annotations

import argparse
import logging
import os
from typing import Callable

from .commit_reveal import verify_commitment
from .game import Round, RoundController
from .help_table import build_table, format_table, render_help
from .protocol import ConfigurationError, InvalidMoveError, MoveSet, Outcome

LOG_LEVEL_ENV = "RPS_HMAC_LOG_LEVEL"
EXAMPLE = "rps-hmac play rock paper scissors"

_RESULT_TEXT: dict[Outcome, str] = {
    "player_win": "🎉 You win!",
    "computer_win": "😞 Computer wins!",
    "draw": "🤝 Draw",
}


def main(argv: list[str] | None = None, *, input_fn: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(
        prog="rps-hmac",
        description="Generalized rock-paper-scissors with a provably fair computer.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Python logging level (default from {LOG_LEVEL_ENV}, else WARNING)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play interactive rounds against the computer")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of unique moves, in dominance order")

    verify = sub.add_parser("verify", help="Check a disclosed key and move against the HMAC shown before your move")
    verify.add_argument("--key", required=True)
    verify.add_argument("--move", required=True)
    verify.add_argument("--hmac", required=True)

    table = sub.add_parser("table", help="Print the win/lose/draw table for a move list")
    table.add_argument("moves", nargs="*")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.cmd == "verify":
        if verify_commitment(expected_commitment=args.hmac, key=args.key, move=args.move):
            print("OK")
            return 0
        print("MISMATCH")
        return 1

    try:
        move_set = MoveSet.from_names(args.moves)
    except ConfigurationError as exc:
        print(f"Invalid moves: {exc}.")
        print("Provide an odd number (at least 3) of unique moves.")
        print(f"Example: {EXAMPLE}")
        return 2

    if args.cmd == "table":
        print(format_table(build_table(move_set)))
        return 0

    if args.cmd == "play":
        play_interactive(RoundController(move_set), input_fn=input_fn)
        return 0

    raise SystemExit("unhandled command")


def play_interactive(controller: RoundController, *, input_fn: Callable[[str], str] = input) -> None:
    rnd = controller.start_round()
    _show_menu(rnd)
    while True:
        try:
            answer = input_fn("Enter your move: ").strip()
        except EOFError:
            return
        if answer == "0":
            return
        if answer == "?":
            print(render_help(controller.move_set))
            print()
            _show_menu(rnd)
            continue

        try:
            controller.submit(rnd, _move_for_answer(controller.move_set, answer))
        except InvalidMoveError:
            print("❌ Invalid move. Please try again.\n")
            _show_menu(rnd)
            continue

        _show_result(rnd)
        rnd = controller.start_round()
        _show_menu(rnd)


def _move_for_answer(move_set: MoveSet, answer: str) -> str:
    # Menu numbers are 1-based; anything else goes through as a move name.
    if answer.isdecimal():
        idx = int(answer) - 1
        if 0 <= idx < len(move_set):
            return move_set.moves[idx]
    return answer


def _show_menu(rnd: Round) -> None:
    print(f"HMAC: {rnd.challenge().commitment}")
    print("Available moves:")
    for number, move in enumerate(rnd.move_set, start=1):
        print(f"{number} - {move}")
    print("0 - exit")
    print("? - help")


def _show_result(rnd: Round) -> None:
    reveal = rnd.disclosure()
    print(f"Your move: {reveal.player_move}")
    print(f"Computer move: {reveal.computer_move}")
    print(_RESULT_TEXT[reveal.outcome])
    print(f"HMAC key: {reveal.key}\n")


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


if __name__ == "__main__":
    raise SystemExit(main())
