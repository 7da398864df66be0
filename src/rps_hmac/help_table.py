from __future__ import annotations

from .protocol import MoveSet, beaten_by, beats, compare

CORNER = "v PC\\User >"


def build_table(move_set: MoveSet) -> list[list[str]]:
    """Rows are the computer's move, columns the player's; cells read for the player."""
    rows: list[list[str]] = [[CORNER, *move_set.moves]]
    for pc_move in move_set:
        row = [pc_move]
        for user_move in move_set:
            row.append(compare(move_set, user_move, pc_move).capitalize())
        rows.append(row)
    return rows


def format_table(table: list[list[str]]) -> str:
    widths = [max(len(row[col]) for row in table) for col in range(len(table[0]))]

    lines: list[str] = []
    for row in table:
        lines.append("|" + "|".join(f" {cell:^{w}} " for cell, w in zip(row, widths)) + "|")
    separator = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines.insert(1, separator)
    return "\n".join(lines)


def render_help(move_set: MoveSet) -> str:
    lines = [
        "Game rules:",
        "Each move loses to the half of the moves that follow it and beats the half that precede it (in circular order).",
        "Enter the number of your move, 0 to exit, ? for this help.",
        "",
    ]
    for move in move_set:
        winners = ", ".join(beaten_by(move_set, move))
        lines.append(f"{move} beats {', '.join(beats(move_set, move))}; loses to {winners}")
    lines.append("")
    lines.append(format_table(build_table(move_set)))
    return "\n".join(lines)
