"""
Share Text - The copyable summary of a window.

Pure formatting. Writing the text to a clipboard or a file is up to the
caller.
"""

from __future__ import annotations
from typing import Sequence

from ..config import GAME_TITLE, KEYBOARD_LAYOUT, KEYBOARD_ROWS, LETTERS, RANGE_THRESHOLD, SITE_URL
from .stats import Feedback, average, best, classify
from .state import Theme


GLYPHS = {
    Feedback.CORRECT: "🟩",
    Feedback.CLOSE: "🟨",
    Feedback.FAR: "🔳",
}

UNGUESSED_GLYPHS = {
    Theme.LIGHT: "⬜",
    Theme.DARK: "⬛",
}

MISSING_STAT = "-"


def glyph(feedback: Feedback, theme: Theme) -> str:
    if feedback == Feedback.UNGUESSED:
        return UNGUESSED_GLYPHS[theme]
    return GLYPHS[feedback]


def _stat(value: int | None) -> str:
    return MISSING_STAT if value is None else str(value)


def share_text(
    options: Sequence[str],
    answer: str,
    history: Sequence[int],
    attempts: int,
    theme: Theme,
    range_threshold: int = RANGE_THRESHOLD,
) -> str:
    """
    Build the share summary.

    Layout: a title with the window number and attempts out of the alphabet
    size, a stats line, the site link, then the grid in keyboard order.
    """
    cells = [
        glyph(classify(letter, answer, options, range_threshold), theme)
        for letter in KEYBOARD_LAYOUT
    ]

    rows = []
    start = 0
    for width in KEYBOARD_ROWS:
        rows.append(" ".join(cells[start:start + width]))
        start += width

    title = f"{GAME_TITLE}  #{len(history)}  {attempts}/{len(LETTERS)}"
    stats = f"Average ({_stat(average(history))})  |  Personal Best ({_stat(best(history))})"
    return "\n".join([title, stats, SITE_URL, "", *rows, "", ""])
