from __future__ import annotations

from typing import Callable, List, Optional

Measure = Callable[[str, str, float], float]


def _wrap_words(words: List[str], font_name: str, font_size: float, max_width: float, measure: Measure) -> List[str]:
    if not words:
        return [""]

    lines: List[str] = []
    cur: List[str] = []

    for w in words:
        test = " ".join(cur + [w])
        if measure(test, font_name, font_size) <= max_width:
            cur.append(w)
            continue

        if cur:
            lines.append(" ".join(cur))
        # a word wider than the line is left alone on its own line
        cur = [w]

    if cur:
        lines.append(" ".join(cur))

    return lines


def wrap_text(
    text: Optional[str],
    font_name: str,
    font_size: float,
    max_width: float,
    measure: Measure,
) -> List[str]:
    """
    Greedy word wrap.

    Hard line breaks in ``text`` always start a new line. Within a hard line,
    words are added while the measured width stays within ``max_width``.
    Always returns at least one line.
    """
    lines: List[str] = []
    for hard_line in (text or "").replace("\r\n", "\n").split("\n"):
        lines.extend(_wrap_words(hard_line.split(), font_name, font_size, max_width, measure))
    return lines
