"""
render.py

Console formatting and parsing of combinations and scores.

Colors are shown as letters (0 -> A, 1 -> B, ...). With `color=True` the
first eight colors also get an ANSI background from a plain lookup table.
"""

from __future__ import annotations

import re
import string
from typing import Sequence

from mastermind.feedback import Score
from mastermind.universe import Combination

MAX_COLORS = len(string.ascii_uppercase)

# ANSI background / foreground per color index
_ANSI_STYLE = {
    0: "\x1b[41;97m",
    1: "\x1b[42;30m",
    2: "\x1b[43;30m",
    3: "\x1b[44;97m",
    4: "\x1b[45;97m",
    5: "\x1b[46;30m",
    6: "\x1b[47;30m",
    7: "\x1b[40;97m",
}
_ANSI_RESET = "\x1b[0m"

_TAGGED_SCORE = re.compile(
    r"\b(?:(white|black|w|b)\s*=?\s*(\d+)|(\d+)\s*(white|black|w|b))\b"
)


def color_letter(color: int) -> str:
    if color < 0 or color >= MAX_COLORS:
        raise ValueError(f"color out of range: {color}")
    return string.ascii_uppercase[color]


def format_combination(combination: Sequence[int], color: bool = False) -> str:
    """'AABB'-style text; with color=True each peg gets its ANSI style."""
    if not color:
        return "".join(color_letter(c) for c in combination)
    parts = []
    for c in combination:
        style = _ANSI_STYLE.get(c)
        letter = color_letter(c)
        parts.append(f"{style} {letter} {_ANSI_RESET}" if style else f" {letter} ")
    return "".join(parts)


def format_score(score: Score) -> str:
    white, black = score
    return f"white={white} black={black}"


def parse_combination(text: str, num_colors: int, num_spaces: int) -> Combination:
    """
    Parse a combination typed by a person.
    Accepted forms:
      - letters:     AABB  (a..z, case-insensitive)
      - digits:      0011  (only when num_colors <= 10)
      - separated:   0 0 1 1 / 0,0,1,1 / [0, 0, 1, 1]
    Raises ValueError on invalid input.
    """
    s = text.strip().lower()
    if s.startswith("[") and s.endswith("]"):
        s = s[1:-1]
    separated = bool(re.search(r"[\s,]", s))
    tokens = [t for t in re.split(r"[\s,]+", s) if t] if separated else list(s)

    out = []
    for tok in tokens:
        if tok.isdigit():
            if not separated and num_colors > 10:
                raise ValueError("use letters or separators when there are more than 10 colors")
            value = int(tok)
        elif len(tok) == 1 and tok in string.ascii_lowercase:
            value = ord(tok) - ord("a")
        else:
            raise ValueError(f"unrecognized color: {tok!r}")
        if value >= num_colors:
            raise ValueError(f"color {tok!r} out of range for {num_colors} colors")
        out.append(value)

    if len(out) != num_spaces:
        raise ValueError(f"combination must have {num_spaces} colors, got {len(out)}")
    return tuple(out)


def parse_score(text: str, num_spaces: int) -> Score:
    """
    Parse a (white, black) score.
    Accepted forms:
      - two numbers, white first:  2 1 / 2,1 / [2, 1]
      - tagged, any order:         b1 w2 / 1b 2w / w=2 b=1 / white=2 black=1
    Tagged and untagged numbers cannot be mixed.
    Raises ValueError on invalid input.
    """
    s = text.strip().lower()
    tagged = _TAGGED_SCORE.findall(s)
    if tagged:
        if re.search(r"\d", _TAGGED_SCORE.sub(" ", s)):
            raise ValueError("every number must be tagged once tags are used (e.g. 'w2 b1')")
        values = {}
        for tag1, num1, num2, tag2 in tagged:
            tag = (tag1 or tag2)[0]
            if tag in values:
                raise ValueError(f"score given twice for {tag!r}")
            values[tag] = int(num1 or num2)
        white = values.get("w", 0)
        black = values.get("b", 0)
    else:
        nums = re.findall(r"\d+", s)
        if len(nums) != 2:
            raise ValueError("score must be two numbers: white black (e.g. '2 1' or 'w2 b1')")
        white, black = int(nums[0]), int(nums[1])

    if white + black > num_spaces:
        raise ValueError(f"white + black cannot exceed {num_spaces}")
    return Score(white=white, black=black)
