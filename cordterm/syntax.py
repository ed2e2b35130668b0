"""A syntax highlighting formatter that emits tview colour tags."""

from __future__ import annotations

import math
from typing import Iterable, TextIO

from pygments.formatter import Formatter
from pygments.token import _TokenType

# Each source colour is rendered with the tag of a colour that reads well
# on a dark terminal.
TTY_8_FOREGROUND: dict[str, str] = {
    "#000000": "[#000000]", "#7f0000": "[#7f0000]", "#007f00": "[#3baf3b]",
    "#7f7fe0": "[#7f7fe0]", "#00007f": "[#2d2db7]", "#7f007f": "[#7f007f]",
    "#007f7f": "[#3ea8a8]", "#e5e5e5": "[#e5e5e5]", "#555555": "[#555555]",
    "#ff0000": "[#d16666]", "#00ff00": "[#80dd80]", "#ffff00": "[#efef8b]",
    "#0000ff": "[#5757f2]", "#ff00ff": "[#d36bd3]", "#00ffff": "[#7ed3d3]",
    "#ffffff": "[#ffffff]",
}


def _rgb(colour: str) -> tuple[int, int, int]:
    text = colour.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(char * 2 for char in text)
    if len(text) != 6:
        raise ValueError(f"invalid colour {colour!r}")
    value = int(text, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _distance(first: tuple[int, int, int], second: tuple[int, int, int]) -> float:
    red_mean = (first[0] + second[0]) // 2
    red = first[0] - second[0]
    green = first[1] - second[1]
    blue = first[2] - second[2]
    return math.sqrt(
        (((512 + red_mean) * red * red) >> 8)
        + 4 * green * green
        + (((767 - red_mean) * blue * blue) >> 8)
    )


def find_closest(colour: str) -> str:
    """Return the table colour perceptually closest to the given hex colour."""
    seeking = _rgb(colour)
    closest = ""
    closest_distance = math.inf
    for candidate in TTY_8_FOREGROUND:
        distance = _distance(_rgb(candidate), seeking)
        if distance < closest_distance:
            closest_distance = distance
            closest = candidate
    return closest


class TviewFormatter(Formatter):
    """Writes token text prefixed with the tview tag of its foreground colour."""

    name = "tview-8bit"
    aliases = ["tview-8bit"]
    filenames: list[str] = []

    def __init__(self, **options) -> None:
        super().__init__(**options)
        self._tags: dict[_TokenType, str] = {}
        for token_type, definition in self.style:
            colour = definition.get("color")
            self._tags[token_type] = (
                TTY_8_FOREGROUND[find_closest(colour)] if colour else ""
            )

    def _tag_for(self, token_type: _TokenType) -> str:
        current = token_type
        while current is not None:
            tag = self._tags.get(current)
            if tag is not None:
                return tag
            current = current.parent
        return ""

    def format(self, tokensource: Iterable[tuple[_TokenType, str]], outfile: TextIO) -> None:
        for token_type, value in tokensource:
            tag = self._tag_for(token_type)
            if tag:
                outfile.write(tag)
            outfile.write(value)