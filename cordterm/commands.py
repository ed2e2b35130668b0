"""User commands and parsing of the command input line."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TextIO

from .theme import color_to_hex, get_theme


class Command(ABC):
    """A command the user can run from the command input."""

    @abstractmethod
    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        """Run the command, writing its output to writer."""

    @abstractmethod
    def print_help(self, writer: TextIO) -> None:
        """Write the static help page of the command."""

    @abstractmethod
    def name(self) -> str:
        """Return the primary name, also used in the command list."""

    @abstractmethod
    def aliases(self) -> list[str]:
        """Return alternative names; possibly none."""


def _find_closing_quote(chars: str, opening: int) -> int | None:
    return next(
        (
            position
            for position in range(opening + 1, len(chars))
            if chars[position] == '"' and chars[position - 1] != "\\"
        ),
        None,
    )


def parse_command(text: str) -> list[str]:
    """Split an input line into parameters; the first one is the command itself."""
    if not text or not text.strip():
        return []
    if " " not in text:
        return [text]

    chars = text.strip()
    length = len(chars)
    parameters: list[str] = []
    current: list[str] = []

    index = 0
    while index < length:
        char = chars[index]
        if char == " ":
            if current:
                parameters.append("".join(current))
                current = []
        elif char == "\\":
            if index == length - 1:
                current.append(char)
            elif chars[index + 1] == '"':
                current.append('"')
                index += 1
        elif char == '"':
            closing = _find_closing_quote(chars, index)
            if closing is None:
                current.append(char)
            else:
                parameters.append(chars[index + 1:closing].replace('\\"', '"'))
                current = []
                index = closing
        else:
            current.append(char)
        index += 1

    if current:
        parameters.append("".join(current))
    return parameters


def print_error(writer: TextIO, error: str, reason: str) -> None:
    """Write an error and its reason in the standard error colour."""
    colour = color_to_hex(get_theme().error_color)
    writer.write(f"[{colour}]{error}:\n\t[{colour}]{reason}\n")