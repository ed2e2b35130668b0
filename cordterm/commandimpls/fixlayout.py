"""The command that switches between a flexible and a fixed layout."""

from __future__ import annotations

import re
from typing import Any, TextIO

from .. import config
from ..commands import Command
from ..theme import color_to_hex, get_theme

_FIX_LAYOUT_DOCUMENTATION = """[orange]# fixlayout[white]

The fixlayout command allows adjusting the layout of the application to a certain degree. By default most components take a flexible amount of space. By activating the fixlayout, those components will instead use a fixed amount of space.

You can [green]enable[white] or [{error_color}]disable[white] the fixlayout by using this:
    [-]fixlayout <[green]true[-]/[{error_color}]false[-]>

[white]In order to specify the width of a component, use this:
    [-]fixlayout <left/right> <[blue]N[-]>
[white]where [blue]N[white] is the width of the component.
"""

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def _parse_int64(text: str) -> int:
    if not _SIGNED_DECIMAL.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer {text!r} out of range")
    return value


class FixLayout(Command):
    """Changes whether and how the layout uses fixed component widths.

    The window must offer refresh_layout().
    """

    def __init__(self, window: Any) -> None:
        self._window = window

    def _apply(self, writer: TextIO, success: str) -> None:
        self._window.refresh_layout()
        try:
            config.persist_config()
        except OSError as error:
            writer.write(f"Error saving configuration: {error}\n")
            return
        writer.write(success + "\n")

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) == 1:
            try:
                choice = _parse_bool(parameters[0])
            except ValueError:
                writer.write(
                    "The given input was incorrect, there has to be only one parameter, "
                    "which can only be of the value 'true' or 'false'\n"
                )
                return
            config.get_config().use_fixed_layout = choice
            self._apply(
                writer,
                "FixLayout has been enabled" if choice else "FixLayout has been disabled",
            )
        elif len(parameters) == 2:
            try:
                size = _parse_int64(parameters[1])
            except ValueError:
                writer.write(
                    "The given input was invalid, it has to be an integral number greater than -1\n"
                )
                return
            if size < 0:
                writer.write("The given input was out of bounds, it has to be bigger than -1\n")
                return

            sub_command = parameters[0]
            if sub_command == "left":
                config.get_config().fixed_size_left = size
                success = f"The left side of the layout was set to {size}"
            elif sub_command == "right":
                config.get_config().fixed_size_right = size
                success = f"The right side of the layout was set to {size}"
            else:
                writer.write(f"The subcommand '{sub_command}' does not exist\n")
                return
            self._apply(writer, success)
        else:
            self.print_help(writer)

    def print_help(self, writer: TextIO) -> None:
        error_color = color_to_hex(get_theme().error_color)
        writer.write(_FIX_LAYOUT_DOCUMENTATION.format(error_color=error_color) + "\n")

    def name(self) -> str:
        return "fixlayout"

    def aliases(self) -> list[str]:
        return ["fix-layout"]