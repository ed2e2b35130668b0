"""Colour theme of the terminal interface."""

from __future__ import annotations

import argparse
import json
import os
import re
from dataclasses import dataclass, field, fields
from typing import Any

from . import config

THEME_FILE_NAME = "theme.json"

# Flag bit marking a terminal colour value as 24-bit RGB.
RGB_FLAG = 1 << 24

_ANSI_COLOURS = (
    "#000000", "#800000", "#008000", "#808000",
    "#000080", "#800080", "#008080", "#c0c0c0",
    "#808080", "#ff0000", "#00ff00", "#ffff00",
    "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
)
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
_HEX_COLOUR = re.compile(r"#?([0-9a-fA-F]{6})")
_HEX_PAIR = re.compile(r"[0-9a-fA-F]{1,2}")


def _rgb(red: int, green: int, blue: int) -> str:
    return f"#{red & 0xFF:02x}{green & 0xFF:02x}{blue & 0xFF:02x}"


def _palette_colour(index: int) -> str:
    if index < 16:
        return _ANSI_COLOURS[index]
    if index < 232:
        offset = index - 16
        return _rgb(
            _CUBE_LEVELS[offset // 36],
            _CUBE_LEVELS[offset // 6 % 6],
            _CUBE_LEVELS[offset % 6],
        )
    level = 8 + 10 * (index - 232)
    return _rgb(level, level, level)


def color_to_hex(color: str | int) -> str:
    """Normalise a colour to '#rrggbb'.

    Accepts hex strings with or without '#', 24-bit values carrying
    RGB_FLAG, and indices into the 256-colour terminal palette.
    """
    if isinstance(color, bool):
        raise ValueError(f"not a colour: {color!r}")
    if isinstance(color, int):
        if color >= 0 and color & RGB_FLAG:
            value = color & 0xFFFFFF
            return _rgb(value >> 16, value >> 8, value)
        if 0 <= color < 256:
            return _palette_colour(color)
        raise ValueError(f"not a colour: {color!r}")
    if isinstance(color, str):
        match = _HEX_COLOUR.fullmatch(color.strip())
        if match:
            return "#" + match.group(1).lower()
    raise ValueError(f"not a colour: {color!r}")


def from_hex(text: str) -> str:
    """Parse '#RRGGBB'; channels that cannot be read are left at zero."""
    rest = text.strip()
    if rest.startswith("#"):
        rest = rest[1:]
    channels = [0, 0, 0]
    for position in range(len(channels)):
        match = _HEX_PAIR.match(rest)
        if not match:
            break
        channels[position] = int(match.group(), 16)
        rest = rest[match.end():]
    return _rgb(*channels)


def _default_random_colors() -> list[str]:
    return [
        _rgb(0xD8, 0x50, 0x4E),
        _rgb(0xD8, 0x7E, 0x4E),
        _rgb(0xD8, 0xA5, 0x4E),
        _rgb(0xD8, 0xC6, 0x4E),
        _rgb(0xB8, 0xD8, 0x4E),
        _rgb(0x91, 0xD8, 0x4E),
        _rgb(0x67, 0xD8, 0x4E),
        _rgb(0x4E, 0xD8, 0x7C),
        _rgb(0x4E, 0xD8, 0xAA),
        _rgb(0x4E, 0xD8, 0xCF),
        _rgb(0x4E, 0xB6, 0xD8),
        _rgb(0x4E, 0x57, 0xD8),
        _rgb(0x75, 0x4E, 0xD8),
        _rgb(0xA3, 0x4E, 0xD8),
        _rgb(0xCF, 0x4E, 0xD8),
        _rgb(0xD8, 0x4E, 0x9C),
    ]


_BLACK = _palette_colour(0)
_GREEN = _palette_colour(2)
_GRAY = _palette_colour(8)
_RED = _palette_colour(9)
_YELLOW = _palette_colour(11)
_BLUE = _palette_colour(12)
_WHITE = _palette_colour(15)
_DARK_CYAN = _rgb(0x00, 0x8B, 0x8B)
_ORANGE = _rgb(0xFF, 0xA5, 0x00)


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


@dataclass
class Theme:
    """Widget colours plus the colours used for chat content."""

    primitive_background_color: str = _BLACK
    contrast_background_color: str = _BLUE
    more_contrast_background_color: str = _GREEN
    border_color: str = _WHITE
    border_focus_color: str = _BLUE
    title_color: str = _WHITE
    graphics_color: str = _WHITE
    primary_text_color: str = _WHITE
    secondary_text_color: str = _YELLOW
    tertiary_text_color: str = _GREEN
    inverse_text_color: str = _BLUE
    contrast_secondary_text_color: str = _DARK_CYAN
    blocked_user_color: str = _GRAY
    info_message_color: str = _GRAY
    bot_color: str = _rgb(0x94, 0x96, 0xFC)
    message_time_color: str = _GRAY
    default_user_color: str = _rgb(0x44, 0xE5, 0x44)
    link_color: str = _DARK_CYAN
    attention_color: str = _ORANGE
    error_color: str = _RED
    random_user_colors: list[str] = field(default_factory=_default_random_colors)

    def to_dict(self) -> dict[str, Any]:
        """Return the theme in its on-disk JSON form."""
        result: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            result[_json_key(item.name)] = list(value) if isinstance(value, list) else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Theme:
        """Build a theme from its JSON form; missing keys keep defaults."""
        theme = cls()
        theme._update(data)
        return theme

    def _update(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise ValueError("theme must be a JSON object")
        by_key = {_json_key(item.name).lower(): item.name for item in fields(self)}
        for key, value in data.items():
            name = by_key.get(key.lower())
            if name is None or value is None:
                continue
            if name == "random_user_colors":
                if not isinstance(value, list):
                    raise ValueError("RandomUserColors must be a JSON array")
                setattr(self, name, [color_to_hex(colour) for colour in value])
            else:
                setattr(self, name, color_to_hex(value))


_current_theme = Theme()


def get_theme() -> Theme:
    """Return the currently loaded theme."""
    return _current_theme


def get_theme_file() -> str:
    """Return the path of the theme file."""
    return os.path.join(config.get_config_directory(), THEME_FILE_NAME)


def load_theme() -> None:
    """Read the theme file, if any, into the current theme."""
    path = get_theme_file()
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return

    stripped = text.lstrip()
    if not stripped:
        return
    data, _ = json.JSONDecoder().raw_decode(stripped)
    if data is not None:
        _current_theme._update(data)


def sample_theme() -> Theme:
    """Return a grey alternative theme, useful as a starting point for theme files."""
    accent = _rgb(104, 142, 196)
    return Theme(
        primitive_background_color=_rgb(70, 70, 70),
        contrast_background_color=accent,
        more_contrast_background_color=_rgb(79, 79, 79),
        border_color=_rgb(213, 220, 229),
        border_focus_color=accent,
        title_color=_WHITE,
        graphics_color=_WHITE,
        primary_text_color=_WHITE,
        secondary_text_color=_WHITE,
        tertiary_text_color=_WHITE,
        inverse_text_color=accent,
        contrast_secondary_text_color=accent,
    )


def main(argv: list[str] | None = None) -> int:
    """Print the sample theme as JSON."""
    parser = argparse.ArgumentParser(description="Print a sample theme file.")
    parser.parse_args(argv)
    print(json.dumps(sample_theme().to_dict(), indent=4))
    return 0