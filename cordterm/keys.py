"""Key events as delivered by the terminal, and their human readable form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag

from .discordutil import escape


def _key_members() -> list[tuple[str, int]]:
    members = [
        ("BACKSPACE", 8),
        ("TAB", 9),
        ("ENTER", 13),
        ("ESC", 27),
        ("BACKSPACE2", 127),
        ("CTRL_SPACE", 0),
    ]
    members += [(f"CTRL_{chr(ord('A') + offset)}", offset + 1) for offset in range(26)]
    members += [
        ("CTRL_LEFT_SQ", 27),
        ("CTRL_BACKSLASH", 28),
        ("CTRL_RIGHT_SQ", 29),
        ("CTRL_CARAT", 30),
        ("CTRL_UNDERSCORE", 31),
    ]
    special = (
        "RUNE", "UP", "DOWN", "RIGHT", "LEFT", "UP_LEFT", "UP_RIGHT", "DOWN_LEFT",
        "DOWN_RIGHT", "CENTER", "PG_UP", "PG_DN", "HOME", "END", "INSERT", "DELETE",
        "HELP", "EXIT", "CLEAR", "CANCEL", "PRINT", "PAUSE", "BACKTAB",
    )
    members += [(name, 256 + offset) for offset, name in enumerate(special)]
    first_function_key = 256 + len(special)
    members += [(f"F{number}", first_function_key + number - 1) for number in range(1, 65)]
    return members


Key = IntEnum("Key", _key_members(), module=__name__)
Key.__doc__ = "Terminal key codes; printable characters arrive as RUNE."


class Modifier(IntFlag):
    """Modifier keys held down during a key press."""

    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4
    META = 8


def _key_names() -> dict[int, str]:
    names = {
        Key.ENTER: "Enter",
        Key.BACKSPACE: "Backspace",
        Key.TAB: "Tab",
        Key.BACKTAB: "Backtab",
        Key.ESC: "Esc",
        Key.BACKSPACE2: "Backspace2",
        Key.DELETE: "Delete",
        Key.INSERT: "Insert",
        Key.UP: "Up",
        Key.DOWN: "Down",
        Key.LEFT: "Left",
        Key.RIGHT: "Right",
        Key.HOME: "Home",
        Key.END: "End",
        Key.UP_LEFT: "UpLeft",
        Key.UP_RIGHT: "UpRight",
        Key.DOWN_LEFT: "DownLeft",
        Key.DOWN_RIGHT: "DownRight",
        Key.CENTER: "Center",
        Key.PG_DN: "PgDn",
        Key.PG_UP: "PgUp",
        Key.CLEAR: "Clear",
        Key.EXIT: "Exit",
        Key.CANCEL: "Cancel",
        Key.PAUSE: "Pause",
        Key.PRINT: "Print",
        Key.CTRL_SPACE: "Ctrl-Space",
        Key.CTRL_UNDERSCORE: "Ctrl-_",
        Key.CTRL_RIGHT_SQ: "Ctrl-]",
        Key.CTRL_BACKSLASH: "Ctrl-\\",
        Key.CTRL_CARAT: "Ctrl-^",
    }
    for number in range(1, 65):
        names[Key[f"F{number}"]] = f"F{number}"
    # Ctrl-H, Ctrl-I, Ctrl-M and Ctrl-[ carry the names of the keys they share a code with.
    for letter in "ABCDEFGJKLNOPQRSTUVWXYZ":
        names[Key[f"CTRL_{letter}"]] = f"Ctrl-{letter}"
    return {int(key): name for key, name in names.items()}


KEY_NAMES = _key_names()

_TYPEABLE_CONTROL_KEYS = frozenset({Key.BACKSPACE, Key.TAB, Key.ESC, Key.ENTER})


def _as_key(value: int) -> int:
    try:
        return Key(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class KeyEvent:
    """A key press: the key, the character typed and the held modifiers.

    Control characters and DEL given as RUNE are turned into their key
    codes; control characters without modifiers get CTRL unless they can
    be typed directly.
    """

    key: int
    rune: str = "\0"
    modifiers: Modifier = Modifier.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.rune, str) or len(self.rune) != 1:
            raise ValueError(f"rune must be a single character, not {self.rune!r}")
        key = int(self.key)
        modifiers = Modifier(int(self.modifiers))
        code = ord(self.rune)
        if key == Key.RUNE and (code < 0x20 or code == 0x7F):
            key = code
            if modifiers == Modifier.NONE and code < 0x20 and code not in _TYPEABLE_CONTROL_KEYS:
                modifiers = Modifier.CTRL
        object.__setattr__(self, "key", _as_key(key))
        object.__setattr__(self, "modifiers", modifiers)


def events_equal(first: KeyEvent | None, second: KeyEvent | None) -> bool:
    """Compare two events by key, character and modifiers."""
    if first is None or second is None:
        return first is None and second is None
    return (
        first.rune == second.rune
        and first.modifiers == second.modifiers
        and first.key == second.key
    )


def _upper_rune(rune: str) -> str:
    upper = rune.upper()
    return upper if len(upper) == 1 else rune


def event_to_string(event: KeyEvent | None) -> str:
    """Render a key event as a human readable string."""
    if event is None:
        return ""

    modifier_names = [
        label
        for flag, label in (
            (Modifier.CTRL, "Ctrl"),
            (Modifier.SHIFT, "Shift"),
            (Modifier.ALT, "Alt"),
            (Modifier.META, "Meta"),
        )
        if event.modifiers & flag
    ]

    text = KEY_NAMES.get(int(event.key))
    if text is None:
        if event.key == Key.RUNE:
            if "A" <= event.rune <= "Z":
                text = "Shift+" + event.rune
            else:
                text = _upper_rune(event.rune)
        else:
            text = f"Key[{int(event.key)},{ord(event.rune)}]"

    if modifier_names:
        if event.modifiers & Modifier.CTRL and text.startswith("Ctrl-"):
            text = text[5:]
        return "+".join(modifier_names) + "+" + text

    return escape(text)