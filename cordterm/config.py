"""Application configuration and its location on disk."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field, fields
from enum import IntEnum
from pathlib import Path
from typing import Any

APP_NAME = "Cordless"
APP_NAME_LOWERCASE = "cordless"
CONFIG_FILE_NAME = "config.json"
SCRIPT_DIRECTORY_NAME = "scripts"


class TimeFormat(IntEnum):
    """How message timestamps are rendered."""

    HOUR_MINUTE_AND_SECONDS = 0
    HOUR_AND_MINUTE = 1
    NO_TIME = 2


class ListTypingBehaviour(IntEnum):
    """What happens when the user types while a list has focus."""

    DO_NOTHING = 0
    SEARCH = 1
    FOCUS_MESSAGE_INPUT = 2


def _json_key(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _decode_first_value(text: str) -> Any:
    """Decode the first JSON value in text; None if there is none."""
    stripped = text.lstrip()
    if not stripped:
        return None
    value, _ = json.JSONDecoder().raw_decode(stripped)
    return value


@dataclass
class Account:
    """A saved login: a name for the user and the token to authenticate."""

    name: str = ""
    token: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"Name": self.name, "Token": self.token}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Account:
        if not isinstance(data, dict):
            raise ValueError("an account must be a JSON object")
        account = cls()
        for key, value in data.items():
            attribute = key.lower()
            if attribute not in ("name", "token") or value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"account field {key!r} must be a string")
            setattr(account, attribute, value)
        return account


_ENUM_FIELDS = {
    "times": TimeFormat,
    "on_type_in_list_behaviour": ListTypingBehaviour,
}


@dataclass
class Config:
    """All settings of the application."""

    token: str = ""
    times: int = TimeFormat.HOUR_MINUTE_AND_SECONDS
    use_random_user_colors: bool = False
    focus_channel_after_guild_selection: bool = True
    focus_message_input_after_channel_selection: bool = True
    show_user_container: bool = True
    use_fixed_layout: bool = False
    fixed_size_left: int = 12
    fixed_size_right: int = 12
    on_type_in_list_behaviour: int = ListTypingBehaviour.SEARCH
    mouse_enabled: bool = True
    shorten_links: bool = False
    shortener_port: int = 63212
    desktop_notifications: bool = True
    show_placeholder_for_blocked_messages: bool = True
    show_update_notifications: bool = True
    dont_show_update_notification_for: str = ""
    accounts: list[Account] = field(default_factory=list)
    indicate_channel_access_restriction: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration in its on-disk JSON form."""
        result: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if item.name == "accounts":
                value = [account.to_dict() for account in value]
            elif isinstance(value, int) and not isinstance(value, bool):
                value = int(value)
            result[_json_key(item.name)] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a configuration from its JSON form; missing keys keep defaults."""
        config = cls()
        config._update(data)
        return config

    def _update(self, data: Any) -> None:
        if not isinstance(data, dict):
            raise ValueError("configuration must be a JSON object")
        by_key = {_json_key(item.name).lower(): item.name for item in fields(self)}
        for key, value in data.items():
            name = by_key.get(key.lower())
            if name is None or value is None:
                continue
            setattr(self, name, self._convert(name, value))

    def _convert(self, name: str, value: Any) -> Any:
        if name == "accounts":
            if not isinstance(value, list):
                raise ValueError("Accounts must be a JSON array")
            return [Account.from_dict(item) for item in value if item is not None]

        current = getattr(self, name)
        key = _json_key(name)
        if isinstance(current, bool):
            if not isinstance(value, bool):
                raise ValueError(f"{key} must be a boolean")
            return value
        if isinstance(current, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer")
            enum_type = _ENUM_FIELDS.get(name)
            if enum_type is not None:
                try:
                    return enum_type(value)
                except ValueError:
                    return value
            return value
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        return value


_current_config = Config()
_cached_config_dir: str | None = None
_cached_script_dir: str | None = None


def _platform_config_directory(platform: str) -> str:
    if platform == "darwin":
        return str(Path.home() / f".{APP_NAME_LOWERCASE}")

    if platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            return os.path.join(appdata, APP_NAME_LOWERCASE)
        return str(Path.home() / "AppData" / "Roaming" / APP_NAME_LOWERCASE)

    xdg_dir = os.environ.get("XDG_CONFIG_DIR")
    if xdg_dir:
        return xdg_dir
    return str(Path.home() / ".config" / APP_NAME_LOWERCASE)


def get_config_directory() -> str:
    """Return the configuration directory, creating it if needed."""
    global _cached_config_dir
    if _cached_config_dir:
        return _cached_config_dir

    directory = _platform_config_directory(sys.platform)
    try:
        os.stat(directory)
    except FileNotFoundError:
        os.makedirs(directory, mode=0o766)

    _cached_config_dir = directory
    return directory


def get_config_file() -> str:
    """Return the absolute path of the configuration file."""
    return os.path.join(get_config_directory(), CONFIG_FILE_NAME)


def get_script_directory() -> str:
    """Return the directory that holds user scripts."""
    global _cached_script_dir
    if not _cached_script_dir:
        _cached_script_dir = os.path.join(_cached_config_dir or "", SCRIPT_DIRECTORY_NAME)
    return _cached_script_dir


def get_config() -> Config:
    """Return the currently loaded configuration."""
    return _current_config


def load_config() -> Config:
    """Read the configuration file into the current configuration and return it."""
    path = get_config_file()
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return get_config()

    data = _decode_first_value(text)
    if data is not None:
        _current_config._update(data)
    return get_config()


def persist_config() -> None:
    """Write the current configuration to the configuration file."""
    path = get_config_file()
    text = json.dumps(_current_config.to_dict(), indent=4, ensure_ascii=False)
    Path(path).write_text(text, encoding="utf-8")