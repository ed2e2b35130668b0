"""Tracking which channels and guilds have unread messages."""

from __future__ import annotations

import contextlib
import re
import threading
from typing import Any

from .discordutil import has_read_messages_permission
from .models import Channel, State, StateNotFoundError

ACK_DELAY_SECONDS = 4.0

_UNSIGNED_DECIMAL = re.compile(r"[0-9]+")
_UINT64_MAX = (1 << 64) - 1


def _parse_uint64(text: str) -> int:
    if not _UNSIGNED_DECIMAL.fullmatch(text):
        raise ValueError(f"invalid message ID {text!r}")
    value = int(text)
    if value > _UINT64_MAX:
        raise ValueError(f"message ID {text!r} out of range")
    return value


class ReadMarkers:
    """The last read message per channel, plus buffered acknowledgements."""

    def __init__(self, ack_delay: float = ACK_DELAY_SECONDS) -> None:
        self.state = State()
        self._ack_delay = ack_delay
        self._data: dict[str, int] = {}
        self._lock = threading.Lock()
        self._timers: dict[str, tuple[threading.Timer, tuple[Any, Channel, str]]] = {}

    def load(self, state: State) -> None:
        """Take over the read markers held in the session state."""
        for entry in state.read_state:
            if not entry.last_message_id:
                continue
            try:
                self._data[entry.id] = _parse_uint64(entry.last_message_id)
            except ValueError:
                continue
        self.state = state

    def clear_read_state_for(self, channel_id: str) -> None:
        """Forget everything about the given channel."""
        with self._lock:
            self._data.pop(channel_id, None)
            pending = self._timers.pop(channel_id, None)
        if pending is not None:
            pending[0].cancel()

    def update_read_local(self, channel_id: str, last_message_id: str) -> bool:
        """Record a read marker without telling the server; True if it moved forward."""
        try:
            parsed = _parse_uint64(last_message_id)
        except ValueError:
            return False
        old = self._data.get(channel_id)
        if old is None or old < parsed:
            self._data[channel_id] = parsed
            return True
        return False

    def update_read(self, session: Any, channel: Channel, last_message_id: str) -> None:
        """Mark the channel read and acknowledge it to the server, unless already read."""
        if self.has_been_read(channel, last_message_id):
            return
        self._data[channel.id] = _parse_uint64(last_message_id)
        session.channel_message_ack(channel.id, last_message_id, "")

    def update_read_buffered(self, session: Any, channel: Channel, last_message_id: str) -> None:
        """Acknowledge after a delay; calls during the delay restart it."""
        with self._lock:
            pending = self._timers.get(channel.id)
            if pending is None:
                arguments = (session, channel, last_message_id)
            else:
                pending[0].cancel()
                arguments = pending[1]
            self._schedule(channel.id, arguments)

    def _schedule(self, channel_id: str, arguments: tuple[Any, Channel, str]) -> None:
        timer = threading.Timer(self._ack_delay, lambda: self._fire(channel_id, timer))
        timer.daemon = True
        self._timers[channel_id] = (timer, arguments)
        timer.start()

    def _fire(self, channel_id: str, timer: threading.Timer) -> None:
        with self._lock:
            pending = self._timers.get(channel_id)
            if pending is None or pending[0] is not timer:
                return
            del self._timers[channel_id]
        # A failed background acknowledgement is dropped; the next one retries.
        with contextlib.suppress(Exception):
            self.update_read(*pending[1])

    def is_guild_muted(self, guild_id: str) -> bool:
        """True if the user muted the guild."""
        for settings in self.state.user_guild_settings:
            if settings.guild_id == guild_id:
                return settings.muted
        return False

    def has_guild_been_read(self, guild_id: str) -> bool:
        """True if the guild is muted or none of its visible channels is unread."""
        if self.is_guild_muted(guild_id):
            return True
        try:
            guild = self.state.guild(guild_id)
        except StateNotFoundError:
            return True
        for channel in guild.channels:
            if not has_read_messages_permission(channel.id, self.state):
                continue
            if not self.has_been_read(channel, channel.last_message_id):
                return False
        return True

    def is_channel_muted(self, channel: Channel) -> bool:
        """True if the channel is muted; private channels included."""
        private = channel.guild_id == ""
        for settings in self.state.user_guild_settings:
            if settings.guild_id != channel.guild_id:
                continue
            override = next(
                (item for item in settings.channel_overrides if item.channel_id == channel.id),
                None,
            )
            if override is not None and override.muted:
                return True
            # Private channel settings may be spread over several entries.
            if not private:
                break
        return False

    def has_been_read(self, channel: Channel, last_message_id: str) -> bool:
        """True if the channel has no unread message."""
        if not last_message_id:
            return True
        if self.is_channel_muted(channel):
            return True
        if channel.messages and channel.messages[-1].author.id == self.state.user.id:
            return True
        marker = self._data.get(channel.id)
        if marker is None:
            return False
        try:
            parsed = _parse_uint64(last_message_id)
        except ValueError:
            return True
        return marker >= parsed