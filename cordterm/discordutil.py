"""Helpers for naming, sorting and inspecting chat entities."""

from __future__ import annotations

import random
import re
from typing import Protocol

from .models import (
    PERMISSION_READ_MESSAGES,
    Channel,
    ChannelType,
    Guild,
    Member,
    Message,
    RelationType,
    Role,
    Settings,
    State,
    StateNotFoundError,
    User,
    UserGuild,
)
from .theme import color_to_hex, get_theme

GUILD_PAGE_SIZE = 100

_ESCAPE_PATTERN = re.compile(r'(\[[a-zA-Z0-9_,;: \-."#]+\[*)\]')
_INT64_MAX = (1 << 63) - 1
_INT64_MIN = -(1 << 63)
_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")


def escape(text: str) -> str:
    """Escape anything that would be read as a colour tag or region."""
    return _ESCAPE_PATTERN.sub(r"\1[]", text)


BOT_PREFIX = escape("[BOT]")

_user_color_cache: dict[str, str] = {}
_last_random_index = -1


class GuildLoader(Protocol):
    def user_guilds(self, limit: int, before_id: str, after_id: str) -> list[UserGuild] | None:
        ...


def _parse_int64(text: str) -> int | None:
    if not _SIGNED_DECIMAL.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def sort_messages_by_timestamp(messages: list[Message]) -> None:
    """Sort messages in place, oldest first; unparsable timestamps go last."""

    def key(message: Message) -> tuple:
        try:
            return (0, message.parsed_timestamp())
        except ValueError:
            return (1,)

    messages.sort(key=key)


def get_private_channel_name(channel: Channel) -> str:
    """Generate a display name for a private channel."""
    name = ""
    if channel.type == ChannelType.DM:
        name = channel.recipients[0].username
    elif channel.type == ChannelType.GROUP_DM:
        name = channel.name or ", ".join(user.username for user in channel.recipients)
    return escape(name or "Unnamed")


def compare_channels(a: Channel, b: Channel) -> bool:
    """True if a has the more recent last message than b."""
    first = _parse_int64(a.last_message_id)
    if first is None:
        return False
    second = _parse_int64(b.last_message_id)
    if second is None:
        return True
    return first > second


def sort_private_channels(channels: list[Channel]) -> None:
    """Sort channels in place, most recent message first."""

    def key(channel: Channel) -> tuple:
        message_id = _parse_int64(channel.last_message_id)
        return (1,) if message_id is None else (0, -message_id)

    channels.sort(key=key)


def has_read_messages_permission(channel_id: str, state: State) -> bool:
    """True if the current user may view the channel."""
    try:
        permissions = state.user_channel_permissions(state.user.id, channel_id)
    except StateNotFoundError:
        return False
    return bool(permissions & PERMISSION_READ_MESSAGES)


def load_guilds(guild_loader: GuildLoader) -> list[UserGuild]:
    """Load every guild of the current user, page by page."""
    guilds: list[UserGuild] = []
    before_id = ""
    while True:
        page = list(guild_loader.user_guilds(GUILD_PAGE_SIZE, before_id, "") or [])
        if not page:
            return guilds
        guilds = page + guilds
        if len(page) != GUILD_PAGE_SIZE:
            return guilds
        before_id = page[0].id


def sort_guilds(settings: Settings, guilds: list[Guild]) -> None:
    """Sort guilds in place in the order given by the user's settings."""
    positions: dict[str, int] = {}
    for index, guild_id in enumerate(settings.guild_positions):
        positions.setdefault(guild_id, index)
    unlisted = len(settings.guild_positions)
    guilds.sort(key=lambda guild: positions.get(guild.id, unlisted))


def mentions_current_user_explicitly(state: State, message: Message) -> bool:
    """True if the message mentions the logged in user by name."""
    return any(user.id == state.user.id for user in message.mentions)


def _random_color_string() -> str:
    global _last_random_index
    theme = get_theme()
    colours = theme.random_user_colors
    if not colours:
        return "[" + color_to_hex(theme.default_user_color) + "]"
    if len(colours) == 1:
        return color_to_hex(colours[0])

    index = random.randrange(len(colours))
    while index == _last_random_index:
        index = random.randrange(len(colours))
    _last_random_index = index
    return color_to_hex(colours[index])


def get_user_color(user: User) -> str:
    """Return the user's colour for this session, picking one on first use."""
    if user.bot:
        return color_to_hex(get_theme().bot_color)
    colour = _user_color_cache.get(user.id)
    if colour is None:
        colour = _random_color_string()
        _user_color_cache[user.id] = colour
    return colour


def _user_name(name: str, bot: bool) -> str:
    escaped = escape(name)
    return BOT_PREFIX + escaped if bot else escaped


def get_member_name(member: Member) -> str:
    """Return the nickname or user name, with the bot prefix for bots."""
    if member.nick:
        return _user_name(member.nick, member.user.bot)
    return get_user_name(member.user)


def get_user_name(user: User) -> str:
    """Return the user name, with the bot prefix for bots."""
    return _user_name(user.username, user.bot)


def sort_user_roles(roles: list[str], guild_roles: list[Role]) -> None:
    """Sort role IDs in place, highest position first; unknown roles first."""
    by_id: dict[str, Role] = {}
    for role in guild_roles:
        by_id.setdefault(role.id, role)

    def key(role_id: str) -> tuple:
        role = by_id.get(role_id)
        return (0,) if role is None else (1, -role.position)

    roles.sort(key=key)


def is_blocked(state: State, user: User) -> bool:
    """True if the state holds a relationship marking the user as blocked."""
    return any(
        relationship.user.id == user.id and relationship.type == RelationType.BLOCKED
        for relationship in state.relationships
    )