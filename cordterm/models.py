"""Chat entities as they are held in the session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

PERMISSION_CREATE_INSTANT_INVITE = 1 << 0
PERMISSION_KICK_MEMBERS = 1 << 1
PERMISSION_BAN_MEMBERS = 1 << 2
PERMISSION_ADMINISTRATOR = 1 << 3
PERMISSION_MANAGE_CHANNELS = 1 << 4
PERMISSION_MANAGE_SERVER = 1 << 5
PERMISSION_ADD_REACTIONS = 1 << 6
PERMISSION_VIEW_AUDIT_LOGS = 1 << 7
PERMISSION_PRIORITY_SPEAKER = 1 << 8
PERMISSION_READ_MESSAGES = 1 << 10
PERMISSION_SEND_MESSAGES = 1 << 11
PERMISSION_SEND_TTS_MESSAGES = 1 << 12
PERMISSION_MANAGE_MESSAGES = 1 << 13
PERMISSION_EMBED_LINKS = 1 << 14
PERMISSION_ATTACH_FILES = 1 << 15
PERMISSION_READ_MESSAGE_HISTORY = 1 << 16
PERMISSION_MENTION_EVERYONE = 1 << 17
PERMISSION_USE_EXTERNAL_EMOJIS = 1 << 18
PERMISSION_VOICE_CONNECT = 1 << 20
PERMISSION_VOICE_SPEAK = 1 << 21
PERMISSION_VOICE_MUTE_MEMBERS = 1 << 22
PERMISSION_VOICE_DEAFEN_MEMBERS = 1 << 23
PERMISSION_VOICE_MOVE_MEMBERS = 1 << 24
PERMISSION_VOICE_USE_VAD = 1 << 25
PERMISSION_CHANGE_NICKNAME = 1 << 26
PERMISSION_MANAGE_NICKNAMES = 1 << 27
PERMISSION_MANAGE_ROLES = 1 << 28
PERMISSION_MANAGE_WEBHOOKS = 1 << 29
PERMISSION_MANAGE_EMOJIS = 1 << 30

PERMISSION_ALL_TEXT = (
    PERMISSION_READ_MESSAGES
    | PERMISSION_SEND_MESSAGES
    | PERMISSION_SEND_TTS_MESSAGES
    | PERMISSION_MANAGE_MESSAGES
    | PERMISSION_EMBED_LINKS
    | PERMISSION_ATTACH_FILES
    | PERMISSION_READ_MESSAGE_HISTORY
    | PERMISSION_MENTION_EVERYONE
)
PERMISSION_ALL_VOICE = (
    PERMISSION_VOICE_CONNECT
    | PERMISSION_VOICE_SPEAK
    | PERMISSION_VOICE_MUTE_MEMBERS
    | PERMISSION_VOICE_DEAFEN_MEMBERS
    | PERMISSION_VOICE_MOVE_MEMBERS
    | PERMISSION_VOICE_USE_VAD
    | PERMISSION_PRIORITY_SPEAKER
)
PERMISSION_ALL_CHANNEL = (
    PERMISSION_ALL_TEXT
    | PERMISSION_ALL_VOICE
    | PERMISSION_CREATE_INSTANT_INVITE
    | PERMISSION_MANAGE_ROLES
    | PERMISSION_MANAGE_CHANNELS
    | PERMISSION_ADD_REACTIONS
    | PERMISSION_VIEW_AUDIT_LOGS
)
PERMISSION_ALL = (
    PERMISSION_ALL_CHANNEL
    | PERMISSION_KICK_MEMBERS
    | PERMISSION_BAN_MEMBERS
    | PERMISSION_MANAGE_SERVER
    | PERMISSION_ADMINISTRATOR
    | PERMISSION_MANAGE_WEBHOOKS
    | PERMISSION_MANAGE_EMOJIS
)


class StateNotFoundError(LookupError):
    """Raised when the state holds no entry for the requested object."""


class ChannelType(IntEnum):
    GUILD_TEXT = 0
    DM = 1
    GUILD_VOICE = 2
    GROUP_DM = 3
    GUILD_CATEGORY = 4
    GUILD_NEWS = 5
    GUILD_STORE = 6


class RelationType(IntEnum):
    FRIEND = 1
    BLOCKED = 2
    INCOMING_REQUEST = 3
    OUTGOING_REQUEST = 4


class Status(str, Enum):
    ONLINE = "online"
    IDLE = "idle"
    DO_NOT_DISTURB = "dnd"
    INVISIBLE = "invisible"
    OFFLINE = "offline"


@dataclass
class User:
    id: str = ""
    username: str = ""
    discriminator: str = ""
    bot: bool = False

    def __str__(self) -> str:
        return f"{self.username}#{self.discriminator}"


@dataclass
class Member:
    user: User = field(default_factory=User)
    nick: str = ""
    roles: list[str] = field(default_factory=list)
    guild_id: str = ""


@dataclass
class Role:
    id: str = ""
    name: str = ""
    position: int = 0
    permissions: int = 0


@dataclass
class PermissionOverwrite:
    """A channel-level permission change for a role or a member."""

    id: str = ""
    type: str = "role"
    allow: int = 0
    deny: int = 0


@dataclass
class Message:
    id: str = ""
    channel_id: str = ""
    content: str = ""
    timestamp: str = ""
    author: User = field(default_factory=User)
    mentions: list[User] = field(default_factory=list)

    def parsed_timestamp(self) -> datetime:
        """Parse the ISO 8601 timestamp; raises ValueError if it is malformed."""
        text = self.timestamp.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)


@dataclass
class Channel:
    id: str = ""
    guild_id: str = ""
    name: str = ""
    topic: str = ""
    type: ChannelType = ChannelType.GUILD_TEXT
    recipients: list[User] = field(default_factory=list)
    last_message_id: str = ""
    messages: list[Message] = field(default_factory=list)
    permission_overwrites: list[PermissionOverwrite] = field(default_factory=list)


@dataclass
class Guild:
    id: str = ""
    name: str = ""
    owner_id: str = ""
    roles: list[Role] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    channels: list[Channel] = field(default_factory=list)


@dataclass
class UserGuild:
    id: str = ""
    name: str = ""
    owner: bool = False
    permissions: int = 0


@dataclass
class Settings:
    status: Status = Status.ONLINE
    guild_positions: list[str] = field(default_factory=list)


@dataclass
class Relationship:
    user: User = field(default_factory=User)
    type: RelationType = RelationType.FRIEND
    id: str = ""


@dataclass
class Presence:
    user: User = field(default_factory=User)
    status: Status = Status.OFFLINE


@dataclass
class ChannelOverride:
    channel_id: str = ""
    muted: bool = False


@dataclass
class UserGuildSettings:
    guild_id: str = ""
    muted: bool = False
    channel_overrides: list[ChannelOverride] = field(default_factory=list)


@dataclass
class ReadStateEntry:
    id: str = ""
    last_message_id: str = ""


@dataclass
class Invite:
    code: str = ""
    guild: Guild = field(default_factory=Guild)
    channel: Channel = field(default_factory=Channel)


@dataclass
class State:
    """Everything the session knows about the logged in user's world."""

    user: User = field(default_factory=User)
    guilds: list[Guild] = field(default_factory=list)
    private_channels: list[Channel] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
    presences: list[Presence] = field(default_factory=list)
    read_state: list[ReadStateEntry] = field(default_factory=list)
    user_guild_settings: list[UserGuildSettings] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    def guild(self, guild_id: str) -> Guild:
        """Return the guild with the given ID or raise StateNotFoundError."""
        for guild in self.guilds:
            if guild.id == guild_id:
                return guild
        raise StateNotFoundError(f"guild {guild_id!r} not found")

    def _channel(self, channel_id: str) -> Channel:
        for channel in self.private_channels:
            if channel.id == channel_id:
                return channel
        for guild in self.guilds:
            for channel in guild.channels:
                if channel.id == channel_id:
                    return channel
        raise StateNotFoundError(f"channel {channel_id!r} not found")

    @staticmethod
    def _member(guild: Guild, user_id: str) -> Member:
        for member in guild.members:
            if member.user.id == user_id:
                return member
        raise StateNotFoundError(f"member {user_id!r} not found in guild {guild.id!r}")

    def user_channel_permissions(self, user_id: str, channel_id: str) -> int:
        """Compute the permission bits the user has in a guild channel."""
        channel = self._channel(channel_id)
        guild = self.guild(channel.guild_id)
        if user_id == guild.owner_id:
            return PERMISSION_ALL
        member = self._member(guild, user_id)
        return _member_permissions(guild, channel, member)

    def users(self) -> list[User]:
        """Return every distinct known user: guild members, private recipients, relations."""
        known: dict[str, User] = {}
        for guild in self.guilds:
            for member in guild.members:
                known.setdefault(member.user.id, member.user)
        for channel in self.private_channels:
            for recipient in channel.recipients:
                known.setdefault(recipient.id, recipient)
        for relationship in self.relationships:
            known.setdefault(relationship.user.id, relationship.user)
        return list(known.values())


def _member_permissions(guild: Guild, channel: Channel, member: Member) -> int:
    user_id = member.user.id
    if user_id == guild.owner_id:
        return PERMISSION_ALL

    permissions = 0
    everyone = next((role for role in guild.roles if role.id == guild.id), None)
    if everyone is not None:
        permissions |= everyone.permissions
    for role in guild.roles:
        if role.id in member.roles:
            permissions |= role.permissions

    if permissions & PERMISSION_ADMINISTRATOR == PERMISSION_ADMINISTRATOR:
        permissions |= PERMISSION_ALL

    for overwrite in channel.permission_overwrites:
        if overwrite.id == guild.id:
            permissions &= ~overwrite.deny
            permissions |= overwrite.allow
            break

    denies = 0
    allows = 0
    for overwrite in channel.permission_overwrites:
        if overwrite.type == "role" and overwrite.id in member.roles:
            denies |= overwrite.deny
            allows |= overwrite.allow
    permissions &= ~denies
    permissions |= allows

    for overwrite in channel.permission_overwrites:
        if overwrite.type == "member" and overwrite.id == user_id:
            permissions &= ~overwrite.deny
            permissions |= overwrite.allow
            break

    if permissions & PERMISSION_ADMINISTRATOR == PERMISSION_ADMINISTRATOR:
        permissions |= PERMISSION_ALL_CHANNEL

    return permissions