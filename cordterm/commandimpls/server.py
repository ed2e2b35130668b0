"""Commands for joining and leaving servers."""

from __future__ import annotations

from typing import Any, TextIO

from ..commands import Command, print_error
from ..theme import color_to_hex, get_theme

BOT_RESTRICTION_MESSAGE = (
    "[red]This command can't be used by bots due to Discord API restrictions.\n"
)

_SERVER_HELP_PAGE = """[::b]NAME
	server - allows you to join or leave a server

[::b]SYNPOSIS
	[::b]server[::-] <subcommand <args>>

[::b]DESCRIPTION
	The server command allows you to join a new server or leave one that you
	are already a part of. What this command can't do is administrating a
	server in any way.

[::]SUBCOMMANDS
	[::b]server-join
		joins the server using the given invitation
	[::b]server-leave
		leaves the given server"""

_SERVER_JOIN_HELP_PAGE = """[::b]NAME
	server-join - allows you to join a server

[::b]SYNPOSIS
	[::b]server-join[::-] <InviteCode|InviteURL>

[::b]DESCRIPTION
	This command will take a invite code or an invite URl and attempt joining
	the server behind it.

[::b]EXAMPLES
	[gray]$ server-join [messaging-link]
	[gray]$ server-join [messaging-link]
	[gray]$ server-join JDScUK"""

_SERVER_LEAVE_HELP_PAGE = """[::b]NAME
	server-leaves - allows you to leave a server

[::b]SYNPOSIS
	[::b]server-leave[::-] <ID|Name>

[::b]DESCRIPTION
	This command will take a server ID or it's name and leave that server.

[::b]EXAMPLES
	[gray]$ server-leave 118456055842734083
	[gray]$ server-leave "Discord Gophers"
	[gray]$ server-leave Nirvana"""


class ServerJoinCommand(Command):
    """Joins a server through an invite code or invite URL."""

    def __init__(self, window: Any, session: Any) -> None:
        self._window = window
        self._session = session

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 1:
            self.print_help(writer)
            return

        if self._session.state.user.bot:
            writer.write(BOT_RESTRICTION_MESSAGE)
            return

        invite_id = parameters[0].rsplit("/", 1)[-1]
        try:
            invite = self._session.invite_accept(invite_id)
        except Exception as error:  # the session reports failures of any kind
            print_error(writer, f"Error accepting invite with ID '{invite_id}'", str(error))
            return
        writer.write(f"Joined server '{invite.guild.name}'\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(_SERVER_JOIN_HELP_PAGE + "\n")

    def name(self) -> str:
        return "server-join"

    def aliases(self) -> list[str]:
        return ["guild-join", "guild-accept", "guild-enter", "server-accept", "server-enter"]


class ServerLeaveCommand(Command):
    """Leaves a server given by ID or name."""

    def __init__(self, window: Any, session: Any) -> None:
        self._window = window
        self._session = session

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 1:
            self.print_help(writer)
            return

        text = parameters[0]
        matches = [
            guild for guild in self._session.state.guilds if text in (guild.id, guild.name)
        ]

        if len(matches) == 1:
            guild = matches[0]
            try:
                self._session.guild_leave(guild.id)
            except Exception as error:  # the session reports failures of any kind
                print_error(writer, f"Error leaving server '{guild.name}'", str(error))
                return
            writer.write(f"Left server '{guild.name}'.\n")
        elif not matches:
            error_color = color_to_hex(get_theme().error_color)
            writer.write(f"[{error_color}]No server with the ID or Name '{text}' was found.\n")
        else:
            writer.write(f"Multiple matches were found for '{text}'. Please be more precise.\n")
            writer.write("The following matches were found:\n")
            for guild in matches:
                writer.write(f"ID: {guild.id}\tName: {guild.name}\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(_SERVER_LEAVE_HELP_PAGE + "\n")

    def name(self) -> str:
        return "server-leave"

    def aliases(self) -> list[str]:
        return ["guild-leave", "guild-exit", "guild-quit", "server-exit", "server-quit"]


class ServerCommand(Command):
    """Dispatches to joining or leaving a server."""

    def __init__(self, join_command: ServerJoinCommand, leave_command: ServerLeaveCommand) -> None:
        self._join_command = join_command
        self._leave_command = leave_command

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if not parameters:
            self.print_help(writer)
            return
        sub_command = parameters[0]
        if sub_command in ("join", "accept", "enter"):
            self._join_command.execute(writer, parameters[1:])
        elif sub_command in ("leave", "exit", "quit"):
            self._leave_command.execute(writer, parameters[1:])
        else:
            self.print_help(writer)

    def print_help(self, writer: TextIO) -> None:
        writer.write(_SERVER_HELP_PAGE + "\n")

    def name(self) -> str:
        return "server"

    def aliases(self) -> list[str]:
        return ["guild"]