"""Commands for viewing and changing online status."""

from __future__ import annotations

from typing import Any, TextIO

from ..commands import Command, print_error
from ..models import Presence, Status
from ..theme import color_to_hex, get_theme

BOT_RESTRICTION_MESSAGE = (
    "[red]This command can't be used by bots due to Discord API restrictions.\n"
)

_STATUS_HELP_PAGE = """[::b]NAME
	status - view your or others status or update your own

[::b]SYNPOSIS
	[::b]status [subcommand]

[::b]DESCRPTION
	This command allows to either update your status or view a users status.
	For more information check the help pages of the subcommands.

[::]SUBCOMMANDS
	[::b]status-get (default)
		prints the status of the given user or yourself
	[::b]set-set
		updates your current status"""

_STATUS_SET_HELP_PAGE = """[::b]NAME
	status-set - allows updating your own status

[::b]SYNPOSIS
	[::b]status-set[::-] <online|idle|dnd|invisible>

[::b]DESCRPTION
	This command can be used to set your current online status to the
	value passed as the first parameter. Other users will immediately
	see your status update.

[::b]EXAMPLES
	[gray]$ status-set invisible"""

_STATUS_GET_HELP_PAGE = """[::b]NAME
	status-get - prints your current status or the status of the given user

[::b]SYNPOSIS
	[::b]status-get[::-] [Username|Username#NNNN|UserID[]

[::b]DESCRPTION
	This command prints either your current status of no value was passed
	or the status of the passed user, if the presence for that user could
	be found. Due to a problem with the presences, this command might randomly
	fail when trying to query specific users.

[::b]EXAMPLES
	[gray]$ status-get
	[yellow]idle

	[gray]$ status-get Marcel#7299
	[{error_color}]Do not disturb"""

_STATUS_WORDS = {
    "online": Status.ONLINE,
    "available": Status.ONLINE,
    "dnd": Status.DO_NOT_DISTURB,
    "donotdisturb": Status.DO_NOT_DISTURB,
    "busy": Status.DO_NOT_DISTURB,
    "idle": Status.IDLE,
    "invisible": Status.INVISIBLE,
}


def _error_color() -> str:
    return color_to_hex(get_theme().error_color)


def status_to_string(status: Status | str) -> str:
    """Render a status as coloured text."""
    if status == Status.ONLINE:
        return "[green]Online[white]"
    if status == Status.DO_NOT_DISTURB:
        return f"[{_error_color()}]Do not disturb[white]"
    if status == Status.IDLE:
        return "[yellow]Idle[white]"
    if status == Status.INVISIBLE:
        return "[gray]Invisible[white]"
    if status == Status.OFFLINE:
        return "[gray]Offline[white]"
    return "Unknown status"


class StatusGetCommand(Command):
    """Prints the own status or that of another user."""

    def __init__(self, session: Any) -> None:
        self._session = session

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) > 1:
            writer.write(f"[{_error_color()}]Invalid parameters\n")
            self.print_help(writer)
            return

        state = self._session.state
        if not parameters:
            writer.write(status_to_string(state.settings.status) + "\n")
            return

        text = parameters[0]
        matches: list[Presence] = [
            presence
            for presence in state.presences
            if text in (presence.user.id, presence.user.username, str(presence.user))
        ]
        if not matches:
            writer.write(f"[{_error_color()}]No match for '{text}'.\n")
        elif len(matches) > 1:
            writer.write(f"Multiple matches were found for '{text}'. Please be more precise.\n")
            writer.write("The following matches were found:\n")
            for match in matches:
                writer.write(f"\t{match.user}\n")
        else:
            writer.write(status_to_string(matches[0].status) + "\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(_STATUS_GET_HELP_PAGE.format(error_color=_error_color()) + "\n")

    def name(self) -> str:
        return "status-get"

    def aliases(self) -> list[str]:
        return []


class StatusSetCommand(Command):
    """Updates the own status."""

    def __init__(self, session: Any) -> None:
        self._session = session

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if self._session.state.user.bot:
            writer.write(BOT_RESTRICTION_MESSAGE)
            return

        if len(parameters) != 1:
            writer.write(f"[{_error_color()}]Invalid parameters\n")
            self.print_help(writer)
            return

        word = parameters[0].lower()
        status = _STATUS_WORDS.get(word)
        if status is None:
            writer.write(f"[{_error_color()}]Invalid status: '{word}'\n")
            self.print_help(writer)
            return

        try:
            updated = self._session.user_update_status(status)
        except Exception as error:  # the session reports failures of any kind
            print_error(writer, "Error setting status", f"'{error}'")
            return
        if updated is not None:
            self._session.state.settings = updated

    def print_help(self, writer: TextIO) -> None:
        writer.write(_STATUS_SET_HELP_PAGE + "\n")

    def name(self) -> str:
        return "status-set"

    def aliases(self) -> list[str]:
        return ["status-update"]


class StatusCommand(Command):
    """Dispatches to getting or setting a status; getting is the default."""

    def __init__(self, get_command: StatusGetCommand, set_command: StatusSetCommand) -> None:
        self._get_command = get_command
        self._set_command = set_command

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if parameters and parameters[0] in ("set", "update"):
            self._set_command.execute(writer, parameters[1:])
        elif parameters and parameters[0] == "get":
            self._get_command.execute(writer, parameters[1:])
        else:
            self._get_command.execute(writer, parameters)

    def print_help(self, writer: TextIO) -> None:
        writer.write(_STATUS_HELP_PAGE + "\n")

    def name(self) -> str:
        return "status"

    def aliases(self) -> list[str]:
        return []