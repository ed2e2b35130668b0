"""The command that shows manual pages for topics and commands."""

from __future__ import annotations

from typing import Any, TextIO

from ..commands import Command
from ..theme import color_to_hex, get_theme

MANUAL_DOCUMENTATION = """[::b]NAME
	manual - read the help page of a command or a topic

[::b]USAGE
	[::b]manual <topic|command>

[::b]DETAILS
	Shows the help page that belongs to the given command or topic.

[::b]TOPICS
	Apart from command names, these topics have pages of their own:
		- commands
		- chat-view
		- configuration
		- message-editor
		- navigation

[::b]EXAMPLE
	[gray]$ man status
"""

CHAT_VIEW_DOCUMENTATION = """[::b]TOPIC
	chat-view - the area showing the messages of the open channel

[::b]DETAILS
	Without focus the chat view only scrolls: use Ctrl with the arrow keys
	or the mouse wheel. Once it has focus, single messages can be selected
	and acted upon with these default keys:

		e          edit the message
		Delete     delete the message
		c          copy the text
		l          copy a link to the message
		r          reply, mentioning the author
		q          quote the message
		s          reveal or hide spoilers
		Up / Down  move the selection
		Home / End jump to the first or last message

	Your own shortcut settings may replace these defaults."""

COMMANDS_DOCUMENTATION = """[::b]TOPIC
	commands - actions typed into the command input

[::b]DETAILS
	Commands are typed into the command input inside the application;
	they cannot be passed on the command line.

	The general form is:
		COMMAND SUBCOMMAND --OPTION "value with spaces" VALUE

	Subcommands and options are optional and depend on the command.
	Values containing spaces must be put in double quotes, otherwise
	every space starts a new value.

	Entered commands are kept in a history for the running session only;
	browse it with the up and down arrow keys. Secrets are never typed
	into the command input; a separate dialog asks for them instead.

	The command input shares its editing keys with the message input.

	Registered commands:
{commands}
[::b]EXAMPLES
	[gray]$ status set idle
	[gray]$ status get"""

CONFIGURATION_DOCUMENTATION = """[::b]TOPIC
	configuration - settings that are kept between sessions

[::b]DETAILS
	Most settings are changed by editing config.json in the configuration
	directory; a few, such as the fixed layout, also have commands.

	Usual locations of the file:
		Linux:   ~/.config/cordless/config.json
		Windows: ~/AppData/Roaming/cordless/config.json
		macOS:   ~/.cordless/config.json

[::b]SETTINGS
	Token (string, empty)
		Credential used to sign in; normally entered at startup.
	Times (int, 0)
		Timestamp style: 0 = HH:MM:SS, 1 = HH:MM, 2 = none.
	UseRandomUserColors (bool, false)
		Give every user a colour drawn from a fixed pool.
	FocusChannelAfterGuildSelection (bool, true)
		Move focus to the channel tree after picking a server.
	FocusMessageInputAfterChannelSelection (bool, true)
		Move focus to the message input after picking a channel.
	ShowUserContainer (bool, true)
		Show the member list beside the chat view.
	UseFixedLayout (bool, false)
		Use the fixed widths below instead of relative ones.
	FixedSizeLeft (int, 12)
		Width of the server list and channel tree with a fixed layout.
	FixedSizeRight (int, 12)
		Width of the member list with a fixed layout.
	OnTypeInListBehaviour (int, 1)
		Typing in a list: 0 = nothing, 1 = search, 2 = focus message input.
	MouseEnabled (bool, true)
		Allow clicking and scrolling; disables terminal text selection.
	ShortenLinks (bool, false)
		Run a small local server that shortens long links.
	ShortenerPort (int, 63212)
		Port of that local server.
	DesktopNotifications (bool, true)
		Send notifications through the desktop's notification system.
	ShowPlaceholderForBlockedMessages (bool, true)
		Show a placeholder in place of messages from blocked users.
	Accounts (list)
		Saved profiles to switch between; managed by the account command."""

MESSAGE_EDITOR_DOCUMENTATION = """[::b]TOPIC
	message-editor - the input field for writing messages

[::b]DETAILS
	The editor is a text widget of its own with selection support; some
	parts of it are still rough.

	Default keys:
		Backspace / Delete     remove left / right or the selection
		Ctrl+A                 select everything
		Ctrl+A then Left/Right jump to the start / end
		Ctrl+Left / Ctrl+Right move by one word
		Ctrl+Shift+Left/Right  select by one word
		Ctrl+Up / Ctrl+Down    scroll the chat view
		Ctrl+V                 paste text or an image
		Alt+Enter              insert a line break
		Enter                  send the message

	Emojis can be written as :name:, and typing @ followed by part of a
	name offers matching users to mention."""

NAVIGATION_DOCUMENTATION = """[::b]TOPIC
	navigation - moving between the parts of the window

[::b]DETAILS
	The keyboard is the main way to move around, though clicking also
	moves the focus.

	Default keys:
		Ctrl+C   quit                      (anywhere)
		Alt+U    member list               (server channel or group chat)
		Alt+P    private chats             (anywhere)
		Alt+S    server list               (anywhere)
		Alt+C    channel tree              (anywhere)
		Alt+M    message input             (anywhere)
		Alt+T    message list              (anywhere)
		Alt+.    show or hide commands     (anywhere)
		Ctrl+O   command output            (anywhere)
		Ctrl+I   command input             (anywhere)
		Up       edit your last message    (empty message input)
		Esc      stop editing a message    (while editing)

	Many of these can be rebound in the shortcut dialog, opened with
	Alt+Shift+S."""

_STATIC_TOPICS = {
    "chat-view": CHAT_VIEW_DOCUMENTATION,
    "chatview": CHAT_VIEW_DOCUMENTATION,
    "configuration": CONFIGURATION_DOCUMENTATION,
    "config": CONFIGURATION_DOCUMENTATION,
    "conf": CONFIGURATION_DOCUMENTATION,
    "message-editor": MESSAGE_EDITOR_DOCUMENTATION,
    "messageeditor": MESSAGE_EDITOR_DOCUMENTATION,
    "navigation": NAVIGATION_DOCUMENTATION,
}


class Manual(Command):
    """Shows the manual page of a topic or a registered command.

    The window must offer get_registered_commands().
    """

    def __init__(self, window: Any) -> None:
        self._window = window

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if not parameters:
            self.print_help(writer)
            return

        # "man user set" shows the page of "user-set".
        topic = "-".join(parameters).lower()

        static_page = _STATIC_TOPICS.get(topic)
        if static_page is not None:
            writer.write(static_page + "\n")
            return

        commands = self._window.get_registered_commands()
        if topic == "commands":
            listing = "".join(f"\t\t- {command.name()}\n" for command in commands)
            writer.write(COMMANDS_DOCUMENTATION.format(commands=listing))
            return

        for command in commands:
            if command.name() == topic or topic in command.aliases():
                command.print_help(writer)
                return

        error_color = color_to_hex(get_theme().error_color)
        writer.write(f"[{error_color}]No manual entry for '{topic}' found.\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(MANUAL_DOCUMENTATION + "\n")

    def name(self) -> str:
        return "manual"

    def aliases(self) -> list[str]:
        return ["man", "help"]