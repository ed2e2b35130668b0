"""The command for managing friends and friend requests."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Iterable, TextIO

from ..commands import Command
from ..models import Relationship, RelationType, User

BOT_RESTRICTION_MESSAGE = (
    "[red]This command can't be used by bots due to Discord API restrictions.\n"
)

FRIENDS_DOCUMENTATION = """[orange][::u]# friends[white]

The friends command allows you to manage your friends on discord. You can add
new friends by sending or accepting friendsrequests. You can also see your
current requests, that goes for the incomming and the outgoing ones.

The friend currently command offers the following subcommands:
  * accept   - accept a friends-request
  * befriend - send a friends-request
  * requests - shows all current requests
  * search   - finds friends by name, name#discriminator or id
  * list     - shows all friends
  * remove   - removes a friend from your friendslist

The following features are currently unsupported:
  * Blocking users
  * Unblocking users
"""

_LIST_WORDS = frozenset({"list", "show", "which"})
_REMOVE_WORDS = frozenset({"delete", "unfriend", "remove", "decline"})
_REQUESTS_WORDS = frozenset({"requests", "invites", "outstanding", "unanswered"})
_ACCEPT_WORDS = frozenset({"accept", "agree"})
_SEARCH_WORDS = frozenset({"search", "find"})
_BEFRIEND_WORDS = frozenset({"befriend", "add", "send", "ask", "invite", "request"})

_SIGNED_DECIMAL = re.compile(r"[+-]?[0-9]+")
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


def _parse_discriminator(text: str) -> int:
    """Parse leniently: invalid input gives 0, out of range is clamped."""
    if not _SIGNED_DECIMAL.fullmatch(text):
        return 0
    return max(_INT32_MIN, min(_INT32_MAX, int(text)))


def _identifies(user: User, text: str) -> bool:
    return text in (user.id, user.username, str(user))


def _is_number(text: str) -> bool:
    return all(unicodedata.category(char).startswith("N") for char in text)


def _write_multiple_matches(writer: TextIO, text: str, users: Iterable[User]) -> None:
    writer.write(f"Multiple matches were found for '{text}'. Please be more precise.\n")
    writer.write("The following matches were found:\n")
    for user in users:
        writer.write(f"  {user}\n")


class Friends(Command):
    """Lists, searches, adds, accepts and removes friends."""

    def __init__(self, session: Any) -> None:
        self._session = session

    def _relationships(self, *types: RelationType) -> list[Relationship]:
        return [rel for rel in self._session.state.relationships if rel.type in types]

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        if not parameters:
            self.print_help(writer)
            return

        if self._session.state.user.bot:
            writer.write(BOT_RESTRICTION_MESSAGE)
            return

        sub_command = parameters[0]
        if sub_command in _LIST_WORDS:
            self._list(writer)
        elif sub_command in _REMOVE_WORDS:
            self._remove(writer, parameters)
        elif sub_command in _REQUESTS_WORDS:
            self._requests(writer)
        elif sub_command in _ACCEPT_WORDS:
            self._accept(writer, parameters)
        elif sub_command in _SEARCH_WORDS:
            self._search(writer, parameters)
        elif sub_command in _BEFRIEND_WORDS:
            self._befriend(writer, parameters)
        else:
            self.print_help(writer)

    def _list(self, writer: TextIO) -> None:
        writer.write("Friends:\n")
        for rel in self._relationships(RelationType.FRIEND):
            writer.write(f"  {rel.user.username}\n")

    def _remove(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 2:
            writer.write("Usage: friends remove <Username|Username#NNNN|UserID>\n")
            return

        text = parameters[1]
        matches = [
            rel
            for rel in self._relationships(
                RelationType.FRIEND,
                RelationType.OUTGOING_REQUEST,
                RelationType.INCOMING_REQUEST,
            )
            if _identifies(rel.user, text)
        ]
        if not matches:
            writer.write(f"No matches for '{text}' found.\n")
        elif len(matches) == 1:
            user = matches[0].user
            writer.write(f"Removing friend {user}\n")
            try:
                self._session.relationship_delete(user.id)
            except Exception as error:  # the session reports failures of any kind
                writer.write(f"Error removing friend ({error}).\n")
            else:
                writer.write(f"{user} has been removed as your friend.\n")
        else:
            _write_multiple_matches(writer, text, (rel.user for rel in matches))

    def _requests(self, writer: TextIO) -> None:
        incoming = "".join(
            f"  {rel.user}\n" for rel in self._relationships(RelationType.INCOMING_REQUEST)
        )
        outgoing = "".join(
            f"  {rel.user}\n" for rel in self._relationships(RelationType.OUTGOING_REQUEST)
        )

        writer.write("Incomming requests:\n")
        writer.write(incoming + "\n" if incoming else "No incomming requests.\n")
        writer.write("Outgoing requests:\n")
        writer.write(outgoing + "\n" if outgoing else "No outgoing requests.\n")

    def _accept(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 2:
            writer.write("Usage: friends accept <Username|Username#NNNN|UserID\n")
            return

        text = parameters[1]
        matches = [
            rel
            for rel in self._relationships(RelationType.INCOMING_REQUEST)
            if _identifies(rel.user, text)
        ]
        if not matches:
            writer.write(f"No matches for '{text}' found.\n")
        elif len(matches) == 1:
            user = matches[0].user
            writer.write(f"Accepting friends request of {user}\n")
            try:
                self._session.relationship_friend_request_accept(user.id)
            except Exception as error:  # the session reports failures of any kind
                writer.write(f"Error accepting friendsrequest ({error}).\n")
            else:
                writer.write(f"{user} is now your friend.\n")
        else:
            _write_multiple_matches(writer, text, (rel.user for rel in matches))

    def _search(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 2:
            writer.write("Usage: friends find <Username|Username#NNNN|UserID\n")
            return

        text = parameters[1]
        matches = [
            rel
            for rel in self._relationships(RelationType.FRIEND)
            if text in rel.user.id or text in rel.user.username or text in str(rel.user)
        ]
        if not matches:
            writer.write(f"No matches were found for '{text}'.\n")
        else:
            writer.write("The following matches were found:\n")
            for rel in matches:
                writer.write(f"  {rel.user}\n")

    def _befriend(self, writer: TextIO, parameters: list[str]) -> None:
        if len(parameters) != 2:
            writer.write("Usage: friends befriend <Username|Username#NNNN|UserID\n")
            return

        text = parameters[1]
        try:
            users = self._session.state.users()
        except Exception as error:  # the session reports failures of any kind
            writer.write(f"An error occured during commandexecution ({error}).\n")
            return

        matches = [user for user in users if _identifies(user, text)]
        if len(matches) == 1:
            user = matches[0]
            try:
                self._session.relationship_friend_request_send(user.id)
            except Exception as error:  # the session reports failures of any kind
                writer.write(f"Error sending friends-request ({error}).\n")
            else:
                writer.write(f"A friends-request has been sent to '{user}'.\n")
            return
        if matches:
            _write_multiple_matches(writer, text, matches)
            return

        parts = text.split("#")
        if len(parts) == 2:
            discriminator = _parse_discriminator(parts[1])
            try:
                self._session.relationship_friend_request_send_by_name_and_discriminator(
                    parts[0], discriminator
                )
            except Exception as error:  # the session reports failures of any kind
                writer.write(f"Error sending friendsrequest to '{text}'.\n\t{error}\n")
                return
            writer.write(f"A friends-request has been sent to '{text}'.\n")
            return

        if not _is_number(text):
            writer.write(
                f"No matches for '{text}' found. "
                "Please ask that person to add you or find out the UserID.\n"
            )
            return

        try:
            self._session.relationship_friend_request_send(text)
        except Exception as error:  # the session reports failures of any kind
            writer.write(f"Error sending friends-request ({error}).\n")
        else:
            writer.write("Friends-request has been sent.\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(FRIENDS_DOCUMENTATION + "\n")

    def name(self) -> str:
        return "friends"

    def aliases(self) -> list[str]:
        return []