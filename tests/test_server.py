import io

import pytest

from cordterm.commandimpls.server import (
    BOT_RESTRICTION_MESSAGE,
    ServerCommand,
    ServerJoinCommand,
    ServerLeaveCommand,
)
from cordterm.models import Guild, Invite, State, User
from cordterm.theme import color_to_hex, get_theme


class FakeSession:
    def __init__(self, state):
        self.state = state
        self.accepted = []
        self.left = []
        self.error = None

    def invite_accept(self, code):
        self.accepted.append(code)
        if self.error is not None:
            raise self.error
        return Invite(code=code, guild=Guild(id="900", name="Gophers"))

    def guild_leave(self, guild_id):
        self.left.append(guild_id)
        if self.error is not None:
            raise self.error


@pytest.fixture
def session():
    state = State(
        user=User(id="1", username="me"),
        guilds=[
            Guild(id="100", name="Nirvana"),
            Guild(id="200", name="Twins"),
            Guild(id="300", name="Twins"),
        ],
    )
    return FakeSession(state)


def run(command, parameters):
    out = io.StringIO()
    command.execute(out, parameters)
    return out.getvalue()


def error_color():
    return color_to_hex(get_theme().error_color)


def test_join_with_url_uses_last_segment(session):
    output = run(ServerJoinCommand(None, session), ["https://example.com/invite/JDScUK"])
    assert session.accepted == ["JDScUK"]
    assert output == "Joined server 'Gophers'\n"


def test_join_with_plain_code(session):
    run(ServerJoinCommand(None, session), ["JDScUK"])
    assert session.accepted == ["JDScUK"]


def test_join_error_reported(session):
    session.error = RuntimeError("expired")
    output = run(ServerJoinCommand(None, session), ["JDScUK"])
    colour = error_color()
    assert output == (
        f"[{colour}]Error accepting invite with ID 'JDScUK':\n\t[{colour}]expired\n"
    )


def test_join_rejected_for_bots(session):
    session.state.user.bot = True
    assert run(ServerJoinCommand(None, session), ["JDScUK"]) == BOT_RESTRICTION_MESSAGE
    assert session.accepted == []


def test_join_wrong_count_prints_help(session):
    output = run(ServerJoinCommand(None, session), [])
    assert "server-join - allows you to join a server" in output
    assert session.accepted == []


@pytest.mark.parametrize("query", ["Nirvana", "100"])
def test_leave_single_match(session, query):
    output = run(ServerLeaveCommand(None, session), [query])
    assert session.left == ["100"]
    assert output == "Left server 'Nirvana'.\n"


def test_leave_no_match(session):
    output = run(ServerLeaveCommand(None, session), ["Nowhere"])
    assert output == f"[{error_color()}]No server with the ID or Name 'Nowhere' was found.\n"
    assert session.left == []


def test_leave_multiple_matches(session):
    output = run(ServerLeaveCommand(None, session), ["Twins"])
    assert output.startswith("Multiple matches were found for 'Twins'. Please be more precise.\n")
    assert "ID: 200\tName: Twins\n" in output
    assert "ID: 300\tName: Twins\n" in output
    assert session.left == []


def test_leave_error_reported(session):
    session.error = RuntimeError("denied")
    output = run(ServerLeaveCommand(None, session), ["100"])
    assert "Error leaving server 'Nirvana':" in output
    assert output.endswith("denied\n")


def test_server_dispatch(session):
    command = ServerCommand(ServerJoinCommand(None, session), ServerLeaveCommand(None, session))
    run(command, ["enter", "abc"])
    assert session.accepted == ["abc"]
    run(command, ["quit", "Nirvana"])
    assert session.left == ["100"]


def test_server_help_on_unknown_or_empty(session):
    command = ServerCommand(ServerJoinCommand(None, session), ServerLeaveCommand(None, session))
    help_text = run(command, [])
    assert "server - allows you to join or leave a server" in help_text
    assert run(command, ["bogus"]) == help_text


def test_names_and_aliases(session):
    join = ServerJoinCommand(None, session)
    leave = ServerLeaveCommand(None, session)
    command = ServerCommand(join, leave)
    assert (command.name(), join.name(), leave.name()) == ("server", "server-join", "server-leave")
    assert command.aliases() == ["guild"]
    assert "guild-join" in join.aliases()
    assert "guild-leave" in leave.aliases()