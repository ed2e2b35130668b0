import io

import pytest

from cordterm.commandimpls.friends import FRIENDS_DOCUMENTATION, Friends
from cordterm.models import Relationship, RelationType, State, User


class FakeSession:
    def __init__(self, state, fail=False):
        self.state = state
        self.fail = fail
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)
        if self.fail:
            raise RuntimeError("boom")

    def relationship_delete(self, user_id):
        self._record("delete", user_id)

    def relationship_friend_request_accept(self, user_id):
        self._record("accept", user_id)

    def relationship_friend_request_send(self, user_id):
        self._record("send", user_id)

    def relationship_friend_request_send_by_name_and_discriminator(self, name, discriminator):
        self._record("send_by_name", name, discriminator)


ALICE = User(id="11", username="alice", discriminator="0001")
BOB = User(id="22", username="bob", discriminator="0002")
CAROL = User(id="33", username="carol", discriminator="0003")


def make_session(relationships=(), bot=False, fail=False):
    state = State(user=User(id="1", username="me", bot=bot), relationships=list(relationships))
    return FakeSession(state, fail=fail)


def run(session, *parameters):
    out = io.StringIO()
    Friends(session).execute(out, list(parameters))
    return out.getvalue()


def test_no_parameters_prints_help():
    assert run(make_session()) == FRIENDS_DOCUMENTATION + "\n"


def test_unknown_subcommand_prints_help():
    assert run(make_session(), "dance") == FRIENDS_DOCUMENTATION + "\n"


def test_bot_refused():
    output = run(make_session(bot=True), "list")
    assert output == "[red]This command can't be used by bots due to Discord API restrictions.\n"


def test_list_shows_only_friends():
    session = make_session([
        Relationship(user=ALICE, type=RelationType.FRIEND),
        Relationship(user=BOB, type=RelationType.BLOCKED),
    ])
    assert run(session, "list") == "Friends:\n  alice\n"


def test_remove_single_match():
    session = make_session([Relationship(user=ALICE, type=RelationType.FRIEND)])
    output = run(session, "remove", "alice#0001")
    assert session.calls == [("delete", "11")]
    assert output == (
        "Removing friend alice#0001\nalice#0001 has been removed as your friend.\n"
    )


def test_remove_error_is_reported():
    session = make_session([Relationship(user=ALICE, type=RelationType.FRIEND)], fail=True)
    output = run(session, "unfriend", "11")
    assert output.endswith("Error removing friend (boom).\n")


def test_remove_no_match_and_usage():
    session = make_session([Relationship(user=ALICE, type=RelationType.BLOCKED)])
    assert run(session, "remove", "alice") == "No matches for 'alice' found.\n"
    assert run(session, "remove") == "Usage: friends remove <Username|Username#NNNN|UserID>\n"
    assert session.calls == []


def test_remove_multiple_matches():
    twin = User(id="44", username="alice", discriminator="0009")
    session = make_session([
        Relationship(user=ALICE, type=RelationType.FRIEND),
        Relationship(user=twin, type=RelationType.OUTGOING_REQUEST),
    ])
    output = run(session, "remove", "alice")
    assert output == (
        "Multiple matches were found for 'alice'. Please be more precise.\n"
        "The following matches were found:\n  alice#0001\n  alice#0009\n"
    )
    assert session.calls == []


def test_requests_lists_incoming_and_outgoing():
    session = make_session([Relationship(user=ALICE, type=RelationType.INCOMING_REQUEST)])
    assert run(session, "requests") == (
        "Incomming requests:\n  alice#0001\n\n"
        "Outgoing requests:\nNo outgoing requests.\n"
    )


def test_accept_only_considers_incoming():
    session = make_session([
        Relationship(user=ALICE, type=RelationType.INCOMING_REQUEST),
        Relationship(user=BOB, type=RelationType.OUTGOING_REQUEST),
    ])
    assert run(session, "accept", "bob") == "No matches for 'bob' found.\n"
    output = run(session, "agree", "alice")
    assert session.calls == [("accept", "11")]
    assert output == (
        "Accepting friends request of alice#0001\nalice#0001 is now your friend.\n"
    )


def test_search_by_substring():
    session = make_session([
        Relationship(user=ALICE, type=RelationType.FRIEND),
        Relationship(user=CAROL, type=RelationType.FRIEND),
    ])
    assert run(session, "find", "ali") == "The following matches were found:\n  alice#0001\n"
    assert run(session, "search", "zzz") == "No matches were found for 'zzz'.\n"


def test_befriend_known_user():
    session = make_session([Relationship(user=BOB, type=RelationType.BLOCKED)])
    output = run(session, "add", "bob")
    assert session.calls == [("send", "22")]
    assert output == "A friends-request has been sent to 'bob#0002'.\n"


def test_befriend_by_name_and_discriminator():
    session = make_session()
    output = run(session, "befriend", "dave#0042")
    assert session.calls == [("send_by_name", "dave", 42)]
    assert output == "A friends-request has been sent to 'dave#0042'.\n"


def test_befriend_by_name_invalid_discriminator_uses_zero():
    session = make_session()
    run(session, "befriend", "dave#abc")
    assert session.calls == [("send_by_name", "dave", 0)]


def test_befriend_by_numeric_id():
    session = make_session()
    assert run(session, "invite", "987654") == "Friends-request has been sent.\n"
    assert session.calls == [("send", "987654")]


@pytest.mark.parametrize("text", ["dave", "12a"])
def test_befriend_non_numeric_unknown(text):
    session = make_session()
    output = run(session, "befriend", text)
    assert output == (
        f"No matches for '{text}' found. "
        "Please ask that person to add you or find out the UserID.\n"
    )
    assert session.calls == []


def test_befriend_error_by_name():
    session = make_session(fail=True)
    output = run(session, "befriend", "dave#1")
    assert output == "Error sending friendsrequest to 'dave#1'.\n\tboom\n"


def test_name_and_aliases():
    command = Friends(make_session())
    assert command.name() == "friends"
    assert command.aliases() == []