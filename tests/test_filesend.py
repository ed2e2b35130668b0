import io

from cordterm.commandimpls.filesend import FILE_SEND_DOCUMENTATION, FileSend
from cordterm.models import Channel
from cordterm.theme import color_to_hex, get_theme


class FakeWindow:
    def __init__(self, channel):
        self.channel = channel

    def get_selected_channel(self):
        return self.channel


class FakeSession:
    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    def channel_file_send(self, channel_id, name, data):
        if self.fail:
            raise RuntimeError("upload refused")
        self.sent.append((channel_id, name, data.read()))


def run(session, channel, *parameters):
    out = io.StringIO()
    FileSend(session, FakeWindow(channel)).execute(out, list(parameters))
    return out.getvalue()


def test_requires_channel():
    session = FakeSession()
    output = run(session, None, "file.txt")
    colour = color_to_hex(get_theme().error_color)
    assert output == f"[{colour}]In order to use this command, you have to be in a channel.\n"
    assert session.sent == []


def test_no_parameters_prints_help():
    assert run(FakeSession(), Channel(id="5")) == FILE_SEND_DOCUMENTATION


def test_sends_files(tmp_path):
    first = tmp_path / "a.txt"
    second = tmp_path / "b.bin"
    first.write_bytes(b"hello")
    second.write_bytes(b"\x00\x01")
    session = FakeSession()
    output = run(session, Channel(id="5"), str(first), str(second))
    assert output == ""
    assert session.sent == [("5", "a.txt", b"hello"), ("5", "b.bin", b"\x00\x01")]


def test_relative_path_resolved_against_cwd(tmp_path, monkeypatch):
    (tmp_path / "rel.txt").write_bytes(b"data")
    monkeypatch.chdir(tmp_path)
    session = FakeSession()
    run(session, Channel(id="7"), "rel.txt")
    assert session.sent == [("7", "rel.txt", b"data")]


def test_missing_file_reported_and_others_still_sent(tmp_path):
    present = tmp_path / "ok.txt"
    present.write_bytes(b"x")
    session = FakeSession()
    colour = color_to_hex(get_theme().error_color)
    output = run(session, Channel(id="5"), str(tmp_path / "missing.txt"), str(present))
    assert output.startswith(f"[{colour}]Error reading file:\n\t[{colour}]")
    assert session.sent == [("5", "ok.txt", b"x")]


def test_send_error_reported(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"x")
    colour = color_to_hex(get_theme().error_color)
    output = run(FakeSession(fail=True), Channel(id="5"), str(path))
    assert output == f"[{colour}]Error sending file:\n\t[{colour}]upload refused\n"


def test_name_and_aliases():
    command = FileSend(FakeSession(), FakeWindow(None))
    assert command.name() == "file-send"
    assert command.aliases() == ["filesend"]