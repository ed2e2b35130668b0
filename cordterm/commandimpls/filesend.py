"""The command that uploads local files to the current channel."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any, TextIO

from ..commands import Command, print_error
from ..theme import color_to_hex, get_theme

FILE_SEND_DOCUMENTATION = """[::b]NAME
	file-send - send files from your local machine

[::b]SYNOPSIS
	[::b]file-send <FILE_PATH>...

[::b]DESCRIPTION
	The file-send command allows you to send multiple files to your current channel.

[::b]EXAMPLES
	[gray]$ file-send ~/file.txt
	[gray]$ file-send ~/file1.txt ~/file2.txt
	[gray]$ file-send "~/file one.txt" ~/file2.txt"""


def _to_absolute_path(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path))


class FileSend(Command):
    """Sends one or more files to the selected channel.

    The window must offer get_selected_channel(); the session must offer
    channel_file_send(channel_id, name, data).
    """

    def __init__(self, session: Any, window: Any) -> None:
        self._session = session
        self._window = window

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        channel = self._window.get_selected_channel()
        if channel is None:
            error_color = color_to_hex(get_theme().error_color)
            writer.write(
                f"[{error_color}]In order to use this command, you have to be in a channel.\n"
            )
            return

        if not parameters:
            self.print_help(writer)
            return

        for parameter in parameters:
            try:
                resolved = _to_absolute_path(parameter)
                data = Path(resolved).read_bytes()
            except (OSError, RuntimeError) as error:
                print_error(writer, "Error reading file", str(error))
                continue

            try:
                self._session.channel_file_send(
                    channel.id, os.path.basename(resolved), io.BytesIO(data)
                )
            except Exception as error:  # the session reports failures of any kind
                print_error(writer, "Error sending file", str(error))

    def print_help(self, writer: TextIO) -> None:
        writer.write(FILE_SEND_DOCUMENTATION)

    def name(self) -> str:
        return "file-send"

    def aliases(self) -> list[str]:
        return ["filesend"]