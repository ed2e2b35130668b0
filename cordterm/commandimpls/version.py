"""The command that reports the running version."""

from __future__ import annotations

from typing import TextIO

from ..commands import Command

VERSION = "0.1.0"

VERSION_DOCUMENTATION = """[::b]NAME
	version - show which release of the client is running

[::b]USAGE
	[::b]version

[::b]DETAILS
	Prints the release identifier of this client. Releases are named after
	the date they were built on, so a build made by hand from newer sources
	may hold changes that the printed release does not include."""


class VersionCommand(Command):
    """Prints the version of the application."""

    def __init__(self, version: str = VERSION) -> None:
        self._version = version

    def execute(self, writer: TextIO, parameters: list[str]) -> None:
        writer.write(f"You are running cordless version {self._version}\n")

    def print_help(self, writer: TextIO) -> None:
        writer.write(VERSION_DOCUMENTATION + "\n")

    def name(self) -> str:
        return "version"

    def aliases(self) -> list[str]:
        return []