"""Slash commands typed at the chat prompt and their execution."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from typing import TextIO

from .console import clear_screen
from .fs import find_file, read_file
from .llm import Client, format_code, query
from .parser import lang_from_ext

COMMAND_ALIASES: dict[str, str] = {
    "h": "help",
    "q": "query",
    "fmt": "format",
    "cls": "clear",
}

_FILE_RE = re.compile(r"file:[\t\n\f\r ]*([^\t\n\f\r ]+)")


@dataclass(frozen=True)
class Command:
    """A named command and the help text shown for it."""

    name: str
    description: str


BUILTIN_COMMANDS: tuple[Command, ...] = (
    Command("help", "List all available commands"),
    Command(
        "query",
        "Ask a plain question to the LLM. Usage: /query What is a goroutine? "
        "or simply input your question and it will be handled as a query",
    ),
    Command(
        "format",
        "Format a file using the LLM. Usage: /format main.go 'make it idiomatic "
        "or /format file:main.go 'make it idiomatic'",
    ),
    Command("clear", "Clear the terminal"),
    Command("exit", "Exit the terminal"),
)


class ExitRequested(Exception):
    """Raised when the user asks to leave the terminal."""


class CommandError(Exception):
    """Raised when a command is used wrongly or cannot do its work."""


def register_commands() -> dict[str, Command]:
    """Return all available commands keyed by name."""
    return {command.name: command for command in BUILTIN_COMMANDS}


def normalize_cmd(cmd: str) -> str:
    return COMMAND_ALIASES.get(cmd, cmd)


def extract_command_from_input(text: str) -> tuple[bool, str, str]:
    """Split ``/cmd rest`` into (True, cmd, rest); other input gives (False, "", text)."""
    if not text.startswith("/"):
        return False, "", text
    parts = text[1:].split()
    if not parts:
        return False, "", text
    return True, parts[0], " ".join(parts[1:])


def extract_files_from_input(
    text: str, working_dir: str, stream: TextIO | None = None
) -> dict[str, str]:
    """Map file names mentioned in ``text`` to their paths below ``working_dir``.

    Names are taken from ``file: name`` markers; without any, the first word
    is tried as a file name.
    """
    out = stream if stream is not None else sys.stdout
    found: dict[str, str] = {}
    for name in _FILE_RE.findall(text):
        try:
            found[name] = find_file(name, working_dir)
        except OSError as exc:
            print("Error finding file:", exc, file=out)

    if not found:
        words = text.split()
        if words:
            try:
                found[words[0]] = find_file(words[0], working_dir)
            except OSError:
                pass
    return found


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


class CommandProcessor:
    """Runs user input against the LLM client and prints the results."""

    def __init__(self, client: Client, stream: TextIO | None = None):
        self.client = client
        self._stream = stream
        self.commands = register_commands()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def process_user_input(self, text: str) -> None:
        """Run a slash command, or send plain text as a query."""
        if not text:
            return
        is_command, cmd, rest = extract_command_from_input(text)
        if is_command:
            self.execute(cmd, rest)
        else:
            self._query([rest])

    def execute(self, cmd: str, text: str) -> None:
        name = normalize_cmd(cmd)
        if name == "help":
            self._help()
        elif name == "query":
            self._query([text])
        elif name == "format":
            self._format([text])
        elif name == "clear":
            clear_screen(self.stream)
        elif name == "exit":
            print("Exiting. Goodbye!", file=self.stream)
            raise ExitRequested("Exiting. Goodbye!")
        else:
            self._query(text.removeprefix("/").split())

    def _help(self) -> None:
        out = self.stream
        print("Available commands:", file=out)
        for command in self.commands.values():
            print(f"/{command.name}: {command.description}", file=out)

    def _query(self, args: list[str]) -> None:
        if not args:
            raise CommandError("usage: /query [your question]")
        response = query(self.client, " ".join(args))
        print(_decode(response), file=self.stream)

    def _format(self, args: list[str]) -> None:
        if not args:
            raise CommandError("usage: /format [filename] [message]")
        text = " ".join(args)
        found = extract_files_from_input(text, self.client.cfg.session.work_dir, self.stream)
        if not found:
            raise CommandError("no file found in working directory")

        file_path = next(iter(found.values()))
        try:
            code = read_file(file_path)
        except OSError as exc:
            raise CommandError(f"failed to read file: {exc}") from exc

        message = text.replace(os.path.basename(file_path), "")
        lang = lang_from_ext(file_path)
        response = format_code(self.client, message, _decode(code), lang)
        print("Formatted output:\n" + _decode(response), file=self.stream)