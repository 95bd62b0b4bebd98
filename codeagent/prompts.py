"""Interactive line prompts for user details, models and chat input."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from .config import AVAILABLE_MODELS

CANCEL = "q"


def _pick(options: Sequence[str], choice: str) -> str | None:
    if not choice:
        return options[0]
    if choice.isdigit():
        index = int(choice)
        if 1 <= index <= len(options):
            return options[index - 1]
        return None
    lowered = choice.lower()
    for option in options:
        if option.lower() == lowered:
            return option
    return None


def prompt(
    label: str,
    items: Sequence[str] | None = None,
    reader: TextIO | None = None,
    stream: TextIO | None = None,
) -> str:
    """Ask for a line of text, or for one of ``items`` when given.

    Text answers are stripped; end of input gives an empty string. In a list,
    an empty answer picks the first item, a number or a name picks that item,
    and "q" cancels with an empty string.
    """
    inp = reader if reader is not None else sys.stdin
    out = stream if stream is not None else sys.stdout
    options = list(items or ())

    if not options:
        out.write(f"{label}\n\n> ")
        out.flush()
        return inp.readline().strip()

    print(label, file=out)
    for number, option in enumerate(options, start=1):
        print(f"  {number}. {option}", file=out)
    while True:
        out.write("> ")
        out.flush()
        line = inp.readline()
        if not line:
            return ""
        choice = line.strip()
        if choice == CANCEL:
            return ""
        picked = _pick(options, choice)
        if picked is not None:
            return picked
        print(f"Invalid choice: {choice}", file=out)


def prompt_username(reader: TextIO | None = None, stream: TextIO | None = None) -> str:
    return prompt("Enter your name:", None, reader, stream)


def prompt_api_key(reader: TextIO | None = None, stream: TextIO | None = None) -> str:
    return prompt("Enter your OpenAI API key:", None, reader, stream)


def prompt_model(reader: TextIO | None = None, stream: TextIO | None = None) -> str:
    return prompt("Select a model:", AVAILABLE_MODELS, reader, stream)


def prompt_working_directory(reader: TextIO | None = None, stream: TextIO | None = None) -> str:
    return prompt("Enter your working directory:", None, reader, stream)


def prompt_user_input(reader: TextIO | None = None, stream: TextIO | None = None) -> str:
    return prompt("Start a new conversation:", None, reader, stream)