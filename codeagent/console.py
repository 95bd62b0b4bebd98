"""Small terminal output helpers."""

from __future__ import annotations

import sys
from typing import TextIO

CLEAR_SCREEN = "\x1b[2J\x1b[0f"


def clear_screen(stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stdout
    out.write(CLEAR_SCREEN)
    out.flush()


def welcome(name: str, stream: TextIO | None = None) -> None:
    out = stream if stream is not None else sys.stdout
    print("Welcome ", name, file=out)
    print("What would you like to do today?", file=out)