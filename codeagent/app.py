"""The interactive terminal: start-up, login and the main input loop."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from typing import TextIO

import requests

from .auth import authenticate_user
from .commands import CommandError, CommandProcessor, ExitRequested
from .config import Config, SessionInvalidated, init_config
from .llm import APIError, Client
from .prompts import prompt_user_input, prompt_working_directory

BANNER = """
  +-------------------------+
  |        codeagent        |
  +-------------------------+
"""

_REPORTED_ERRORS = (CommandError, APIError, OSError, ValueError, requests.RequestException)


class _LineReader:
    """Wraps an input stream and remembers when it ran dry."""

    def __init__(self, inner: TextIO):
        self._inner = inner
        self.exhausted = False

    def readline(self) -> str:
        line = self._inner.readline()
        if not line:
            self.exhausted = True
        return line


def run(
    cfg: Config,
    stop_event: threading.Event | None = None,
    reader: TextIO | None = None,
    stream: TextIO | None = None,
) -> None:
    """Read user input and process it until stopped, exited or out of input."""
    out = stream if stream is not None else sys.stdout
    lines = _LineReader(reader if reader is not None else sys.stdin)
    client = Client(cfg)
    processor = CommandProcessor(client, out)

    if not cfg.session.work_dir:
        directory = prompt_working_directory(lines, out)  # type: ignore[arg-type]
        if directory:
            cfg.session.work_dir = directory
            cfg.update_config()

    while True:
        if (stop_event is not None and stop_event.is_set()) or lines.exhausted:
            print("\nShutting down...", file=out)
            return
        text = prompt_user_input(lines, out)  # type: ignore[arg-type]
        if not text:
            continue
        try:
            processor.process_user_input(text)
        except ExitRequested:
            return
        except _REPORTED_ERRORS as exc:
            print(exc, file=out)


def start_ui(
    stop_event: threading.Event | None = None,
    reader: TextIO | None = None,
    stream: TextIO | None = None,
) -> None:
    """Show the banner, log in if needed and run the terminal."""
    out = stream if stream is not None else sys.stdout
    print(BANNER, file=out)
    cfg = init_config()
    if not cfg.api_key:
        authenticate_user(cfg, reader, out)
    print(f"Welcome {cfg.name} to the codeagent terminal", file=out)
    run(cfg, stop_event, reader, out)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="codeagent", description="Chat with an LLM about the code in your project."
    )
    parser.parse_args(argv)

    stop_event = threading.Event()
    previous = None
    in_main_thread = threading.current_thread() is threading.main_thread()
    if in_main_thread:
        previous = signal.signal(signal.SIGTERM, lambda *_: stop_event.set())
    try:
        start_ui(stop_event)
    except KeyboardInterrupt:
        print("\nShutting down...")
    except SessionInvalidated:
        pass
    finally:
        if in_main_thread:
            signal.signal(signal.SIGTERM, previous)
    return 0