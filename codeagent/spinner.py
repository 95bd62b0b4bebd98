"""A terminal spinner that runs in a background thread."""

from __future__ import annotations

import itertools
import sys
import threading
import time
from types import TracebackType
from typing import TextIO


class Spinner:
    """Prints a message, then animates a braille spinner until stopped."""

    FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

    def __init__(self, message: str = "", interval: float = 0.1, stream: TextIO | None = None):
        self.message = message
        self.interval = interval
        self._stream = stream
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> Spinner:
        if self._thread is not None:
            return self
        out = self.stream
        if self.message:
            out.write(self.message + "\n")
            out.flush()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
        return self

    def _spin(self) -> None:
        out = self.stream
        for frame in itertools.cycle(self.FRAMES):
            out.write("\r" + frame)
            out.flush()
            if self._stop_event.wait(self.interval):
                break
        out.write("\r\x1b[K")
        out.flush()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


def show_loader(message: str, stream: TextIO | None = None) -> Spinner:
    """Print ``message`` and start a spinner below it."""
    return Spinner(message, stream=stream).start()


def stop_loader(spinner: Spinner, delay: float = 3.0) -> None:
    """Wait ``delay`` seconds, then stop the spinner."""
    time.sleep(delay)
    spinner.stop()