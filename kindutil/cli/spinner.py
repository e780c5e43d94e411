"""A small command line loading spinner that is also a writer."""

from __future__ import annotations

import itertools
import threading
from typing import Any, Optional

_FRAMES = (
    "⠈⠁",
    "⠈⠑",
    "⠈⠱",
    "⠈⡱",
    "⢀⡱",
    "⢄⡱",
    "⢄⡱",
    "⢆⡱",
    "⢎⡱",
    "⢎⡰",
    "⢎⡠",
    "⢎⡀",
    "⢎⠁",
    "⠎⠁",
    "⠊⠁",
)

_INTERVAL = 0.1


class Spinner:
    """A loading spinner drawn on one line of ``writer``.

    It assumes the line length does not change. Writing to the spinner
    interrupts the current line and passes the text on to ``writer``.
    """

    def __init__(self, writer: Any) -> None:
        self.writer = writer
        self._lock = threading.Lock()
        self._running = False
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._prefix = ""
        self._suffix = ""

    def set_prefix(self, prefix: str) -> None:
        """Set the text printed before the spinner."""
        with self._lock:
            self._prefix = prefix

    def set_suffix(self, suffix: str) -> None:
        """Set the text printed after the spinner."""
        with self._lock:
            self._suffix = suffix

    def start(self) -> None:
        """Start spinning in the background; does nothing if already running."""
        with self._lock:
            if self._running:
                return
            self._running = True
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(target=self._spin, args=(stop_event,), daemon=True)
            self._thread.start()

    def _spin(self, stop_event: threading.Event) -> None:
        for frame in itertools.cycle(_FRAMES):
            if stop_event.wait(_INTERVAL):
                break
            with self._lock:
                if stop_event.is_set():
                    break
                self.writer.write(f"\r{self._prefix}{frame}{self._suffix}")
                flush = getattr(self.writer, "flush", None)
                if flush is not None:
                    flush()
        with self._lock:
            self._running = False

    def stop(self) -> None:
        """Stop the spinner and wait until it has stopped."""
        with self._lock:
            if not self._running:
                return
            self._stop_event.set()
            thread = self._thread
        if thread is not None:
            thread.join()

    def write(self, data: str) -> Any:
        """Write ``data`` to the inner writer, first returning to the line start if spinning."""
        with self._lock:
            if self._running:
                self.writer.write("\r")
            return self.writer.write(data)