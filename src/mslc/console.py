"""Shared reader for the parent's console input."""

import logging
import queue
import threading
from typing import TextIO

from mslc.config import CONSOLE_POLL_INTERVAL_SECONDS

log = logging.getLogger(__name__)

# Readers live as long as their stream; each one holds its source open.
_readers: "dict[TextIO, ConsoleReader]" = {}
_readers_lock = threading.Lock()


class ConsoleReader:
    """Read one console stream on a single long-lived thread.

    Every server run attached to the same console takes lines from this
    reader through a ConsoleSession, so a line typed between runs waits
    for the next run instead of being consumed by a finished one.
    """

    def __init__(self, source: TextIO, error_stream: TextIO) -> None:
        self._source = source
        self._error_stream = error_stream
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._thread: threading.Thread | None = None
        self._start_lock = threading.Lock()

    @classmethod
    def for_stream(cls, source: TextIO, error_stream: TextIO) -> "ConsoleReader":
        """Return the reader attached to source, creating and starting it once."""
        with _readers_lock:
            reader = _readers.get(source)
            if reader is None:
                reader = cls(source, error_stream)
                _readers[source] = reader
        reader.start()
        return reader

    def start(self) -> None:
        with self._start_lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, daemon=True, name="mslc-console")
            self._thread.start()

    def open(self) -> "ConsoleSession":
        return ConsoleSession(self)

    def get(self, timeout: float) -> str | None:
        """Return the next line, None at end of input; raise queue.Empty on timeout."""
        line = self._lines.get(timeout=timeout)
        if line is None:
            # End of input stays visible to every later session.
            self._lines.put(None)
        return line

    def _run(self) -> None:
        try:
            for line in iter(self._source.readline, ""):
                self._lines.put(line)
        except (OSError, ValueError) as e:
            log.debug("console read failed: %s", e)
            try:
                self._error_stream.write(f"mslc: console input failed: {e}\n")
                self._error_stream.flush()
            except (OSError, ValueError):
                pass
        finally:
            self._lines.put(None)
        log.debug("console reader reached end of input")


class ConsoleSession:
    """One run's view of the console: a readline() that can be closed."""

    def __init__(
        self, reader: ConsoleReader, poll_interval: float = CONSOLE_POLL_INTERVAL_SECONDS
    ) -> None:
        self._reader = reader
        self._poll_interval = poll_interval
        self._closed = threading.Event()

    def readline(self) -> str:
        """Return the next console line, or "" at end of input or once closed."""
        while not self._closed.is_set():
            try:
                line = self._reader.get(timeout=self._poll_interval)
            except queue.Empty:
                continue
            return "" if line is None else line
        return ""

    def close(self) -> None:
        self._closed.set()
