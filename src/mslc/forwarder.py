"""Line-oriented stream forwarding between the server process and the console."""

import logging
import threading
from typing import TextIO

log = logging.getLogger(__name__)


class LineForwarder:
    """Copy lines from one text stream to another on a background thread.

    The loop ends when the source reports end-of-stream, when a read or write
    fails, or after stop() has been called and the next line arrives. A
    failure is reported on the error stream and ends only this forwarder.
    """

    def __init__(
        self,
        source: TextIO,
        sink: TextIO,
        name: str,
        error_stream: TextIO,
        close_sink: bool = False,
    ) -> None:
        self.name = name
        self.lines_forwarded = 0
        self.error: BaseException | None = None
        self._source = source
        self._sink = sink
        self._error_stream = error_stream
        self._close_sink = close_sink
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, daemon=True, name=f"mslc-{self.name}")
        self._thread.start()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def stop(self) -> None:
        self._stop_event.set()

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        try:
            for line in iter(self._source.readline, ""):
                if self._stop_event.is_set():
                    break
                if not line.endswith("\n"):
                    line += "\n"
                self._sink.write(line)
                self._sink.flush()
                self.lines_forwarded += 1
        except (OSError, ValueError) as e:
            # ValueError: the stream was closed underneath us.
            self.error = e
            if not self._stop_event.is_set():
                self._report(e)
        finally:
            if self._close_sink:
                self._close()
        log.debug("%s forwarder finished after %d lines", self.name, self.lines_forwarded)

    def _report(self, exc: BaseException) -> None:
        log.debug("%s forwarder failed: %s", self.name, exc)
        try:
            self._error_stream.write(f"mslc: {self.name} forwarding failed: {exc}\n")
            self._error_stream.flush()
        except (OSError, ValueError):
            pass

    def _close(self) -> None:
        try:
            self._sink.close()
        except OSError as e:
            log.debug("closing %s sink failed: %s", self.name, e)
