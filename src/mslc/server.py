"""Spawn the server process and optionally proxy its console streams."""

import enum
import logging
import shlex
import subprocess
import sys
from typing import TextIO

from mslc.config import HEADLESS_FLAG, STDIN_JOIN_TIMEOUT_SECONDS
from mslc.console import ConsoleReader
from mslc.errors import ServerLaunchError
from mslc.forwarder import LineForwarder
from mslc.models import LaunchConfig

log = logging.getLogger(__name__)


class RedirectMode(enum.Enum):
    INHERIT = "inherit"
    PROXY = "proxy"


class ServerState(enum.Enum):
    SPAWNED = "spawned"
    RUNNING = "running"
    EXITED = "exited"


def build_command(config: LaunchConfig) -> list[str]:
    """Return the argv used to start the server for a launch configuration."""
    command = [config.interpreter_path, *config.interpreter_args, "-jar", config.artifact]
    if config.headless:
        command.append(HEADLESS_FLAG)
    return command


class ServerProcess:
    """One server child process driven through a full lifecycle by run().

    In proxy mode the parent streams default to the interpreter's own
    sys.stdin, sys.stdout and sys.stderr, looked up when run() is called.
    """

    def __init__(
        self,
        config: LaunchConfig,
        mode: RedirectMode = RedirectMode.INHERIT,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.config = config
        self.mode = mode
        self.state: ServerState | None = None
        self.pid: int | None = None
        self.returncode: int | None = None
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr

    def run(self) -> int:
        """Start the server, wait for it to exit, and return its exit status."""
        command = build_command(self.config)
        log.debug("cwd=%s command=%s", self.config.working_directory, shlex.join(command))
        self.state = None
        self.pid = None
        self.returncode = None
        if self.mode is RedirectMode.PROXY:
            return self._run_proxied(command)
        return self._run_inherited(command)

    def _spawn(self, command: list[str], **kwargs) -> subprocess.Popen:
        try:
            process = subprocess.Popen(command, cwd=self.config.working_directory, **kwargs)
        except OSError as e:
            raise ServerLaunchError(f"failed to start {command[0]}: {e}") from e
        self.pid = process.pid
        self.state = ServerState.SPAWNED
        log.debug("spawned pid=%d", process.pid)
        return process

    def _wait(self, process: subprocess.Popen) -> int:
        try:
            returncode = process.wait()
        except OSError as e:
            raise ServerLaunchError(f"failed to wait for server process: {e}") from e
        self.returncode = returncode
        self.state = ServerState.EXITED
        log.debug("pid=%d exited with status %d", process.pid, returncode)
        return returncode

    def _run_inherited(self, command: list[str]) -> int:
        process = self._spawn(command)
        self.state = ServerState.RUNNING
        return self._wait(process)

    def _run_proxied(self, command: list[str]) -> int:
        parent_stdin = self._stdin if self._stdin is not None else sys.stdin
        parent_stdout = self._stdout if self._stdout is not None else sys.stdout
        parent_stderr = self._stderr if self._stderr is not None else sys.stderr

        process = self._spawn(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
        if process.stdin is None or process.stdout is None or process.stderr is None:
            process.kill()
            process.wait()
            raise ServerLaunchError("server process streams are unavailable")
        self.state = ServerState.RUNNING

        stdout_forwarder = LineForwarder(
            process.stdout, parent_stdout, name="stdout", error_stream=parent_stderr
        )
        stderr_forwarder = LineForwarder(
            process.stderr, parent_stderr, name="stderr", error_stream=parent_stderr
        )
        console = ConsoleReader.for_stream(parent_stdin, parent_stderr).open()
        stdin_forwarder = LineForwarder(
            console,
            process.stdin,
            name="stdin",
            error_stream=parent_stderr,
            close_sink=True,
        )
        for forwarder in (stdout_forwarder, stderr_forwarder, stdin_forwarder):
            forwarder.start()

        try:
            # The output pipes reach EOF once the server closes them, normally on exit.
            stdout_forwarder.join()
            stderr_forwarder.join()
            return self._wait(process)
        except BaseException:
            if process.poll() is None:
                log.debug("killing pid=%d after interrupted run", process.pid)
                process.kill()
                process.wait()
            stdout_forwarder.join(timeout=STDIN_JOIN_TIMEOUT_SECONDS)
            stderr_forwarder.join(timeout=STDIN_JOIN_TIMEOUT_SECONDS)
            raise
        finally:
            console.close()
            stdin_forwarder.join(timeout=STDIN_JOIN_TIMEOUT_SECONDS)
            if stdin_forwarder.is_alive():
                log.debug("stdin forwarder did not finish; closing server stdin")
                _close_pipe(process.stdin)
            # A pipe still being read by a live forwarder is left to that forwarder.
            if not stdout_forwarder.is_alive():
                _close_pipe(process.stdout)
            if not stderr_forwarder.is_alive():
                _close_pipe(process.stderr)


def _close_pipe(pipe: TextIO) -> None:
    try:
        pipe.close()
    except OSError as e:
        log.debug("closing pipe failed: %s", e)
