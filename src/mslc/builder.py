"""Fluent builder that validates a launch configuration before spawn."""

import logging
import os
import subprocess

from mslc.config import PROBE_ARGUMENT, PROBE_TIMEOUT_SECONDS, default_interpreter
from mslc.errors import (
    InvalidInterpreterPath,
    InvalidWorkingDirectory,
    MissingArtifact,
    MissingWorkingDirectory,
)
from mslc.models import LaunchConfig

log = logging.getLogger(__name__)


def probe_interpreter(path: str) -> bool:
    """Run `path --version` and return whether it exited successfully."""
    try:
        result = subprocess.run(
            [path, PROBE_ARGUMENT],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_SECONDS,
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        log.debug("%s %s failed: %s", path, PROBE_ARGUMENT, e)
        return False
    log.debug("%s %s returned rc=%d", path, PROBE_ARGUMENT, result.returncode)
    return result.returncode == 0


class LaunchConfigBuilder:
    """Accumulate optional launch settings and validate them on finalize()."""

    def __init__(self) -> None:
        self._working_directory: str | None = None
        self._artifact: str | None = None
        self._interpreter_path: str | None = None
        self._interpreter_args: list[str] | None = None
        self._headless: bool | None = None

    def with_working_directory(self, path: str | os.PathLike[str]) -> "LaunchConfigBuilder":
        self._working_directory = os.fspath(path)
        return self

    def with_artifact(self, name: str | os.PathLike[str]) -> "LaunchConfigBuilder":
        self._artifact = os.fspath(name)
        return self

    def with_interpreter_path(self, path: str | os.PathLike[str]) -> "LaunchConfigBuilder":
        self._interpreter_path = os.fspath(path)
        return self

    def with_interpreter_args(self, args: list[str]) -> "LaunchConfigBuilder":
        self._interpreter_args = list(args)
        return self

    def with_headless(self, headless: bool) -> "LaunchConfigBuilder":
        self._headless = headless
        return self

    def finalize(self) -> LaunchConfig:
        """Validate the accumulated settings and return a LaunchConfig.

        Checks run in a fixed order and stop at the first failure: working
        directory set, artifact set, working directory exists, interpreter
        answers a version probe.
        """
        if self._working_directory is None:
            raise MissingWorkingDirectory()
        if self._artifact is None:
            raise MissingArtifact()
        if not os.path.isdir(self._working_directory):
            raise InvalidWorkingDirectory(self._working_directory)

        interpreter_path = self._interpreter_path
        if interpreter_path is None:
            interpreter_path = default_interpreter()
        if not probe_interpreter(interpreter_path):
            raise InvalidInterpreterPath(interpreter_path)

        return LaunchConfig(
            working_directory=self._working_directory,
            artifact=self._artifact,
            interpreter_path=interpreter_path,
            interpreter_args=tuple(self._interpreter_args or ()),
            headless=bool(self._headless),
        )
