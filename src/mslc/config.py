"""Configuration defaults for mslc."""

import os

DEFAULT_INTERPRETER = "java"
PROBE_ARGUMENT = "--version"
PROBE_TIMEOUT_SECONDS = 10
HEADLESS_FLAG = "--nogui"
STDIN_JOIN_TIMEOUT_SECONDS = 1.0
CONSOLE_POLL_INTERVAL_SECONDS = 0.1


def default_interpreter() -> str:
    """Return the platform command name for the Java interpreter."""
    if os.name == "nt":
        return f"{DEFAULT_INTERPRETER}.exe"
    return DEFAULT_INTERPRETER
