"""Exceptions raised by mslc."""


class LaunchConfigError(ValueError):
    """A launch configuration failed validation."""


class MissingWorkingDirectory(LaunchConfigError):
    def __init__(self) -> None:
        super().__init__("working directory is missing")


class MissingArtifact(LaunchConfigError):
    def __init__(self) -> None:
        super().__init__("server artifact is missing")


class InvalidWorkingDirectory(LaunchConfigError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"invalid working directory: {path}")


class InvalidInterpreterPath(LaunchConfigError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"invalid interpreter path: {path}")


class ServerLaunchError(OSError):
    """The server process could not be spawned, waited on, or attached to."""
