"""Launch a Java game server as a child process and proxy its console."""

__version__ = "0.1.0"
