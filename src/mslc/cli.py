"""Command-line interface for mslc."""

import argparse
import logging
import sys

from mslc import __version__
from mslc.builder import LaunchConfigBuilder
from mslc.errors import LaunchConfigError, ServerLaunchError
from mslc.server import RedirectMode, ServerProcess

log = logging.getLogger("mslc")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the launcher."""
    parser = argparse.ArgumentParser(
        prog="mslc",
        description="Launch a Java game server and attach it to this console",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--dir",
        dest="working_directory",
        help="Server directory the process runs in",
    )
    parser.add_argument("--jar", dest="artifact", help="Server jar file name")
    parser.add_argument(
        "--java",
        dest="interpreter_path",
        help="Java executable to use (default: java from PATH)",
    )
    parser.add_argument(
        "--nogui",
        action="store_true",
        help="Pass --nogui to the server",
    )
    parser.add_argument(
        "--proxy",
        action="store_true",
        help="Forward console streams through pipes instead of sharing the terminal",
    )
    parser.add_argument(
        "java_args",
        nargs="*",
        metavar="JAVA_ARG",
        help="Extra JVM arguments, given after -- (example: -- -Xmx1024M -Xms1024M)",
    )
    return parser


def _exit_status(returncode: int) -> int:
    """Map a child exit status to a shell-style exit code."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    builder = LaunchConfigBuilder().with_interpreter_args(args.java_args)
    if args.working_directory is not None:
        builder.with_working_directory(args.working_directory)
    if args.artifact is not None:
        builder.with_artifact(args.artifact)
    if args.interpreter_path is not None:
        builder.with_interpreter_path(args.interpreter_path)
    if args.nogui:
        builder.with_headless(True)

    try:
        config = builder.finalize()
    except LaunchConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    log.debug("config=%r", config)

    mode = RedirectMode.PROXY if args.proxy else RedirectMode.INHERIT
    try:
        returncode = ServerProcess(config, mode=mode).run()
    except ServerLaunchError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return _exit_status(returncode)


def entrypoint() -> None:
    raise SystemExit(main())
