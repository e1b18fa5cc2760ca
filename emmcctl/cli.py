"""Command-line interface for emmcctl."""

import argparse
import sys
from pathlib import Path

from emmcctl import __version__
from emmcctl.core.config import ConfigError, load_config
from emmcctl.core.context import Context
from emmcctl.core.logging import SessionLogger, get_log_path
from emmcctl.core.output import Output
from emmcctl.core.style import make_style
from emmcctl.lib.process import check_tool
from emmcctl.session import EXIT_MESSAGE, Session

BANNER = "eMMC Lifetime Analyzer - Professional Analysis Tool"

EXIT_OK = 0
EXIT_ENVIRONMENT = 1


class RequirementError(Exception):
    """The host cannot run an interactive analysis."""

    pass


def validate_requirements(context: Context) -> None:
    """
    Check for a terminal and the external tools.

    Raises:
        RequirementError: On the first missing requirement
    """
    if not context.is_interactive():
        raise RequirementError(
            "This tool requires an interactive terminal. "
            "Please run it from a terminal session."
        )

    if not check_tool("mmc", context):
        raise RequirementError("mmc-utils not installed. Use: sudo apt install mmc-utils")

    if not check_tool("lsblk", context):
        raise RequirementError("lsblk not found. Install the util-linux package.")

    if not context.is_root() and not check_tool("sudo", context):
        raise RequirementError(
            "sudo not found. Run this tool as root to read eMMC registers."
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="emmcctl",
        description="Interactive eMMC/SD lifetime and health analyzer",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"emmcctl {__version__}",
    )
    parser.add_argument(
        "--format",
        choices=["plain", "json"],
        default="plain",
        help="Report format (default: plain)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colorized output",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="YAML config file overriding project and user config",
    )
    return parser


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    output = Output()
    context = context or Context()

    try:
        args = create_parser().parse_args(argv)

        try:
            config = load_config(args.config)
        except ConfigError as e:
            output.error(f"Configuration error: {e}")
            return EXIT_ENVIRONMENT

        color = "never" if args.no_color else config.color
        output.style = make_style(color, sys.stderr)

        output.info(BANNER)
        output.newline()

        try:
            validate_requirements(context)
        except RequirementError as e:
            output.error(str(e))
            return EXIT_ENVIRONMENT

        log_path = get_log_path(Path(config.log_dir).expanduser() if config.log_dir else None)
        with SessionLogger(log_path=log_path, enabled=config.log_enabled) as logger:
            logger.info("Session started", version=__version__, format=args.format)
            if logger.open_error:
                output.warning(f"{logger.open_error}; continuing without a log")

            session = Session(
                context,
                output,
                config=config,
                logger=logger,
                report_style=make_style(color, sys.stdout),
                report_format=args.format,
            )
            return session.run()
    except KeyboardInterrupt:
        output.newline()
        output.newline()
        output.success(EXIT_MESSAGE)
        output.newline()
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
