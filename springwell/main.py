"""Entry point for the ``springwell`` command."""

from __future__ import annotations

import logging
import sys

from rich.console import Console

from .cli import CLIHandler, create_parser
from .logging_config import get_logger, setup_logging
from .output import ConsoleOutput

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, configure logging and output, and run the command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.debug_log:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    setup_logging(level, args.log_file, Console(stderr=True, no_color=args.no_color))

    if not args.command:
        parser.print_help()
        return 0

    console = Console(no_color=args.no_color)
    output = ConsoleOutput(console, quiet=args.quiet)
    logger.debug("Running command %s", args.command)

    try:
        return CLIHandler(output, console=console).run(args)
    except KeyboardInterrupt:
        output.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
