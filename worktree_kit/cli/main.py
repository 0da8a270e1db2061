"""Entry point for the wt command."""

import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from worktree_kit.cli.args import build_parser
from worktree_kit.cli.commands import COMMANDS
from worktree_kit.constants import DEFAULT_HOOK_TIMEOUT
from worktree_kit.container import create_container
from worktree_kit.logging_config import get_logger, setup_logging

console = Console()
logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        return 0

    try:
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        container = create_container(hook_timeout=getattr(parsed_args, "hook_timeout", DEFAULT_HOOK_TIMEOUT))
        logger.debug(f"Running command {parsed_args.command}")

        return COMMANDS[parsed_args.command](parsed_args, container, console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
