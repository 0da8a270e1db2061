"""Command-line argument parsing for worktree-kit."""

import argparse
from typing import List, Optional

from worktree_kit.__version__ import __version__
from worktree_kit.constants import CONFIG_FILENAME, DEFAULT_HOOK_TIMEOUT, DEFAULT_REMOTE


def build_parser() -> argparse.ArgumentParser:
    """Build the `wt` argument parser."""
    parser = argparse.ArgumentParser(
        prog="wt",
        description="Create, list and remove git worktrees with config sync and post-create hooks",
        epilog=f"Project settings live in {CONFIG_FILENAME} at the main worktree root. "
        "Run 'wt init' to create one.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"worktree-kit {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    create = subparsers.add_parser("create", help="Create a new worktree with config sync")
    create.add_argument("branch", nargs="?", help="Branch name for the new worktree")
    create.add_argument("-b", "--base", help="Base branch to create from")
    create.add_argument(
        "--remote",
        nargs="?",
        const=DEFAULT_REMOTE,
        metavar="NAME",
        help=f"Create the branch tracking NAME/<branch> (NAME defaults to {DEFAULT_REMOTE})",
    )
    create.add_argument(
        "--hook-timeout",
        type=float,
        default=DEFAULT_HOOK_TIMEOUT,
        metavar="SECONDS",
        help=f"Seconds before a post-create hook is killed (default: {DEFAULT_HOOK_TIMEOUT})",
    )

    subparsers.add_parser("list", help="List all worktrees")

    remove = subparsers.add_parser("remove", help="Remove a worktree")
    remove.add_argument("branch", nargs="?", help="Branch name of the worktree to remove")
    remove.add_argument(
        "--delete-branch", action="store_true", help="Also delete the branch without asking"
    )
    remove.add_argument(
        "--force", action="store_true", help="Remove even with local changes; force-delete the branch"
    )
    remove.add_argument("-y", "--yes", action="store_true", help="Skip confirmations")

    init = subparsers.add_parser("init", help=f"Create a {CONFIG_FILENAME} template")
    init.add_argument("-f", "--force", action="store_true", help="Overwrite existing config")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
