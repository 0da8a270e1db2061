"""Implementations of the wt subcommands.

Each command returns a process exit code. Interactive prompts are only
shown when stdin is a terminal.
"""

import argparse
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from worktree_kit.config import DefaultBase
from worktree_kit.constants import DEFAULT_BRANCH_CANDIDATES, DEFAULT_REMOTE
from worktree_kit.container import Container
from worktree_kit.core import (
    cleanup_root_dir,
    copy_files,
    create_worktree,
    delete_branch,
    init_config,
    list_worktrees,
    load_config,
    remove_worktree,
    run_hook,
)
from worktree_kit.cli.render import render_notifications, render_worktree_table
from worktree_kit.logging_config import get_logger
from worktree_kit.models import GitErrorCode, Notification, NotificationLevel
from worktree_kit.result import Err

logger = get_logger(__name__)


def is_interactive() -> bool:
    return sys.stdin.isatty()


def resolve_base_branch(args: argparse.Namespace, container: Container, console: Console) -> Optional[str]:
    """Pick the base branch for a new branch, honouring the config's defaultBase."""
    if args.base:
        return args.base

    exists = container.git.branch_exists(args.branch)
    if isinstance(exists, Err) or exists.value:
        # Existing branches are checked out as they are
        return None

    loaded = load_config(container.git, container.fs)
    default_base = DefaultBase.ASK if isinstance(loaded, Err) else loaded.value.config.default_base

    if default_base is DefaultBase.CURRENT:
        return None

    if default_base is DefaultBase.DEFAULT:
        branches = container.git.list_branches()
        if isinstance(branches, Err):
            return None
        for candidate in DEFAULT_BRANCH_CANDIDATES:
            if candidate in branches.value:
                return candidate
        return None

    if not is_interactive():
        return None
    answer = Prompt.ask("Base branch [dim](empty for current HEAD)[/dim]", default="", console=console)
    return answer.strip() or None


def _ask_choice(console: Console, message: str, labels: List[str]) -> int:
    """Show a numbered menu and return the index of the picked entry."""
    for number, label in enumerate(labels, start=1):
        console.print(f"  [cyan]{number}[/cyan]) {escape(label)}")
    answer = Prompt.ask(
        message,
        choices=[str(number) for number in range(1, len(labels) + 1)],
        default="1",
        show_choices=False,
        console=console,
    )
    return int(answer) - 1


def _select_branch(container: Container, console: Console) -> Optional[Tuple[str, Optional[str]]]:
    """
    Ask which branch the new worktree should check out.

    Offers a new branch, local branches without a worktree and, in a submenu,
    remote branches that have no local counterpart yet.

    Returns:
        Tuple of (branch, remote), where remote is set for a remote branch, or
        None when the branches could not be listed
    """
    branches = container.git.list_branches()
    remote_branches = container.git.list_remote_branches()
    worktrees = container.git.list_worktrees()
    for result in (branches, remote_branches, worktrees):
        if isinstance(result, Err):
            console.print(f"[red]Error: {escape(result.error.message)}[/red]")
            return None

    used = {wt.branch for wt in worktrees.value}
    local = set(branches.value)
    available_local = [b for b in branches.value if b not in used]
    available_remote = [b for b in remote_branches.value if b not in local and b not in used]

    labels = ["Create new branch"] + available_local
    if available_remote:
        labels.append(f"Remote branches... ({len(available_remote)} available)")

    index = _ask_choice(console, "Select branch for worktree", labels)
    if index == 0:
        return Prompt.ask("Enter new branch name", console=console).strip(), None
    if index <= len(available_local):
        return available_local[index - 1], None

    remote_index = _ask_choice(console, "Select remote branch", available_remote)
    return available_remote[remote_index], DEFAULT_REMOTE


def run_create(args: argparse.Namespace, container: Container, console: Console) -> int:
    """Create a worktree, copy configured files and run post-create hooks."""
    from_remote = args.remote
    if not args.branch:
        if not is_interactive():
            console.print("[red]Error: a branch name is required[/red]")
            return 1
        selection = _select_branch(container, console)
        if selection is None:
            return 1
        args.branch, selected_remote = selection
        from_remote = from_remote or selected_remote
        if not args.branch:
            console.print("[red]Error: a branch name is required[/red]")
            return 1

    base_branch = None if from_remote else resolve_base_branch(args, container, console)

    with console.status("Creating worktree...") as status:
        result = create_worktree(
            args.branch,
            container.git,
            container.fs,
            base_branch=base_branch,
            from_remote=from_remote,
        )
        if isinstance(result, Err):
            console.print(f"[red]Error: {escape(str(result.error))}[/red]")
            return 1

        output = result.value
        notifications: List[Notification] = list(output.notifications)
        for item in output.files_to_copy:
            status.update(f"Copying {item.src}...")
            notifications.extend(copy_files([item], container.fs))

    console.print("[green]Worktree created[/green]")
    render_notifications(console, notifications)

    if output.hook_commands and output.hook_context:
        hook_notifications: List[Notification] = []
        total = len(output.hook_commands)
        with console.status("Running hooks...") as status:
            for index, command in enumerate(output.hook_commands, start=1):
                status.update(f"Running hook {index}/{total}: {command}...")
                hook_notifications.append(
                    run_hook(command, output.hook_context, container.shell, timeout=args.hook_timeout)
                )

        failed = sum(1 for n in hook_notifications if n.level is NotificationLevel.WARN)
        if failed:
            console.print(f"[yellow]Hooks completed with {failed} failure(s)[/yellow]")
        else:
            console.print("[green]Hooks completed[/green]")
        render_notifications(console, hook_notifications)

    console.print(
        f"[green]Created worktree for branch:[/green] {output.worktree.branch} at {output.worktree.path}"
    )
    return 0


def run_list(args: argparse.Namespace, container: Container, console: Console) -> int:
    """Print all worktrees."""
    result = list_worktrees(container.git)
    if isinstance(result, Err):
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        return 1

    if not result.value:
        console.print("No worktrees found")
        return 0

    current = container.git.get_repository_root()
    current_path = None if isinstance(current, Err) else current.value
    render_worktree_table(console, result.value, current_path)
    return 0


def _select_worktree(container: Container, console: Console) -> Optional[str]:
    """Ask which linked worktree to remove. Returns None when there is nothing to pick."""
    result = list_worktrees(container.git)
    if isinstance(result, Err):
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        return None

    removable = [wt for wt in result.value if not wt.is_main and wt.branch]
    if not removable:
        console.print("No worktrees to remove")
        return None

    for wt in removable:
        console.print(f"  {wt.branch} [dim]{wt.path}[/dim]")
    return Prompt.ask(
        "Select worktree to remove",
        choices=[wt.branch for wt in removable],
        console=console,
    )


def run_remove(args: argparse.Namespace, container: Container, console: Console) -> int:
    """Remove a worktree and optionally its branch."""
    interactive = is_interactive() and not args.yes
    branch = args.branch

    if not branch:
        if not is_interactive():
            console.print("[red]Error: a branch name is required[/red]")
            return 1
        branch = _select_worktree(container, console)
        if branch is None:
            return 0

    if interactive and not Confirm.ask(f'Remove worktree "{branch}"?', default=False, console=console):
        console.print("Cancelled")
        return 0

    should_delete_branch = args.delete_branch
    if not should_delete_branch and interactive:
        should_delete_branch = Confirm.ask(f'Also delete branch "{branch}"?', default=False, console=console)

    with console.status("Removing worktree..."):
        result = remove_worktree(branch, container.git, force=args.force)
    if isinstance(result, Err):
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        return 1
    console.print(f"[green]Worktree removed:[/green] {result.value}")

    if should_delete_branch:
        _delete_branch(branch, args, container, console, interactive)

    render_notifications(console, cleanup_root_dir(container.git, container.fs))
    return 0


def _delete_branch(
    branch: str, args: argparse.Namespace, container: Container, console: Console, interactive: bool
) -> None:
    deleted = delete_branch(branch, container.git, force=args.force)
    if not isinstance(deleted, Err):
        console.print(f"[green]Branch deleted:[/green] {branch}")
        return

    if deleted.error.code is not GitErrorCode.BRANCH_NOT_MERGED:
        console.print(f"[red]Failed to delete branch: {escape(deleted.error.message)}[/red]")
        return

    console.print(f'[yellow]Branch "{branch}" is not fully merged[/yellow]')
    if not interactive or not Confirm.ask("Force delete?", default=False, console=console):
        console.print("Branch was not deleted")
        return

    forced = delete_branch(branch, container.git, force=True)
    if isinstance(forced, Err):
        console.print(f"[red]Failed to delete branch: {escape(forced.error.message)}[/red]")
    else:
        console.print(f"[green]Branch deleted:[/green] {branch}")


def run_init(args: argparse.Namespace, container: Container, console: Console) -> int:
    """Write a config template at the main worktree root."""
    result = init_config(container.git, container.fs, force=args.force)
    if isinstance(result, Err):
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        return 1
    console.print(f"[green]Created config at:[/green] {result.value}")
    return 0


COMMANDS = {
    "create": run_create,
    "list": run_list,
    "remove": run_remove,
    "init": run_init,
}
