"""Rendering of notifications and worktree tables."""

from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from worktree_kit.models import Notification, NotificationLevel, Worktree

NOTIFICATION_STYLES = {
    NotificationLevel.INFO: "dim",
    NotificationLevel.WARN: "yellow",
}


def render_notifications(console: Console, notifications: Sequence[Notification]) -> None:
    """Print notifications in order, warnings highlighted."""
    for notification in notifications:
        style = NOTIFICATION_STYLES.get(notification.level)
        prefix = "⚠ " if notification.level is NotificationLevel.WARN else ""
        console.print(f"{prefix}{notification.message}", style=style, markup=False, highlight=False)


def render_worktree_table(
    console: Console, worktrees: Sequence[Worktree], current_path: Optional[str] = None
) -> None:
    """Print worktrees as a table, marking the main and current ones."""
    table = Table()
    table.add_column("Branch")
    table.add_column("Path")
    table.add_column("HEAD")
    table.add_column("Notes")

    for wt in worktrees:
        is_current = current_path is not None and wt.path == current_path
        notes = []
        if wt.is_main:
            notes.append("main")
        if is_current:
            notes.append("current")
        table.add_row(
            wt.branch or "(detached)",
            wt.path,
            wt.head[:7],
            ", ".join(notes),
            style="green" if is_current else ("cyan" if wt.is_main else None),
        )

    console.print(table)
