"""Worktree data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Worktree:
    """A git worktree as reported by git."""

    path: str
    branch: str  # Empty for detached HEAD
    head: str
    is_main: bool  # Is this the main working tree?

    @property
    def is_detached(self) -> bool:
        return not self.branch

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch or "(detached)"
        return f"{branch} @ {self.path}{main_marker}"


@dataclass(frozen=True)
class FileToCopy:
    """One resolved copy instruction for a new worktree."""

    src: str
    dest: str
    is_directory: bool
