"""Data models for worktree-kit."""

from .worktree import Worktree, FileToCopy
from .notification import Notification, NotificationLevel
from .errors import (
    GitError,
    GitErrorCode,
    FilesystemError,
    FilesystemErrorCode,
    ShellError,
    ShellErrorCode,
    ShellOutput,
)
from .hooks import HookContext

__all__ = [
    "Worktree",
    "FileToCopy",
    "Notification",
    "NotificationLevel",
    "GitError",
    "GitErrorCode",
    "FilesystemError",
    "FilesystemErrorCode",
    "ShellError",
    "ShellErrorCode",
    "ShellOutput",
    "HookContext",
]
