"""Concrete git, filesystem and shell capabilities."""

from .git_service import GitService
from .filesystem_service import FilesystemService
from .shell_service import ShellService

__all__ = [
    "GitService",
    "FilesystemService",
    "ShellService",
]
