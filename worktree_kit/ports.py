"""Abstract capabilities the use cases depend on.

Every use case receives these explicitly. The real implementations live in
``worktree_kit.services``; tests pass in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from worktree_kit.models import (
    FilesystemError,
    GitError,
    ShellError,
    ShellOutput,
    Worktree,
)
from worktree_kit.result import Result


class GitPort(ABC):
    """Git operations needed by worktree-kit."""

    @abstractmethod
    def is_repository(self) -> Result[bool, GitError]:
        ...

    @abstractmethod
    def get_repository_root(self) -> Result[str, GitError]:
        """Root of the worktree containing the current directory."""
        ...

    @abstractmethod
    def get_main_worktree_root(self) -> Result[str, GitError]:
        """Root of the main worktree, even when called from a linked one."""
        ...

    @abstractmethod
    def list_worktrees(self) -> Result[List[Worktree], GitError]:
        ...

    @abstractmethod
    def list_branches(self) -> Result[List[str], GitError]:
        ...

    @abstractmethod
    def list_remote_branches(self) -> Result[List[str], GitError]:
        ...

    @abstractmethod
    def branch_exists(self, branch: str) -> Result[bool, GitError]:
        ...

    @abstractmethod
    def create_worktree(
        self, branch: str, path: str, base_branch: Optional[str] = None
    ) -> Result[Worktree, GitError]:
        """Create a worktree at path for branch.

        Failures are classified as BRANCH_EXISTS, WORKTREE_EXISTS, NOT_A_REPO or UNKNOWN.
        """
        ...

    @abstractmethod
    def create_worktree_from_remote(self, branch: str, path: str, remote: str) -> Result[Worktree, GitError]:
        """Create a worktree tracking <remote>/<branch>."""
        ...

    @abstractmethod
    def remove_worktree(self, path: str, force: bool = False) -> Result[None, GitError]:
        ...

    @abstractmethod
    def delete_branch(self, branch: str) -> Result[None, GitError]:
        """Delete a merged branch; fails with BRANCH_NOT_MERGED otherwise."""
        ...

    @abstractmethod
    def delete_branch_force(self, branch: str) -> Result[None, GitError]:
        ...


class FilesystemPort(ABC):
    """Filesystem operations needed by worktree-kit."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        ...

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        ...

    @abstractmethod
    def read_file(self, path: str) -> Result[str, FilesystemError]:
        ...

    @abstractmethod
    def write_file(self, path: str, content: str) -> Result[None, FilesystemError]:
        ...

    @abstractmethod
    def copy_file(self, source: str, destination: str) -> Result[None, FilesystemError]:
        ...

    @abstractmethod
    def copy_directory(self, source: str, destination: str) -> Result[None, FilesystemError]:
        ...

    @abstractmethod
    def glob(self, pattern: str, cwd: Optional[str] = None) -> List[str]:
        """Expand pattern relative to cwd.

        Returns sorted paths relative to cwd. ``*`` stays within one
        directory level, ``**`` walks subdirectories.
        """
        ...

    @abstractmethod
    def get_cwd(self) -> str:
        ...

    @abstractmethod
    def is_directory_empty(self, path: str) -> Result[bool, FilesystemError]:
        ...

    @abstractmethod
    def remove_directory(self, path: str) -> Result[None, FilesystemError]:
        """Remove an empty directory."""
        ...


class ShellPort(ABC):
    """Runs shell command strings."""

    @abstractmethod
    def execute(
        self,
        command: str,
        cwd: str,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Result[ShellOutput, ShellError]:
        """Run command through the shell.

        Args:
            command: Command line to run
            cwd: Working directory
            env: Variables added on top of the process environment
            timeout: Seconds before the command is killed (adapter default if None)
        """
        ...
