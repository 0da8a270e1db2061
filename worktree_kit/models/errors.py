"""Error values returned by the git, filesystem and shell adapters."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GitErrorCode(Enum):
    NOT_A_REPO = "NOT_A_REPO"
    WORKTREE_EXISTS = "WORKTREE_EXISTS"
    BRANCH_EXISTS = "BRANCH_EXISTS"
    BRANCH_NOT_MERGED = "BRANCH_NOT_MERGED"
    BRANCH_NOT_FOUND = "BRANCH_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


class FilesystemErrorCode(Enum):
    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UNKNOWN = "UNKNOWN"


class ShellErrorCode(Enum):
    EXECUTION_FAILED = "EXECUTION_FAILED"
    TIMEOUT = "TIMEOUT"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class GitError:
    code: GitErrorCode
    message: str


@dataclass(frozen=True)
class FilesystemError:
    code: FilesystemErrorCode
    message: str
    path: str


@dataclass(frozen=True)
class ShellError:
    code: ShellErrorCode
    message: str
    exit_code: Optional[int] = None
    stderr: Optional[str] = None


@dataclass(frozen=True)
class ShellOutput:
    """Captured output of a finished shell command."""

    stdout: str
    stderr: str
    exit_code: int
