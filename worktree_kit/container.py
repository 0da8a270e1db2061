"""Wires the real capabilities together for the CLI."""

from dataclasses import dataclass
from typing import Optional

from worktree_kit.constants import DEFAULT_HOOK_TIMEOUT
from worktree_kit.ports import FilesystemPort, GitPort, ShellPort
from worktree_kit.services import FilesystemService, GitService, ShellService


@dataclass(frozen=True)
class Container:
    git: GitPort
    fs: FilesystemPort
    shell: ShellPort


def create_container(repo_path: Optional[str] = None, hook_timeout: float = DEFAULT_HOOK_TIMEOUT) -> Container:
    """Build the default set of capabilities."""
    return Container(
        git=GitService(repo_path),
        fs=FilesystemService(),
        shell=ShellService(timeout=hook_timeout),
    )
