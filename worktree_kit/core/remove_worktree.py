"""Listing and removing worktrees."""

import os
from typing import List

from worktree_kit.config import default_config
from worktree_kit.core.config_loader import load_config
from worktree_kit.exceptions import (
    GitOperationError,
    MainWorktreeRemovalError,
    WorktreeKitError,
    WorktreeNotFoundError,
)
from worktree_kit.logging_config import get_logger
from worktree_kit.models import GitError, Notification, Worktree
from worktree_kit.ports import FilesystemPort, GitPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)


def list_worktrees(git: GitPort) -> Result[List[Worktree], WorktreeKitError]:
    """All worktrees of the repository, main worktree first."""
    result = git.list_worktrees()
    if isinstance(result, Err):
        return Err(GitOperationError("list worktrees", result.error.message, result.error.code.value))
    return Ok(sorted(result.value, key=lambda wt: not wt.is_main))


def remove_worktree(branch: str, git: GitPort, force: bool = False) -> Result[str, WorktreeKitError]:
    """
    Remove the worktree checked out on branch.

    The main worktree is never removed.

    Returns:
        The removed worktree's path
    """
    listed = list_worktrees(git)
    if isinstance(listed, Err):
        return listed

    worktree = next((wt for wt in listed.value if wt.branch == branch), None)
    if worktree is None:
        return Err(WorktreeNotFoundError(branch))

    if worktree.is_main:
        return Err(MainWorktreeRemovalError(worktree.path))

    removed = git.remove_worktree(worktree.path, force=force)
    if isinstance(removed, Err):
        return Err(GitOperationError("remove worktree", removed.error.message, removed.error.code.value))

    return Ok(worktree.path)


def delete_branch(branch: str, git: GitPort, force: bool = False) -> Result[None, GitError]:
    """Delete a local branch, keeping the git error so BRANCH_NOT_MERGED can be retried with force."""
    if force:
        return git.delete_branch_force(branch)
    return git.delete_branch(branch)


def cleanup_root_dir(git: GitPort, fs: FilesystemPort) -> List[Notification]:
    """Remove the worktree root directory once the last worktree in it is gone.

    rootDir is resolved against the current worktree root, as it is when creating.
    """
    root = git.get_repository_root()
    if isinstance(root, Err):
        return []

    loaded = load_config(git, fs)
    config = default_config() if isinstance(loaded, Err) else loaded.value.config
    root_dir = os.path.normpath(os.path.join(root.value, config.root_dir))

    if not fs.is_directory(root_dir):
        return []

    empty = fs.is_directory_empty(root_dir)
    if isinstance(empty, Err) or not empty.value:
        return []

    removed = fs.remove_directory(root_dir)
    if isinstance(removed, Err):
        return [Notification.warn(f"Could not remove empty directory {root_dir}: {removed.error.message}")]

    logger.info(f"Removed empty worktree root {root_dir}")
    return [Notification.info(f"Removed empty directory {root_dir}")]
