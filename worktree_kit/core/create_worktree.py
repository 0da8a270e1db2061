"""The create-worktree pipeline.

Resolves the repository, loads the config (falling back to defaults),
creates the worktree through git and works out what must be copied and
which hooks must run. Copying and hook execution are left to the caller so
it can report progress step by step.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from worktree_kit.config import WorktreeConfig, default_config
from worktree_kit.constants import INIT_COMMAND
from worktree_kit.core.config_loader import load_config
from worktree_kit.core.manifest import resolve_files_to_copy
from worktree_kit.exceptions import GitOperationError, NotARepositoryError, WorktreeKitError
from worktree_kit.logging_config import get_logger
from worktree_kit.models import FileToCopy, HookContext, Notification, Worktree
from worktree_kit.ports import FilesystemPort, GitPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass
class CreateWorktreeOutput:
    worktree: Worktree
    notifications: List[Notification] = field(default_factory=list)
    files_to_copy: List[FileToCopy] = field(default_factory=list)
    hook_context: Optional[HookContext] = None  # None when there are no hooks
    hook_commands: List[str] = field(default_factory=list)


def worktree_path_for(repo_root: str, config: WorktreeConfig, branch: str) -> str:
    """Absolute path of the worktree for branch."""
    return os.path.normpath(os.path.join(repo_root, config.root_dir, branch))


def create_worktree(
    branch: str,
    git: GitPort,
    fs: FilesystemPort,
    base_branch: Optional[str] = None,
    from_remote: Optional[str] = None,
) -> Result[CreateWorktreeOutput, WorktreeKitError]:
    """
    Create a worktree for branch and plan the follow-up work.

    Args:
        branch: Branch to check out in the new worktree
        git: Git capability
        fs: Filesystem capability
        base_branch: Branch to start a new branch from (HEAD if None)
        from_remote: Remote name; when set the branch tracks <remote>/<branch>

    Returns:
        Ok with the worktree, notifications, copy manifest and hook plan, or
        Err when the repository cannot be resolved or git refuses to create
        the worktree. A missing or invalid config only adds a warning.
    """
    root_result = git.get_repository_root()
    if isinstance(root_result, Err):
        return Err(NotARepositoryError(root_result.error.message))
    repo_root = root_result.value

    notifications: List[Notification] = []

    loaded = load_config(git, fs)
    if isinstance(loaded, Err):
        logger.info(f"Using default config: {loaded.error}")
        config = default_config()
        notifications.append(
            Notification.warn(f"Using default config ({loaded.error}). Run '{INIT_COMMAND}' to set one up.")
        )
    else:
        config = loaded.value.config

    worktree_path = worktree_path_for(repo_root, config, branch)
    logger.debug(f"Worktree path for {branch}: {worktree_path}")

    if from_remote:
        created = git.create_worktree_from_remote(branch, worktree_path, from_remote)
    else:
        created = git.create_worktree(branch, worktree_path, base_branch)
    if isinstance(created, Err):
        return Err(GitOperationError("create worktree", created.error.message, created.error.code.value))

    files_to_copy, copy_notifications = resolve_files_to_copy(config.copy, repo_root, worktree_path, fs)
    notifications.extend(copy_notifications)

    hook_commands = list(config.hooks.post_create)
    hook_context = None
    if hook_commands:
        hook_context = HookContext(
            worktree_path=worktree_path,
            branch=branch,
            repo_root=repo_root,
            base_branch=base_branch,
        )

    return Ok(
        CreateWorktreeOutput(
            worktree=created.value,
            notifications=notifications,
            files_to_copy=files_to_copy,
            hook_context=hook_context,
            hook_commands=hook_commands,
        )
    )
