"""Post-create hook execution."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from worktree_kit.constants import (
    ENV_BASE_BRANCH,
    ENV_REPO_ROOT,
    ENV_WORKTREE_BRANCH,
    ENV_WORKTREE_PATH,
)
from worktree_kit.logging_config import get_logger
from worktree_kit.models import HookContext, Notification, NotificationLevel
from worktree_kit.ports import ShellPort
from worktree_kit.result import Err

logger = get_logger(__name__)


@dataclass
class RunHooksOutput:
    notifications: List[Notification] = field(default_factory=list)
    failed_commands: List[str] = field(default_factory=list)


def build_hook_env(context: HookContext) -> Dict[str, str]:
    """Environment variables describing the new worktree."""
    env = {
        ENV_WORKTREE_PATH: context.worktree_path,
        ENV_WORKTREE_BRANCH: context.branch,
        ENV_REPO_ROOT: context.repo_root,
    }
    if context.base_branch:
        env[ENV_BASE_BRANCH] = context.base_branch
    return env


def run_hook(command: str, context: HookContext, shell: ShellPort, timeout: Optional[float] = None) -> Notification:
    """Run one hook in the worktree directory and describe the outcome."""
    result = shell.execute(command, cwd=context.worktree_path, env=build_hook_env(context), timeout=timeout)
    if isinstance(result, Err):
        logger.warning(f"Hook failed: {command}: {result.error.message}")
        return Notification.warn(f'Hook failed: "{command}" - {result.error.message}')
    return Notification.info(f'Hook completed: "{command}"')


def run_hooks(
    commands: Sequence[str],
    context: HookContext,
    shell: ShellPort,
    timeout: Optional[float] = None,
) -> RunHooksOutput:
    """
    Run hook commands one after another.

    A failing command is recorded and the remaining commands still run, since
    later hooks may not depend on it.
    """
    output = RunHooksOutput()
    for command in commands:
        notification = run_hook(command, context, shell, timeout=timeout)
        output.notifications.append(notification)
        if notification.level is NotificationLevel.WARN:
            output.failed_commands.append(command)
    return output
