"""Use cases behind the wt commands.

Each function takes its capabilities as arguments and returns a Result.
"""

from .config_loader import LoadedConfig, load_config, init_config
from .manifest import resolve_files_to_copy, copy_files, is_git_metadata, is_glob_pattern
from .hooks import RunHooksOutput, build_hook_env, run_hook, run_hooks
from .create_worktree import CreateWorktreeOutput, create_worktree, worktree_path_for
from .remove_worktree import cleanup_root_dir, delete_branch, list_worktrees, remove_worktree

__all__ = [
    "LoadedConfig",
    "load_config",
    "init_config",
    "resolve_files_to_copy",
    "copy_files",
    "is_glob_pattern",
    "is_git_metadata",
    "RunHooksOutput",
    "build_hook_env",
    "run_hook",
    "run_hooks",
    "CreateWorktreeOutput",
    "create_worktree",
    "worktree_path_for",
    "cleanup_root_dir",
    "delete_branch",
    "list_worktrees",
    "remove_worktree",
]
