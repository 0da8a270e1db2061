"""Shared constants for worktree-kit."""

# Config file name, looked up at the main worktree root
CONFIG_FILENAME = ".worktreekitrc"

# Root directory used when no config could be loaded
DEFAULT_ROOT_DIR = "../worktrees"

# Root directory written by `wt init`
INIT_ROOT_DIR = "../worktrees"

DEFAULT_BASE_CHOICES = ("current", "default", "ask")

# Seconds before a hook command is killed
DEFAULT_HOOK_TIMEOUT = 300

# Characters that turn a copy entry into a glob pattern
GLOB_CHARS = "*?[]{}"

INIT_COMMAND = "wt init"

DEFAULT_REMOTE = "origin"

# Branch names tried, in order, when defaultBase is "default"
DEFAULT_BRANCH_CANDIDATES = ["main", "master"]

# Environment variables exported to post-create hooks
ENV_WORKTREE_PATH = "WORKTREE_PATH"
ENV_WORKTREE_BRANCH = "WORKTREE_BRANCH"
ENV_REPO_ROOT = "REPO_ROOT"
ENV_BASE_BRANCH = "BASE_BRANCH"

# Git metadata entry of a worktree, never copied between worktrees
GIT_DIR_NAME = ".git"
