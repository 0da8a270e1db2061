"""Version information for worktree-kit."""

__version__ = "0.1.0"
