"""Error types for worktree-kit.

Use cases never raise these; they return them inside ``Err`` so callers can
decide whether a failure is fatal. The CLI prints ``str(error)``.
"""

from typing import List, Optional


class WorktreeKitError(Exception):
    """Base class for all worktree-kit errors."""
    pass


class NotARepositoryError(WorktreeKitError):
    """Raised when the current directory is not inside a git repository."""

    def __init__(self, message: Optional[str] = None):
        self.message = message
        error_msg = "Not a git repository"
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class ConfigNotFoundError(WorktreeKitError):
    """Config file is missing at the main worktree root."""

    def __init__(self, config_path: str, init_command: str):
        self.config_path = config_path
        super().__init__(f"Config not found at {config_path}. Run '{init_command}' to create one.")


class ConfigReadError(WorktreeKitError):
    """Config file exists but could not be read."""

    def __init__(self, config_path: str, message: str):
        self.config_path = config_path
        super().__init__(f"Failed to read config at {config_path}: {message}")


class InvalidJsonError(WorktreeKitError):
    """Config file is not valid JSON."""

    def __init__(self, config_path: str, detail: Optional[str] = None):
        self.config_path = config_path
        error_msg = f"Invalid JSON in {config_path}"
        if detail:
            error_msg += f" ({detail})"
        super().__init__(error_msg)


class InvalidConfigError(WorktreeKitError):
    """Config file does not match the schema."""

    def __init__(self, config_path: str, issues: List[str]):
        self.config_path = config_path
        self.issues = issues
        super().__init__(f"Invalid config in {config_path}: {'; '.join(issues)}")


class ConfigExistsError(WorktreeKitError):
    """Refusing to overwrite an existing config file."""

    def __init__(self, config_path: str):
        self.config_path = config_path
        super().__init__(f"Config already exists at {config_path}. Use --force to overwrite.")


class GitOperationError(WorktreeKitError):
    """A git operation failed while orchestrating a command."""

    def __init__(self, operation: str, message: str, code: Optional[str] = None):
        self.operation = operation
        self.code = code
        self.message = message
        super().__init__(f"Failed to {operation}: {message}")


class WorktreeNotFoundError(WorktreeKitError):
    """No worktree is checked out on the requested branch."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f'Worktree for branch "{branch}" not found')


class MainWorktreeRemovalError(WorktreeKitError):
    """The main worktree can never be removed."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("Cannot remove the main worktree")
