"""Loading and initialising the project config file."""

import json
import os
from dataclasses import dataclass

from worktree_kit.config import WorktreeConfig, init_template
from worktree_kit.constants import CONFIG_FILENAME, INIT_COMMAND
from worktree_kit.exceptions import (
    ConfigExistsError,
    ConfigNotFoundError,
    ConfigReadError,
    InvalidConfigError,
    InvalidJsonError,
    NotARepositoryError,
    WorktreeKitError,
)
from worktree_kit.logging_config import get_logger
from worktree_kit.ports import FilesystemPort, GitPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoadedConfig:
    config: WorktreeConfig
    config_path: str


def config_path_for(git: GitPort) -> Result[str, WorktreeKitError]:
    """Path of the config file, anchored at the main worktree root."""
    root = git.get_main_worktree_root()
    if isinstance(root, Err):
        return Err(NotARepositoryError(root.error.message))
    return Ok(os.path.join(root.value, CONFIG_FILENAME))


def load_config(git: GitPort, fs: FilesystemPort) -> Result[LoadedConfig, WorktreeKitError]:
    """Read, parse and validate the project config.

    A linked worktree resolves to the same file as its main worktree.
    """
    path_result = config_path_for(git)
    if isinstance(path_result, Err):
        return path_result
    config_path = path_result.value

    if not fs.exists(config_path):
        return Err(ConfigNotFoundError(config_path, INIT_COMMAND))

    read_result = fs.read_file(config_path)
    if isinstance(read_result, Err):
        return Err(ConfigReadError(config_path, read_result.error.message))

    try:
        raw = json.loads(read_result.value)
    except json.JSONDecodeError as e:
        return Err(InvalidJsonError(config_path, f"line {e.lineno}, column {e.colno}: {e.msg}"))

    parsed = WorktreeConfig.from_dict(raw)
    if isinstance(parsed, Err):
        return Err(InvalidConfigError(config_path, parsed.error))

    logger.debug(f"Loaded config from {config_path}")
    return Ok(LoadedConfig(config=parsed.value, config_path=config_path))


def init_config(git: GitPort, fs: FilesystemPort, force: bool = False) -> Result[str, WorktreeKitError]:
    """Write a template config at the main worktree root.

    Returns:
        The path of the written config file
    """
    path_result = config_path_for(git)
    if isinstance(path_result, Err):
        return path_result
    config_path = path_result.value

    if fs.exists(config_path) and not force:
        return Err(ConfigExistsError(config_path))

    content = json.dumps(init_template(), indent=2) + "\n"
    write_result = fs.write_file(config_path, content)
    if isinstance(write_result, Err):
        return Err(WorktreeKitError(f"Failed to write config: {write_result.error.message}"))

    logger.info(f"Wrote config to {config_path}")
    return Ok(config_path)
