"""Resolving and performing the file copies for a new worktree."""

import os
from typing import List, Sequence, Tuple

from worktree_kit.constants import GIT_DIR_NAME, GLOB_CHARS
from worktree_kit.logging_config import get_logger
from worktree_kit.models import FileToCopy, Notification
from worktree_kit.ports import FilesystemPort
from worktree_kit.result import Err

logger = get_logger(__name__)


def is_glob_pattern(entry: str) -> bool:
    return any(char in entry for char in GLOB_CHARS)


def is_git_metadata(relative: str) -> bool:
    """True for the .git entry of a worktree or anything below it."""
    return GIT_DIR_NAME in relative.replace(os.sep, "/").split("/")


def resolve_files_to_copy(
    patterns: Sequence[str],
    repo_root: str,
    worktree_path: str,
    fs: FilesystemPort,
) -> Tuple[List[FileToCopy], List[Notification]]:
    """
    Turn the configured copy entries into concrete copy instructions.

    Literal entries are taken as-is; glob entries are expanded against
    repo_root. Duplicate sources keep their first occurrence. The worktree's
    .git entry is never a source, since copying it would attach the new
    worktree to another worktree's HEAD.

    Args:
        patterns: Entries from the config's ``copy`` list
        repo_root: Directory the sources are relative to
        worktree_path: Directory the destinations are relative to
        fs: Filesystem capability

    Returns:
        Tuple of (files, notifications). A pattern matching nothing adds a
        warning instead of failing.
    """
    files: List[FileToCopy] = []
    notifications: List[Notification] = []
    seen = set()

    def add(relative: str) -> None:
        src = os.path.normpath(os.path.join(repo_root, relative))
        if src in seen:
            logger.debug(f"Skipping duplicate copy source {src}")
            return
        seen.add(src)
        dest = os.path.normpath(os.path.join(worktree_path, relative))
        files.append(FileToCopy(src=src, dest=dest, is_directory=fs.is_directory(src)))

    for entry in patterns:
        if not is_glob_pattern(entry):
            if is_git_metadata(os.path.normpath(entry)):
                notifications.append(Notification.warn(f'Skipping "{entry}": git metadata is never copied'))
                continue
            add(entry)
            continue

        matches = [match for match in fs.glob(entry, cwd=repo_root) if not is_git_metadata(match)]
        if not matches:
            notifications.append(Notification.warn(f'No files matched pattern "{entry}"'))
            continue
        for match in matches:
            add(match)

    return files, notifications


def copy_files(files: Sequence[FileToCopy], fs: FilesystemPort) -> List[Notification]:
    """Copy each resolved file or directory. Failures become warnings."""
    notifications: List[Notification] = []
    for item in files:
        if item.is_directory:
            result = fs.copy_directory(item.src, item.dest)
        else:
            result = fs.copy_file(item.src, item.dest)

        if isinstance(result, Err):
            logger.warning(f"Could not copy {item.src}: {result.error.message}")
            notifications.append(Notification.warn(f"Failed to copy {item.src}: {result.error.message}"))
    return notifications
