"""Filesystem adapter built on os, shutil and glob."""

import glob as globlib
import os
import shutil
from typing import List, Optional

from worktree_kit.logging_config import get_logger
from worktree_kit.models import FilesystemError, FilesystemErrorCode
from worktree_kit.ports import FilesystemPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)


def _fs_error(error: OSError, path: str, action: str) -> FilesystemError:
    """Classify an OSError."""
    if isinstance(error, FileNotFoundError):
        code = FilesystemErrorCode.NOT_FOUND
    elif isinstance(error, PermissionError):
        code = FilesystemErrorCode.PERMISSION_DENIED
    elif isinstance(error, FileExistsError):
        code = FilesystemErrorCode.ALREADY_EXISTS
    else:
        code = FilesystemErrorCode.UNKNOWN
    logger.debug(f"-> {code.value}: {error}")
    return FilesystemError(code, f"Failed to {action}: {error.strerror or error}", path)


def expand_braces(pattern: str) -> List[str]:
    """Expand shell-style ``{a,b}`` alternatives, which glob does not support.

    Nested groups are expanded from the innermost outwards; a group without a
    comma is kept literally.
    """
    start = -1
    for index, char in enumerate(pattern):
        if char == "{":
            start = index
        elif char == "}" and start != -1:
            body = pattern[start + 1:index]
            if "," not in body:
                start = -1
                continue
            prefix, suffix = pattern[:start], pattern[index + 1:]
            expanded: List[str] = []
            for option in body.split(","):
                for item in expand_braces(prefix + option + suffix):
                    if item not in expanded:
                        expanded.append(item)
            return expanded
    return [pattern]


class FilesystemService(FilesystemPort):
    """Filesystem capability for the local disk."""

    def exists(self, path: str) -> bool:
        exists = os.path.exists(path)
        logger.debug(f"exists {path} -> {exists}")
        return exists

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(path)

    def read_file(self, path: str) -> Result[str, FilesystemError]:
        logger.debug(f"read {path}")
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            return Err(_fs_error(e, path, "read file"))
        except UnicodeDecodeError as e:
            logger.debug(f"-> not UTF-8: {e}")
            return Err(
                FilesystemError(FilesystemErrorCode.UNKNOWN, f"Failed to read file: not valid UTF-8 ({e.reason})", path)
            )
        logger.debug(f"-> {len(content)} bytes")
        return Ok(content)

    def write_file(self, path: str, content: str) -> Result[None, FilesystemError]:
        logger.debug(f"write {path} ({len(content)} bytes)")
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            return Err(_fs_error(e, path, "write file"))
        return Ok(None)

    def copy_file(self, source: str, destination: str) -> Result[None, FilesystemError]:
        logger.debug(f"copy {source} -> {destination}")
        try:
            os.makedirs(os.path.dirname(destination) or ".", exist_ok=True)
            shutil.copy2(source, destination)
        except OSError as e:
            return Err(_fs_error(e, source, "copy file"))
        return Ok(None)

    def copy_directory(self, source: str, destination: str) -> Result[None, FilesystemError]:
        logger.debug(f"copy dir {source} -> {destination}")
        if not os.path.isdir(source):
            return Err(FilesystemError(FilesystemErrorCode.NOT_FOUND, "Source directory not found", source))
        try:
            shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
        except OSError as e:
            # shutil.Error (partial copy) is an OSError without a specific errno
            return Err(_fs_error(e, source, "copy directory"))
        return Ok(None)

    def glob(self, pattern: str, cwd: Optional[str] = None) -> List[str]:
        base = cwd or self.get_cwd()
        matches = set()
        for expanded in expand_braces(pattern):
            for match in globlib.glob(expanded, root_dir=base, recursive=True):
                match = match.rstrip(os.sep)
                if match:
                    matches.add(match.replace(os.sep, "/"))
        results = sorted(matches)
        logger.debug(f"glob {pattern} in {base} -> {len(results)} matches")
        return results

    def get_cwd(self) -> str:
        return os.getcwd()

    def is_directory_empty(self, path: str) -> Result[bool, FilesystemError]:
        try:
            with os.scandir(path) as entries:
                return Ok(next(entries, None) is None)
        except OSError as e:
            return Err(_fs_error(e, path, "read directory"))

    def remove_directory(self, path: str) -> Result[None, FilesystemError]:
        logger.debug(f"rmdir {path}")
        try:
            os.rmdir(path)
        except OSError as e:
            return Err(_fs_error(e, path, "remove directory"))
        return Ok(None)
