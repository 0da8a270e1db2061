"""Shell adapter that runs hook commands with subprocess."""

import os
import subprocess
import time
from typing import Dict, Optional

from worktree_kit.constants import DEFAULT_HOOK_TIMEOUT
from worktree_kit.logging_config import get_logger
from worktree_kit.models import ShellError, ShellErrorCode, ShellOutput
from worktree_kit.ports import ShellPort
from worktree_kit.result import Err, Ok, Result

logger = get_logger(__name__)


class ShellService(ShellPort):
    """Runs commands through the system shell, one at a time."""

    def __init__(self, timeout: float = DEFAULT_HOOK_TIMEOUT):
        """Initialize the service.

        Args:
            timeout: Default seconds before a command is killed
        """
        self.timeout = timeout

    def execute(
        self,
        command: str,
        cwd: str,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Result[ShellOutput, ShellError]:
        timeout = self.timeout if timeout is None else timeout
        logger.debug(command)
        logger.debug(f"cwd: {cwd}")

        start = time.monotonic()
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                env={**os.environ, **(env or {})},
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug(f"-> TIMEOUT ({time.monotonic() - start:.1f}s)")
            return Err(ShellError(ShellErrorCode.TIMEOUT, f"Command timed out after {timeout:g}s"))
        except OSError as e:
            logger.debug(f"-> EXCEPTION: {e}")
            return Err(ShellError(ShellErrorCode.UNKNOWN, f"Failed to execute command: {e}"))

        logger.debug(f"-> exit {completed.returncode} ({time.monotonic() - start:.1f}s)")

        stdout = (completed.stdout or "").strip()
        stderr = (completed.stderr or "").strip()
        if completed.returncode != 0:
            return Err(
                ShellError(
                    ShellErrorCode.EXECUTION_FAILED,
                    f"Command failed with exit code {completed.returncode}",
                    exit_code=completed.returncode,
                    stderr=stderr,
                )
            )
        return Ok(ShellOutput(stdout=stdout, stderr=stderr, exit_code=completed.returncode))
