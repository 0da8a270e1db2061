"""Hook execution models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HookContext:
    """Snapshot handed to every post-create hook of one creation."""

    worktree_path: str
    branch: str
    repo_root: str
    base_branch: Optional[str] = None
