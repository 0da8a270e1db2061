"""
worktree-kit - A helper for the git worktree workflow
"""

from .__version__ import __version__
from .cli.main import main

__all__ = ["main", "__version__"]
