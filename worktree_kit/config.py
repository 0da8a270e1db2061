"""Project configuration schema for worktree-kit.

The config file is JSON, stored at the main worktree root::

    {
      "rootDir": "../worktrees",
      "copy": [".env", "config/*.json"],
      "hooks": {"post-create": ["pnpm install"]},
      "defaultBase": "ask"
    }

``rootDir`` is required; every other key falls back to a default.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from worktree_kit.constants import DEFAULT_BASE_CHOICES, DEFAULT_ROOT_DIR, INIT_ROOT_DIR
from worktree_kit.result import Err, Ok, Result


class DefaultBase(Enum):
    """Which base branch `wt create` uses when --base is not given."""
    CURRENT = "current"
    DEFAULT = "default"
    ASK = "ask"


@dataclass(frozen=True)
class HooksConfig:
    post_create: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorktreeConfig:
    """Normalized project configuration. Optional fields are always present."""

    root_dir: str
    copy: List[str] = field(default_factory=list)
    hooks: HooksConfig = field(default_factory=HooksConfig)
    default_base: DefaultBase = DefaultBase.ASK

    def to_dict(self) -> dict:
        """Convert config to its on-disk JSON shape."""
        return {
            "rootDir": self.root_dir,
            "copy": list(self.copy),
            "hooks": {"post-create": list(self.hooks.post_create)},
            "defaultBase": self.default_base.value,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Result["WorktreeConfig", List[str]]:
        """Validate raw JSON data and build a config.

        Every problem found is reported, not just the first one.

        Args:
            raw: Decoded JSON value

        Returns:
            Ok with the normalized config, or Err with the list of issues
        """
        if not isinstance(raw, dict):
            return Err([f"config: expected object, got {_type_name(raw)}"])

        issues: List[str] = []

        root_dir = raw.get("rootDir")
        if "rootDir" not in raw:
            issues.append("rootDir: required")
        elif not isinstance(root_dir, str):
            issues.append(f"rootDir: expected string, got {_type_name(root_dir)}")

        copy = _validate_string_list(raw.get("copy"), "copy", issues)

        post_create: List[str] = []
        hooks = raw.get("hooks")
        if hooks is not None:
            if not isinstance(hooks, dict):
                issues.append(f"hooks: expected object, got {_type_name(hooks)}")
            else:
                post_create = _validate_string_list(hooks.get("post-create"), "hooks.post-create", issues)

        default_base = DefaultBase.ASK
        raw_default_base = raw.get("defaultBase")
        if raw_default_base is not None:
            if raw_default_base in DEFAULT_BASE_CHOICES:
                default_base = DefaultBase(raw_default_base)
            else:
                issues.append(
                    f"defaultBase: expected one of {', '.join(DEFAULT_BASE_CHOICES)}, got {raw_default_base!r}"
                )

        if issues:
            return Err(issues)

        return Ok(
            cls(
                root_dir=root_dir,
                copy=copy,
                hooks=HooksConfig(post_create=post_create),
                default_base=default_base,
            )
        )


def _validate_string_list(value: Any, name: str, issues: List[str]) -> List[str]:
    """Check an optional array of strings, recording issues."""
    if value is None:
        return []
    if not isinstance(value, list):
        issues.append(f"{name}: expected array, got {_type_name(value)}")
        return []

    items: List[str] = []
    for index, item in enumerate(value):
        if isinstance(item, str):
            items.append(item)
        else:
            issues.append(f"{name}[{index}]: expected string, got {_type_name(item)}")
    return items


def _type_name(value: Any) -> str:
    """JSON-flavoured type name for issue messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def default_config() -> WorktreeConfig:
    """Config used when the project has none (or an unreadable one)."""
    return WorktreeConfig(root_dir=DEFAULT_ROOT_DIR)


def init_template() -> dict:
    """Content written by `wt init`."""
    return WorktreeConfig(root_dir=INIT_ROOT_DIR).to_dict()
