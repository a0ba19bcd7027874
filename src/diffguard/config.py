"""Configuration management for diffguard."""

import os
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class DiffConfig:
    """Configuration for running git diff against a local repository."""

    # Working tree that git runs in
    repo_root: str = "."

    # Default refs used by diff_for_file; checked by GitRepository before use
    base_ref: str = "HEAD^"
    head_ref: str = "HEAD"

    git_binary: str = "git"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.repo_root:
            raise ValueError("repo_root cannot be empty")
        if not self.git_binary:
            raise ValueError("git_binary cannot be empty")

    @property
    def git_env(self) -> Dict[str, str]:
        """Get Git environment variables for deterministic output."""
        env = os.environ.copy()

        # Use platform-appropriate null device
        null_device = "NUL" if os.name == "nt" else "/dev/null"

        env.update(
            {
                "LC_ALL": "C",
                "GIT_CONFIG_GLOBAL": null_device,
                "GIT_CONFIG_SYSTEM": null_device,
                "GIT_TERMINAL_PROMPT": "0",
                "GIT_PAGER": "cat",
            }
        )
        return env

    def to_provenance_dict(self) -> Dict[str, Any]:
        """Convert config to provenance dictionary for output."""
        return {
            "repo_root": self.repo_root,
            "base_ref": self.base_ref,
            "head_ref": self.head_ref,
            "diff_options": {
                "unified": 0,
                "color": "off",
            },
            "env_locks": {
                "LC_ALL": "C",
                "core.autocrlf": "false",
            },
        }
