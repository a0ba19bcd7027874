"""Application-wide settings and environment loading."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")


@dataclass(frozen=True)
class Settings:
    """Defaults shared by the CLI and the API."""

    repo_root: str
    base_ref: str
    head_ref: str
    git_binary: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return settings read from environment variables."""
    settings = Settings(
        repo_root=os.getenv("DIFFGUARD_REPO_ROOT", "."),
        base_ref=os.getenv("DIFFGUARD_BASE_REF", "HEAD^"),
        head_ref=os.getenv("DIFFGUARD_HEAD_REF", "HEAD"),
        git_binary=os.getenv("DIFFGUARD_GIT_BINARY", "git"),
    )
    logger.debug("Settings resolved", extra={"repo_root": settings.repo_root})
    return settings
