"""Meta endpoints for the diffguard API."""

import logging
from typing import Optional

from fastapi import APIRouter

from ... import __version__
from ...config import DiffConfig
from ...errors import GitVersionUnsupportedError
from ...settings import get_settings
from ...vcs import GitRepository
from ..models import HealthResponse, VersionResponse

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


def _get_git_version() -> Optional[str]:
    """Return the installed git version if it is usable."""
    repo = GitRepository(DiffConfig(git_binary=get_settings().git_binary))
    try:
        return repo.validate_git_version()
    except GitVersionUnsupportedError as exc:
        logger.debug("git version probe failed", extra={"code": exc.code})
        return None


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    git_version = _get_git_version()
    logger.info(
        "Health check invoked",
        extra={"git_available": git_version is not None, "git_version": git_version},
    )
    return HealthResponse(
        status="healthy" if git_version else "degraded",
        version=__version__,
        git_available=git_version is not None,
        git_version=git_version,
    )


@router.get("/version", response_model=VersionResponse)
def version_info() -> VersionResponse:
    """Version information endpoint."""
    git_version = _get_git_version()
    logger.info("Version endpoint invoked", extra={"git_version": git_version})
    return VersionResponse(
        version=__version__,
        api_version="v1",
        git_version=git_version,
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Root endpoint providing basic API metadata."""
    return {
        "name": "diffguard API",
        "version": __version__,
        "description": "Line-level git diffs with validated paths and refs",
        "endpoints": {
            "diff": "POST /diff - Added and removed lines per file",
            "health": "GET /health - Health check",
            "version": "GET /version - Version information",
            "docs": "GET /docs - API documentation",
        },
    }
