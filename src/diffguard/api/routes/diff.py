"""Diff routes for the diffguard API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from ..models import DiffRequest
from ..services import DiffService

router = APIRouter(tags=["diff"])

logger = logging.getLogger(__name__)

diff_service = DiffService()


@router.post("/diff")
def create_diff(request: DiffRequest) -> Dict[str, Any]:
    """Return added and removed lines for the requested files."""
    logger.info(
        "Received diff request",
        extra={"path_count": len(request.paths) if request.paths else 0},
    )

    result = diff_service.process_diff_request(
        repo_root=request.repo_root,
        paths=request.paths,
        base_ref=request.base_ref,
        head_ref=request.head_ref,
    )
    logger.info("Diff request completed", extra={"ok": result.get("ok")})
    return result
