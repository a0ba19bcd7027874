"""Service layer for the diffguard API."""

import logging
from typing import Any, Dict, List, Optional

from ...config import DiffConfig
from ...errors import DiffGuardError
from ...main import process_diff
from ...serialize import DeterministicSerializer
from ...settings import get_settings

logger = logging.getLogger(__name__)


class DiffService:
    """Runs diff requests and wraps the result in the JSON envelope."""

    def process_diff_request(
        self,
        repo_root: Optional[str] = None,
        paths: Optional[List[str]] = None,
        base_ref: Optional[str] = None,
        head_ref: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Process a diff request and return the complete JSON response."""
        settings = get_settings()
        serializer = DeterministicSerializer(DiffConfig())

        try:
            config = DiffConfig(
                repo_root=repo_root or settings.repo_root,
                base_ref=base_ref or settings.base_ref,
                head_ref=head_ref or settings.head_ref,
                git_binary=settings.git_binary,
            )
            payload = process_diff(config, paths)

            logger.info(
                "Diff processing succeeded",
                extra={
                    "files": len(payload.get("files", [])),
                    "skipped": len(payload.get("skipped", [])),
                },
            )
            return serializer.create_success_envelope(payload)

        except DiffGuardError as exc:
            logger.warning("Known diffguard error", extra={"code": exc.code})
            return serializer.create_error_envelope(exc.code, exc.message, exc.details)
