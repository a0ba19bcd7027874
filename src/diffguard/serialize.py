"""Deterministic serialization for diffguard."""

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from .config import DiffConfig
from .diffpack import FileDiff

logger = logging.getLogger(__name__)


class DeterministicSerializer:
    """Handles deterministic JSON serialization with stable ordering."""

    def __init__(self, config: DiffConfig):
        """Initialize with configuration."""
        self.config = config

    def serialize_file_diff(self, path: str, file_diff: FileDiff) -> Dict[str, Any]:
        """Serialize the diff of a single file, keeping line order as parsed."""
        file_data = {"path": path}
        file_data.update(file_diff.to_dict())
        return file_data

    def serialize_output(
        self,
        entries: List[Tuple[str, FileDiff]],
        skipped: Optional[List[Dict[str, Any]]] = None,
        git_version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Serialize all file diffs to a deterministic dictionary."""
        logger.debug("Serializing output", extra={"files": len(entries)})

        provenance = self.config.to_provenance_dict()
        provenance["git_version"] = git_version

        files_data = [self.serialize_file_diff(path, diff) for path, diff in entries]
        files_data.sort(key=lambda f: f["path"])

        payload = {
            "provenance": provenance,
            "files": files_data,
            "skipped": sorted(skipped or [], key=lambda s: s.get("path", "")),
        }

        checksum = self._compute_checksum(payload)
        payload["provenance"]["checksum"] = checksum

        logger.debug("Serialization finished", extra={"checksum": checksum})
        return payload

    def _compute_checksum(self, payload: Dict[str, Any]) -> str:
        """Compute SHA-256 checksum of the payload without its checksum field."""
        payload_copy = dict(payload)
        payload_copy["provenance"] = {
            key: value
            for key, value in payload["provenance"].items()
            if key != "checksum"
        }
        json_bytes = self._to_deterministic_json_bytes(payload_copy)
        return hashlib.sha256(json_bytes).hexdigest()

    def _to_deterministic_json_bytes(self, obj: Any) -> bytes:
        """Convert object to canonical JSON bytes."""
        json_str = json.dumps(
            obj,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
        )
        return json_str.encode("utf-8", errors="replace")

    def to_json_string(self, payload: Dict[str, Any]) -> str:
        """Convert payload to pretty-printed JSON string."""
        return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2)

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}
