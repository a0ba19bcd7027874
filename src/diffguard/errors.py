"""Error definitions and handling for diffguard."""

from typing import Any, Dict, Optional

_MAX_RENDERED_VALUE = 80


def safe_render(value: str) -> str:
    """Render an untrusted value for messages and logs.

    Control characters and non-ASCII are escaped and the result is truncated,
    so a rejected value can never inject raw shell or terminal content.
    """
    rendered = value.encode("unicode_escape").decode("ascii")
    if len(rendered) > _MAX_RENDERED_VALUE:
        rendered = rendered[:_MAX_RENDERED_VALUE] + "..."
    return rendered


class DiffGuardError(Exception):
    """Base exception for diffguard errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidPathError(DiffGuardError):
    """File path failed validation."""

    def __init__(self, path: str):
        rendered = safe_render(path)
        super().__init__(
            code="INVALID_PATH",
            message=f"Invalid file path: {rendered}",
            details={"role": "path", "value": rendered},
        )


class InvalidRefError(DiffGuardError):
    """Base or head ref failed validation."""

    def __init__(self, role: str, ref: str):
        rendered = safe_render(ref)
        super().__init__(
            code="INVALID_REF",
            message=f"Invalid {role} ref: {rendered}",
            details={"role": role, "value": rendered},
        )
        self.role = role


class DiffExecutionFailedError(DiffGuardError):
    """The git diff invocation failed to run or exited non-zero."""

    def __init__(
        self,
        reason: str,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        details: Dict[str, Any] = {"reason": reason}
        if returncode is not None:
            details["returncode"] = returncode
        if stderr:
            details["stderr"] = stderr.strip()
        super().__init__(
            code="DIFF_EXECUTION_FAILED",
            message=f"git diff failed: {reason}",
            details=details,
        )
        self.returncode = returncode
        self.stderr = stderr


class GitVersionUnsupportedError(DiffGuardError):
    """Git version is not supported."""

    def __init__(self, detected_version: str, required_version: str = "2.30"):
        super().__init__(
            code="GIT_VERSION_UNSUPPORTED",
            message=f"Git version {detected_version} is not supported. "
            f"Minimum required: {required_version}",
            details={
                "detected_version": detected_version,
                "required_version": required_version,
            },
        )
