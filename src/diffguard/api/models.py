"""Pydantic models for diffguard API requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class DiffRequest(BaseModel):
    """Request model for diff endpoint."""

    repo_root: Optional[str] = Field(
        None,
        description="Local repository path; defaults to DIFFGUARD_REPO_ROOT",
        examples=["/srv/checkouts/service"],
    )
    paths: Optional[List[str]] = Field(
        None,
        description="Repository-relative files to diff; every changed file if omitted",
        examples=[["src/main.go"]],
    )
    base_ref: Optional[str] = Field(
        None,
        description="Base ref; defaults to DIFFGUARD_BASE_REF or HEAD^",
        examples=["main"],
    )
    head_ref: Optional[str] = Field(
        None,
        description="Head ref; defaults to DIFFGUARD_HEAD_REF or HEAD",
        examples=["feature/new-thing"],
    )

    @field_validator("repo_root")
    @classmethod
    def repo_root_must_not_be_blank(cls, v):
        """Reject blank repository paths."""
        if v is not None and not v.strip():
            raise ValueError("repo_root cannot be empty")
        return v

    @field_validator("paths")
    @classmethod
    def paths_must_not_be_empty(cls, v):
        """An explicit path list must name at least one file."""
        if v is not None and not v:
            raise ValueError("paths cannot be an empty list")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
    git_available: bool = Field(..., examples=[True])
    git_version: Optional[str] = Field(None, examples=["2.34.1"])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    git_version: Optional[str] = Field(None, examples=["2.34.1"])
    supported_features: list = Field(
        default_factory=lambda: [
            "zero_context_diff",
            "line_attribution",
            "path_validation",
            "ref_validation",
        ]
    )
