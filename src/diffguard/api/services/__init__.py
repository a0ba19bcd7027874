"""Service layer for the diffguard API."""

from .diff import DiffService

__all__ = ["DiffService"]
