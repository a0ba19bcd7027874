"""Version control system operations for diffguard."""

import logging
import re
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .config import DiffConfig
from .errors import (
    DiffExecutionFailedError,
    GitVersionUnsupportedError,
    InvalidPathError,
    InvalidRefError,
)
from .validation import validate_path, validate_ref

logger = logging.getLogger(__name__)

# Field and record separators for git log output
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


@dataclass(frozen=True)
class FileChange:
    """Represents a file change between two refs."""

    status: str  # A, M, D, R, C, T
    path_old: Optional[str]
    path_new: Optional[str]

    @property
    def effective_path(self) -> str:
        return self.path_new or self.path_old or ""


@dataclass(frozen=True)
class GitCommit:
    """A commit in the range between two refs."""

    sha: str
    author_name: str
    author_email: str
    message: str


def check_diff_arguments(
    path: str, base_ref: str, head_ref: str, old_path: Optional[str] = None
) -> None:
    """Raise the matching error if any diff argument fails validation."""
    for candidate in (path, old_path):
        if candidate is not None and not validate_path(candidate):
            logger.warning("Rejected diff request", extra={"role": "path"})
            raise InvalidPathError(candidate)
    check_refs(base_ref, head_ref)


def check_refs(base_ref: str, head_ref: str) -> None:
    """Raise InvalidRefError naming the first ref that fails validation."""
    for role, ref in (("base", base_ref), ("head", head_ref)):
        if not validate_ref(ref):
            logger.warning("Rejected diff request", extra={"role": role})
            raise InvalidRefError(role, ref)


class DiffProvider(ABC):
    """Source of raw zero-context unified diff text for one file."""

    @abstractmethod
    def fetch_diff(
        self, path: str, base_ref: str, head_ref: str, old_path: Optional[str] = None
    ) -> str:
        """Return ``git diff --unified=0`` style text for ``path``.

        ``old_path`` names the base-side path of a renamed file so the two
        sides are paired instead of reported as a full addition.
        """


class GitRepository(DiffProvider):
    """Read-only git operations on a local working tree."""

    def __init__(self, config: DiffConfig):
        """Initialize with configuration."""
        self.config = config
        self._git_version: Optional[str] = None

    def _run_git(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run git command with proper environment and error handling."""
        # Enforce deterministic git behavior across platforms
        cmd = [
            self.config.git_binary,
            "-c",
            "core.autocrlf=false",
            "-c",
            "color.ui=false",
        ] + args
        logger.debug("Running git", extra={"git_args": args[:1]})
        return subprocess.run(
            cmd,
            cwd=self.config.repo_root,
            env=self.config.git_env,
            check=check,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )

    def _run_checked(self, args: List[str], operation: str) -> str:
        """Run git and translate every failure into DiffExecutionFailedError."""
        try:
            result = self._run_git(args)
        except subprocess.CalledProcessError as e:
            logger.warning(
                "git exited with an error",
                extra={"operation": operation, "returncode": e.returncode},
            )
            raise DiffExecutionFailedError(
                f"{operation} exited with status {e.returncode}",
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        except OSError as e:
            logger.warning("git could not be started", extra={"operation": operation})
            raise DiffExecutionFailedError(f"could not run git: {e}") from e
        return result.stdout

    def validate_git_version(self) -> str:
        """Validate Git version meets minimum requirements."""
        if self._git_version:
            return self._git_version

        try:
            result = subprocess.run(
                [self.config.git_binary, "--version"],
                capture_output=True,
                text=True,
                check=True,
                timeout=10,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise GitVersionUnsupportedError("unavailable", "2.30") from e

        # Extract version number from "git version 2.34.1"
        match = re.search(r"git version (\d+\.\d+(?:\.\d+)?)", result.stdout.strip())
        if not match:
            raise GitVersionUnsupportedError("unknown", "2.30")

        version_str = match.group(1)
        major, minor = (int(x) for x in version_str.split(".")[:2])
        if major < 2 or (major == 2 and minor < 30):
            raise GitVersionUnsupportedError(version_str, "2.30")

        self._git_version = version_str
        return version_str

    def fetch_diff(
        self, path: str, base_ref: str, head_ref: str, old_path: Optional[str] = None
    ) -> str:
        """Return the zero-context unified diff of ``path`` between two refs.

        All arguments are validated before git is spawned. A failed or
        non-zero git run raises DiffExecutionFailedError; there is no retry.
        Repository-configured external diff and textconv drivers are never run.
        """
        check_diff_arguments(path, base_ref, head_ref, old_path)

        diff_args = [
            "diff",
            "--unified=0",
            "--no-color",
            "--no-ext-diff",
            "--no-textconv",
            "--find-renames",
            base_ref,
            head_ref,
            "--",
        ]
        # Both pathspecs are needed for git to pair the two sides of a rename
        if old_path is not None and old_path != path:
            diff_args.append(old_path)
        diff_args.append(path)
        output = self._run_checked(diff_args, "git diff")
        logger.debug("Fetched diff", extra={"bytes": len(output)})
        return output

    def get_file_changes(self, base_ref: str, head_ref: str) -> List[FileChange]:
        """List files changed between two refs, sorted by path."""
        check_refs(base_ref, head_ref)

        output = self._run_checked(
            [
                "diff",
                "--name-status",
                "-z",
                "--find-renames",
                "--no-color",
                base_ref,
                head_ref,
            ],
            "git diff --name-status",
        )
        changes = self._parse_name_status(output)
        changes.sort(key=lambda c: (c.effective_path, c.status))
        logger.debug("Collected file changes", extra={"changes": len(changes)})
        return changes

    def _parse_name_status(self, output: str) -> List[FileChange]:
        """Parse NUL-separated ``git diff --name-status -z`` output."""
        fields = output.split("\0")
        changes = []
        i = 0
        while i < len(fields):
            status_part = fields[i]
            if not status_part:
                i += 1
                continue

            status = status_part[0]
            if status in "RC":
                # Rename/copy: score, old path, new path
                if i + 2 >= len(fields):
                    break
                changes.append(FileChange(status, fields[i + 1], fields[i + 2]))
                i += 3
                continue

            if i + 1 >= len(fields):
                break
            path = fields[i + 1]
            if status == "D":
                changes.append(FileChange(status, path, None))
            elif status == "A":
                changes.append(FileChange(status, None, path))
            else:
                changes.append(FileChange(status, path, path))
            i += 2

        return changes

    def get_commits(self, base_ref: str, head_ref: str) -> List[GitCommit]:
        """List commits reachable from ``head_ref`` but not ``base_ref``, oldest first."""
        check_refs(base_ref, head_ref)

        output = self._run_checked(
            [
                "log",
                "--reverse",
                "--no-color",
                f"--format=%H{_FIELD_SEP}%an{_FIELD_SEP}%ae{_FIELD_SEP}%B{_RECORD_SEP}",
                f"{base_ref}..{head_ref}",
                "--",
            ],
            "git log",
        )

        commits = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            parts = record.split(_FIELD_SEP, 3)
            if len(parts) < 4:
                continue
            sha, author_name, author_email, message = parts
            commits.append(GitCommit(sha, author_name, author_email, message.strip()))
        return commits
