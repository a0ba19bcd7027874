"""Git context handed to review rules: changed files, commits and per-file diffs."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .diffpack import FileDiff, build_file_diff
from .vcs import DiffProvider, GitCommit, GitRepository

logger = logging.getLogger(__name__)


@dataclass
class GitContext:
    """Changes between two refs, with on-demand line-level diffs.

    ``diff_for_file`` uses the context's own refs; ``diff_for_file_with_refs``
    lets a rule pick others. Validation and execution errors propagate to the
    caller, which decides whether a failed diff is fatal or just skipped.
    """

    provider: DiffProvider
    modified_files: List[str] = field(default_factory=list)
    created_files: List[str] = field(default_factory=list)
    deleted_files: List[str] = field(default_factory=list)
    commits: List[GitCommit] = field(default_factory=list)
    # New path -> base-side path for files git detected as renamed
    renamed_from: Dict[str, str] = field(default_factory=dict)
    base_ref: str = "HEAD^"
    head_ref: str = "HEAD"

    @classmethod
    def from_repository(
        cls, repo: GitRepository, base_ref: str, head_ref: str
    ) -> "GitContext":
        """Build a context from the changes and commits between two refs."""
        modified, created, deleted = [], [], []
        renamed_from = {}
        for change in repo.get_file_changes(base_ref, head_ref):
            if change.status == "A":
                created.append(change.path_new)
            elif change.status == "D":
                deleted.append(change.path_old)
            else:
                modified.append(change.effective_path)
                if change.status == "R":
                    renamed_from[change.path_new] = change.path_old

        commits = repo.get_commits(base_ref, head_ref)
        logger.info(
            "Git context collected",
            extra={
                "modified_count": len(modified),
                "created_count": len(created),
                "deleted_count": len(deleted),
                "commit_count": len(commits),
            },
        )
        return cls(
            provider=repo,
            modified_files=modified,
            created_files=created,
            deleted_files=deleted,
            commits=commits,
            renamed_from=renamed_from,
            base_ref=base_ref,
            head_ref=head_ref,
        )

    @property
    def changed_files(self) -> List[str]:
        """All touched paths, sorted."""
        return sorted(set(self.modified_files + self.created_files + self.deleted_files))

    def diff_for_file(self, path: str) -> FileDiff:
        return self.diff_for_file_with_refs(
            path, self.base_ref, self.head_ref, old_path=self.renamed_from.get(path)
        )

    def diff_for_file_with_refs(
        self, path: str, base_ref: str, head_ref: str, old_path: Optional[str] = None
    ) -> FileDiff:
        raw_diff = self.provider.fetch_diff(path, base_ref, head_ref, old_path)
        return build_file_diff(raw_diff)

    def diffs_for_changed_files(self) -> List[Tuple[str, FileDiff]]:
        """Diff every changed path using the context's refs."""
        return [(path, self.diff_for_file(path)) for path in self.changed_files]
