"""Zero-context unified diff parsing for diffguard."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

HUNK_HEADER_PATTERN = re.compile(
    r"^@@\s+-(\d+)(,\d+)?\s+\+(\d+)(,\d+)?\s+@@", re.ASCII
)
# One marker, not two: "+++"/"---" file headers never count as content
ADDED_LINE_PATTERN = re.compile(r"^\+(?!\+)(.*)$")
REMOVED_LINE_PATTERN = re.compile(r"^-(?!-)(.*)$")

# Start values past a signed 64-bit integer are treated as malformed
MAX_LINE_NUMBER = 2**63 - 1


@dataclass(frozen=True)
class DiffLine:
    """A single added or removed line and its absolute line number."""

    content: str
    line: int

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "line": self.line}


@dataclass(frozen=True)
class FileDiff:
    """Added and removed lines of one file, in diff order."""

    added_lines: Tuple[DiffLine, ...] = ()
    removed_lines: Tuple[DiffLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when the diff carries no attributed lines at all."""
        return not self.added_lines and not self.removed_lines

    @property
    def added_line_numbers(self) -> List[int]:
        return [diff_line.line for diff_line in self.added_lines]

    @property
    def removed_line_numbers(self) -> List[int]:
        return [diff_line.line for diff_line in self.removed_lines]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "added_lines": [diff_line.to_dict() for diff_line in self.added_lines],
            "removed_lines": [diff_line.to_dict() for diff_line in self.removed_lines],
        }


@dataclass(frozen=True)
class HunkHeader:
    """Starting line numbers declared by a hunk header."""

    removed_start: int
    added_start: int


def parse_hunk_header(line: str) -> Optional[HunkHeader]:
    """Parse ``@@ -a[,b] +c[,d] @@`` into its start positions.

    Returns None for anything that is not a well-formed header, including
    headers whose start values are out of range. Never raises.
    """
    match = HUNK_HEADER_PATTERN.match(line)
    if not match:
        return None

    removed_start = int(match.group(1))
    added_start = int(match.group(3))
    if removed_start > MAX_LINE_NUMBER or added_start > MAX_LINE_NUMBER:
        logger.debug("Hunk header start value out of range, ignoring header")
        return None

    return HunkHeader(removed_start=removed_start, added_start=added_start)


class DiffParser:
    """Builds a FileDiff from ``git diff --unified=0`` output.

    The parser is total: any input, however malformed, produces a FileDiff.
    Lines that appear before the first recognized hunk header have no known
    position and are left out.
    """

    def __init__(self):
        """Initialize diff parser."""
        self.added_pattern = ADDED_LINE_PATTERN
        self.removed_pattern = REMOVED_LINE_PATTERN

    def parse(self, diff_text: str) -> FileDiff:
        """Classify each line of ``diff_text`` and collect added/removed lines."""
        added: List[DiffLine] = []
        removed: List[DiffLine] = []

        # None until a valid hunk header has been seen
        current_added: Optional[int] = None
        current_removed: Optional[int] = None
        dropped = 0

        for line in diff_text.split("\n"):
            header = parse_hunk_header(line)
            if header is not None:
                current_removed = header.removed_start
                current_added = header.added_start
                continue

            added_match = self.added_pattern.match(line)
            if added_match:
                if current_added is None:
                    dropped += 1
                    continue
                added.append(DiffLine(content=added_match.group(1), line=current_added))
                current_added += 1
                continue

            removed_match = self.removed_pattern.match(line)
            if removed_match:
                if current_removed is None:
                    dropped += 1
                    continue
                removed.append(
                    DiffLine(content=removed_match.group(1), line=current_removed)
                )
                current_removed += 1

        logger.debug(
            "Parsed unified diff",
            extra={"added": len(added), "removed": len(removed), "dropped": dropped},
        )
        return FileDiff(added_lines=tuple(added), removed_lines=tuple(removed))


def build_file_diff(diff_text: str) -> FileDiff:
    """Parse raw zero-context diff text into a FileDiff."""
    return DiffParser().parse(diff_text)
