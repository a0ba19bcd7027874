"""diffguard.

Line-level git diffs for review rules: validated paths and refs in,
added and removed lines with absolute line numbers out.
"""

from .diffpack import DiffLine, FileDiff, build_file_diff, parse_hunk_header
from .validation import validate_path, validate_ref

__version__ = "1.0.0"

__all__ = [
    "DiffLine",
    "FileDiff",
    "build_file_diff",
    "parse_hunk_header",
    "validate_path",
    "validate_ref",
]
