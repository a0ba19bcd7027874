"""Input validation for paths and refs handed to git."""

import posixpath

# Characters that could be used for command injection
SHELL_METACHARACTERS = frozenset(";|&$`(){}[]*?<>'\"")

# Rejected even where the filesystem or git would allow them
WHITESPACE_CHARACTERS = frozenset(" \t\n\r")


def _has_forbidden_character(value: str) -> bool:
    return any(
        char in SHELL_METACHARACTERS or char in WHITESPACE_CHARACTERS
        for char in value
    )


def _has_control_character(value: str) -> bool:
    return any(ord(char) < 32 or ord(char) == 127 for char in value)


def validate_path(path: str) -> bool:
    """Return True if ``path`` is a safe repository-relative file path.

    Rejects empty paths, absolute paths, any ``..`` (before or after
    normalization), shell metacharacters, whitespace and control characters.
    """
    if not path:
        return False

    if posixpath.isabs(path):
        return False

    # Reject traversal in either form so "a/../../b" and "a/.." are both caught
    if ".." in path or ".." in posixpath.normpath(path):
        return False

    if _has_forbidden_character(path):
        return False

    return not _has_control_character(path)


def validate_ref(ref: str) -> bool:
    """Return True if ``ref`` is a safe git reference (branch, tag or SHA)."""
    if not ref:
        return False

    if _has_forbidden_character(ref):
        return False

    if ".." in ref:
        return False

    if ref.startswith("/") or ref.endswith("/") or "//" in ref:
        return False

    # A leading dash would be parsed by git as an option
    if ref.startswith("-"):
        return False

    return not _has_control_character(ref)
