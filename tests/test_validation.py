"""Tests for path and ref validation."""

import pytest

from diffguard.validation import SHELL_METACHARACTERS, validate_path, validate_ref


class TestValidatePath:
    """Test validate_path."""

    @pytest.mark.parametrize("path", [
        "src/main.go",
        "README.md",
        "a/b/c/d.txt",
        "./src/main.go",
        "dir.with.dots/file.name.py",
        "my-file_v2.txt",
    ])
    def test_accepts_safe_paths(self, path):
        assert validate_path(path) is True

    def test_rejects_empty(self):
        assert validate_path("") is False

    @pytest.mark.parametrize("path", [
        "../../etc/passwd",
        "..",
        "src/..",
        "a/../b",
        "src/../../outside",
        "file..txt",
    ])
    def test_rejects_parent_segments(self, path):
        assert validate_path(path) is False

    @pytest.mark.parametrize("path", ["/etc/passwd", "/", "//server/share"])
    def test_rejects_absolute_paths(self, path):
        assert validate_path(path) is False

    @pytest.mark.parametrize("char", sorted(SHELL_METACHARACTERS))
    def test_rejects_shell_metacharacters(self, char):
        assert validate_path(f"src/ma{char}in.go") is False

    @pytest.mark.parametrize("char", [" ", "\t", "\n", "\r"])
    def test_rejects_whitespace(self, char):
        assert validate_path(f"my{char}file.txt") is False

    @pytest.mark.parametrize("char", ["\x00", "\x1b", "\x7f"])
    def test_rejects_control_characters(self, char):
        assert validate_path(f"file{char}.txt") is False


class TestValidateRef:
    """Test validate_ref."""

    @pytest.mark.parametrize("ref", [
        "main",
        "feature/new-thing",
        "HEAD",
        "HEAD^",
        "HEAD~3",
        "v1.2.3",
        "release/2024.01",
        "ba7765dd48c0ba51f4fd12cde48fd100aecdb743",
    ])
    def test_accepts_safe_refs(self, ref):
        assert validate_ref(ref) is True

    def test_rejects_empty(self):
        assert validate_ref("") is False

    @pytest.mark.parametrize("char", sorted(SHELL_METACHARACTERS))
    def test_rejects_shell_metacharacters(self, char):
        assert validate_ref(f"main{char}") is False

    @pytest.mark.parametrize("char", [" ", "\t", "\n", "\r"])
    def test_rejects_whitespace(self, char):
        assert validate_ref(f"feature{char}branch") is False

    @pytest.mark.parametrize("ref", ["main..feature", "..", "a...b", "../main"])
    def test_rejects_double_dots(self, ref):
        assert validate_ref(ref) is False

    @pytest.mark.parametrize("ref", ["main/", "/main", "/", "feature//x"])
    def test_rejects_bad_slashes(self, ref):
        assert validate_ref(ref) is False

    @pytest.mark.parametrize("char", ["\x00", "\x01", "\x1f", "\x7f"])
    def test_rejects_control_characters(self, char):
        assert validate_ref(f"main{char}x") is False

    @pytest.mark.parametrize("ref", ["-p", "--output=/tmp/x", "-"])
    def test_rejects_option_like_refs(self, ref):
        assert validate_ref(ref) is False

    def test_ref_and_path_examples(self):
        assert validate_path("../../etc/passwd") is False
        assert validate_path("src/main.go") is True
        assert validate_ref("feature/new-thing") is True
        assert validate_ref("main/") is False
