"""Tests for serialization module."""

import json

from diffguard.config import DiffConfig
from diffguard.diffpack import DiffLine, FileDiff
from diffguard.serialize import DeterministicSerializer


def _diff() -> FileDiff:
    return FileDiff(
        added_lines=(DiffLine("new", 3), DiffLine("more", 4), DiffLine("again", 1)),
        removed_lines=(DiffLine("old", 3),),
    )


class TestDeterministicSerializer:
    """Test DeterministicSerializer class."""

    def test_serialize_file_diff_keeps_diff_order(self):
        serializer = DeterministicSerializer(DiffConfig())

        result = serializer.serialize_file_diff("src/app.py", _diff())

        assert result["path"] == "src/app.py"
        assert [line["line"] for line in result["added_lines"]] == [3, 4, 1]
        assert result["removed_lines"] == [{"content": "old", "line": 3}]

    def test_serialize_output_structure(self):
        config = DiffConfig(repo_root="/repo", base_ref="main", head_ref="feature/x")
        serializer = DeterministicSerializer(config)

        payload = serializer.serialize_output(
            [("z.py", FileDiff()), ("a.py", _diff())],
            skipped=[{"path": "b c.txt", "error": {"code": "INVALID_PATH"}}],
            git_version="2.43.0",
        )

        assert [f["path"] for f in payload["files"]] == ["a.py", "z.py"]
        assert payload["skipped"][0]["path"] == "b c.txt"
        provenance = payload["provenance"]
        assert provenance["repo_root"] == "/repo"
        assert provenance["base_ref"] == "main"
        assert provenance["head_ref"] == "feature/x"
        assert provenance["git_version"] == "2.43.0"
        assert provenance["diff_options"]["unified"] == 0
        assert len(provenance["checksum"]) == 64

    def test_checksum_is_stable_and_order_independent(self):
        serializer = DeterministicSerializer(DiffConfig())

        first = serializer.serialize_output([("a.py", _diff()), ("b.py", FileDiff())])
        second = serializer.serialize_output([("b.py", FileDiff()), ("a.py", _diff())])

        assert first["provenance"]["checksum"] == second["provenance"]["checksum"]

    def test_checksum_changes_with_content(self):
        serializer = DeterministicSerializer(DiffConfig())

        first = serializer.serialize_output([("a.py", _diff())])
        second = serializer.serialize_output([("a.py", FileDiff())])

        assert first["provenance"]["checksum"] != second["provenance"]["checksum"]

    def test_to_json_string_round_trips(self):
        serializer = DeterministicSerializer(DiffConfig())
        payload = serializer.serialize_output([("a.py", _diff())])

        assert json.loads(serializer.to_json_string(payload)) == payload

    def test_envelopes(self):
        serializer = DeterministicSerializer(DiffConfig())

        assert serializer.create_success_envelope({"x": 1}) == {"ok": True, "data": {"x": 1}}
        assert serializer.create_error_envelope("INVALID_REF", "bad") == {
            "ok": False,
            "error": {"code": "INVALID_REF", "message": "bad"},
        }
        error = serializer.create_error_envelope("INVALID_REF", "bad", {"role": "base"})
        assert error["error"]["details"] == {"role": "base"}
