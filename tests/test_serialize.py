"""Tests for serialization module."""

import json

from diffnum.config import AnnotateConfig
from diffnum.diffpack import AnnotatedLine, DiffState, iter_records
from diffnum.serialize import AnnotationSerializer


def serialize(diff, *tokens):
    config = AnnotateConfig.from_tokens(tokens)
    state = DiffState()
    records = list(iter_records(diff.splitlines(), config, state))
    return AnnotationSerializer(config).serialize_output(records, state)


class TestAnnotationSerializer:
    """Test AnnotationSerializer class."""

    def test_serialize_record_body(self):
        """Test body record serialization."""
        serializer = AnnotationSerializer(AnnotateConfig())
        record = AnnotatedLine(kind="body", text="+x", path="f", field="3", line_number=3)

        result = serializer._serialize_record(record, "3:+x")

        assert result == {
            "kind": "body",
            "text": "+x",
            "rendered": "3:+x",
            "path": "f",
            "line_number": 3,
        }

    def test_serialize_record_header(self):
        """Header records carry no path or number."""
        serializer = AnnotationSerializer(AnnotateConfig())
        record = AnnotatedLine(kind="header", text="index 1..2")

        result = serializer._serialize_record(record, "index 1..2")

        assert "path" not in result
        assert "line_number" not in result
        assert "deleted" not in result

    def test_serialize_output(self, simple_diff):
        """Test complete payload structure."""
        payload = serialize(simple_diff, "show_path=1")

        assert payload["provenance"]["options"]["show_path"] is True
        assert len(payload["provenance"]["checksum"]) == 64
        assert [line["rendered"] for line in payload["lines"][-3:]] == [
            "f:1: one",
            "f:2:+two",
            "f:3: three",
        ]
        assert payload["text"].endswith("f:3: three\n")
        assert payload["summary"] == {
            "input_lines": 7,
            "output_lines": 7,
            "entries": 1,
            "annotated_lines": 3,
        }

    def test_deleted_flag(self):
        payload = serialize("diff --git a/f b/f\n--- a/f\n+++ /dev/null\n@@ -1 +0,0 @@\n-x\n")
        body = payload["lines"][-1]
        assert body["deleted"] is True
        assert "line_number" not in body

    def test_checksum_deterministic(self, simple_diff):
        """Identical input gives identical checksums."""
        first = serialize(simple_diff)
        second = serialize(simple_diff)
        assert first["provenance"]["checksum"] == second["provenance"]["checksum"]

    def test_checksum_depends_on_options(self, simple_diff):
        first = serialize(simple_diff)
        second = serialize(simple_diff, "show_path=1")
        assert first["provenance"]["checksum"] != second["provenance"]["checksum"]

    def test_to_json_string(self, simple_diff):
        serializer = AnnotationSerializer(AnnotateConfig())
        text = serializer.to_json_string(serializer.create_success_envelope(serialize(simple_diff)))
        data = json.loads(text)
        assert data["ok"] is True
        assert "lines" in data["data"]

    def test_error_envelope(self):
        serializer = AnnotationSerializer(AnnotateConfig())
        envelope = serializer.create_error_envelope("CODE", "message", {"line_no": 3})
        assert envelope == {
            "ok": False,
            "error": {"code": "CODE", "message": "message", "details": {"line_no": 3}},
        }

    def test_error_envelope_without_details(self):
        serializer = AnnotationSerializer(AnnotateConfig())
        envelope = serializer.create_error_envelope("CODE", "message")
        assert "details" not in envelope["error"]
