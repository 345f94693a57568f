"""Deterministic serialization of annotation results."""

import hashlib
import json
import logging
from typing import Any, Dict, List

from .config import AnnotateConfig
from .diffpack import AnnotatedLine, DiffState
from .emitter import Emitter

logger = logging.getLogger(__name__)


class AnnotationSerializer:
    """Handles deterministic JSON serialization with stable ordering."""

    def __init__(self, config: AnnotateConfig):
        """Initialize with configuration."""
        self.config = config
        self.emitter = Emitter(config)

    def serialize_output(
        self, records: List[AnnotatedLine], state: DiffState
    ) -> Dict[str, Any]:
        """Serialize the complete output to a deterministic dictionary."""
        logger.debug(
            "Serializing output",
            extra={"records": len(records), "lines": state.line_no},
        )

        rendered = [self.emitter.render(record) for record in records]
        payload = {
            "provenance": {"options": self.config.to_options_dict()},
            "lines": [
                self._serialize_record(record, text)
                for record, text in zip(records, rendered)
            ],
            "text": "".join(f"{text}\n" for text in rendered),
            "summary": {
                "input_lines": state.line_no,
                "output_lines": len(rendered),
                "entries": state.entries,
                "annotated_lines": state.annotated,
            },
        }

        checksum = self._compute_checksum(payload)
        payload["provenance"]["checksum"] = checksum

        logger.debug("Serialization finished", extra={"checksum": checksum})
        return payload

    def _serialize_record(self, record: AnnotatedLine, rendered: str) -> Dict[str, Any]:
        """Serialize a single record to dictionary."""
        record_data = {
            "kind": record.kind,
            "text": record.text,
            "rendered": rendered,
        }

        if record.path is not None:
            record_data["path"] = record.path

        if record.line_number is not None:
            record_data["line_number"] = record.line_number

        if record.deleted:
            record_data["deleted"] = True

        return record_data

    def _compute_checksum(self, payload: Dict[str, Any]) -> str:
        """SHA-256 of the payload as compact sorted-key JSON.

        Called before the checksum itself is attached to the provenance.
        """
        json_bytes = json.dumps(
            payload, ensure_ascii=False, sort_keys=True, separators=(",", ":")
        ).encode("utf-8", errors="surrogateescape")
        return hashlib.sha256(json_bytes).hexdigest()

    def to_json_string(self, payload: Dict[str, Any]) -> str:
        """Convert payload to pretty-printed JSON string."""
        logger.debug("Rendering payload to JSON string")
        return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2)

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        logger.debug("Creating success envelope")
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}
