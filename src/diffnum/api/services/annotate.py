"""Service layer for the diffnum API."""

import io
import logging
from typing import Any, Dict, List

from ...config import AnnotateConfig
from ...diffpack import DiffState, iter_records
from ...serialize import AnnotationSerializer

logger = logging.getLogger(__name__)


class AnnotateService:
    """Service class that encapsulates the annotation pipeline."""

    def process_annotate_request(self, diff: str, options: List[str]) -> Dict[str, Any]:
        """Annotate a diff and return the success envelope.

        Raises:
            DiffNumError: On invalid options or a diff that cannot be annotated.
        """
        logger.info(
            "Processing annotate request",
            extra={"bytes": len(diff), "options": options},
        )

        config = AnnotateConfig.from_tokens(options)
        payload = self._annotate_core(config, diff)
        result = AnnotationSerializer(config).create_success_envelope(payload)

        logger.info(
            "Annotation succeeded",
            extra={
                "output_lines": payload["summary"]["output_lines"],
                "entries": payload["summary"]["entries"],
            },
        )
        return result

    def _annotate_core(self, config: AnnotateConfig, diff: str) -> Dict[str, Any]:
        """Run the state machine over the whole diff and serialize the records."""
        state = DiffState()
        records = list(iter_records(io.StringIO(diff), config, state))
        logger.debug(
            "Annotated diff",
            extra={"input_lines": state.line_no, "records": len(records)},
        )

        serializer = AnnotationSerializer(config)
        return serializer.serialize_output(records, state)
