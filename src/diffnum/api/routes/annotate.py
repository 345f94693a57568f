"""Annotation routes for the diffnum API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter

from ..models import AnnotateRequest
from ..services import AnnotateService

router = APIRouter(tags=["annotate"])

logger = logging.getLogger(__name__)

annotate_service = AnnotateService()


@router.post("/annotate")
def annotate_diff(request: AnnotateRequest) -> Dict[str, Any]:
    """Annotate a unified diff with paths and line numbers.

    Diff and option errors propagate to the application's exception
    handlers, which turn them into error envelopes.
    """
    logger.info(
        "Received annotate request",
        extra={"bytes": len(request.diff), "options": request.options},
    )

    result = annotate_service.process_annotate_request(
        diff=request.diff,
        options=request.options,
    )
    logger.info(
        "Annotate request completed",
        extra={"output_lines": result["data"]["summary"]["output_lines"]},
    )
    return result
