"""FastAPI application instance for the diffnum API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import AnnotateConfig
from ..errors import DiffNumError
from ..logging_utils import configure_logging
from ..serialize import AnnotationSerializer
from . import __version__
from .routes import router as api_router

configure_logging()

logger = logging.getLogger(__name__)

# Error envelopes do not depend on the annotation options.
error_serializer = AnnotationSerializer(AnnotateConfig())

app = FastAPI(
    title="diffnum API",
    description="Annotate unified diffs with file paths and new-file line numbers",
    version=__version__,
)
app.include_router(api_router)


@app.exception_handler(DiffNumError)
async def diffnum_error_handler(request: Request, exc: DiffNumError) -> JSONResponse:
    """Bad options or a malformed diff: the request was handled, the diff was not."""
    logger.warning(
        "Annotation rejected",
        extra={"code": exc.code, "path": request.url.path},
    )
    return JSONResponse(
        status_code=200,
        content=error_serializer.create_error_envelope(exc.code, exc.message, exc.details),
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is a server fault, reported in the same envelope."""
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "exception_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_serializer.create_error_envelope(
            "INTERNAL_ERROR",
            f"Internal server error: {exc}",
            {"exception_type": type(exc).__name__, "path": request.url.path},
        ),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
