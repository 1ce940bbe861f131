"""FastAPI application for the block markup annotator.

Exports ``app`` for use with ``uvicorn main:app``.
"""

import json
import logging
import traceback
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Load .env from the project directory so BLOCK_MARKUP_* settings are set
load_dotenv(Path(__file__).resolve().parent / ".env")

from annotator.config import AnnotatorConfig
from annotator.render import render_block_result
from models.request import RenderBlockRequest
from models.response import RenderBlockResponse


# ---------------------------------------------------------------------------
# Structured JSON logging
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
    """JSON-lines formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Include optional extra fields when present
        for key in ("block_name", "strategy", "reason", "hook", "annotated"):
            val = getattr(record, key, None)
            if val is not None:
                log_data[key] = val
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


_handler = logging.StreamHandler()
_handler.setFormatter(StructuredFormatter())

logger = logging.getLogger("annotator")
logger.addHandler(_handler)
logger.setLevel(logging.INFO)
# Prevent propagation to root logger to avoid duplicate output
logger.propagate = False


# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Block Markup Annotator")

config = AnnotatorConfig.from_env()


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and answer with a JSON 500."""
    logger.error(
        "Unhandled exception: %s: %s\n%s",
        type(exc).__name__,
        exc,
        traceback.format_exc(),
    )
    return JSONResponse(status_code=500, content={"detail": "Internal error"})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
async def health() -> dict:
    """Health check."""
    return {"status": "healthy", "strategy": config.strategy.value}


@app.post("/render-block", response_model=RenderBlockResponse)
async def render_block(request: RenderBlockRequest) -> RenderBlockResponse:
    """Annotate one rendered block.

    The fragment is returned as received whenever annotation is skipped
    or falls back, so this endpoint does not fail on bad markup.
    """
    block_config = config
    if request.strategy is not None:
        block_config = config.model_copy(update={"strategy": request.strategy})

    result = render_block_result(request.html, request.block, None, block_config)

    logger.info(
        "render-block",
        extra={
            "block_name": request.block.name,
            "strategy": block_config.strategy.value,
            "annotated": result.annotated,
        },
    )

    return RenderBlockResponse(html=result.html, annotated=result.annotated)
