"""FastAPI application exposing the gloss pipeline over HTTP.

WHY: The story viewer (and scripts, notebooks, curl) need to turn a
selected sentence into a gb4e example without bundling the converter.
FastAPI provides request validation, automatic OpenAPI documentation,
and a thin place to plug in the render target.

HOW: POST /format validates the host JSON, runs the pipeline, builds the
display blocks, and publishes them as the sentence's container on the
shared ResultBoard in one locked step. GET /results/{sentence_id}
serves that container as HTML <pre> blocks; DELETE /results is the
close action. /formats and /health are informational.

RULES:
- Error responses use ErrorResponse; 422 may also carry FastAPI's
  validation error list (UnprocessableResponse)
- Unknown format keys → 400; malformed metadata → 422
- Page URL: request body page_url, else Referer header, else GLOSS_PAGE_URL
- The result board is a module-level singleton; publish() is atomic, so
  the last writer wins and a concurrent close never breaks a request
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import logging
from typing import Annotated, List, Optional

from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import HTMLResponse, Response

from gloss_converter import __version__
from gloss_converter.config import GLOSS_API_HOST, GLOSS_API_PORT, GLOSS_PAGE_URL, configure_logging
from gloss_converter.core.ir import FormattedResult
from gloss_converter.core.metadata import static_url
from gloss_converter.core.pipeline import process_request
from gloss_converter.formatters import FORMATTERS
from gloss_converter.formatters.gb4e import convert_to_latex
from gloss_converter.presenter import ResultBoard, build_display_blocks, close
from gloss_converter.server.models import (
    ErrorResponse,
    FormatInfo,
    FormatOutputModel,
    FormatRequest,
    FormatResponse,
    HealthResponse,
    UnprocessableResponse,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and board setup
# ---------------------------------------------------------------------------

result_board = ResultBoard()

app = FastAPI(
    title="Interlinear Gloss Converter API",
    description=(
        "Converts an annotated sentence (word, morpheme, gloss, and "
        "translation tiers) into a gb4e / gb4e-modified LaTeX interlinear "
        "example, and keeps the displayed result per sentence."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_formats(formats: Optional[List[str]]) -> List[str]:
    """Return the requested format keys, raising 400 on unknown ones."""
    if not formats:
        return list(FORMATTERS.keys())
    for key in formats:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise HTTPException(
                status_code=400,
                detail="Unknown output format '{}'. Available: {}".format(key, available),
            )
    return list(formats)


def _run_formatters(result: FormattedResult, format_keys: List[str]) -> List[FormatOutputModel]:
    outputs = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(result):
            outputs.append(FormatOutputModel(
                format=key,
                name=formatter.name,
                suffix=output.suffix,
                media_type=output.media_type,
                content=output.content,
            ))
    return outputs


# ---------------------------------------------------------------------------
# Endpoints: Formatting
# ---------------------------------------------------------------------------


@app.post(
    "/format",
    response_model=FormatResponse,
    tags=["format"],
    summary="Format a sentence as an interlinear example",
    description=(
        "Resolves the selected tiers, aligns morphemes and glosses per word, "
        "renders the gb4e example, and displays it in the result container "
        "for sentenceId."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown output format"},
        422: {
            "model": UnprocessableResponse,
            "description": "Malformed sentence or metadata (string detail) or request validation error (list detail)",
        },
        500: {"model": ErrorResponse, "description": "Formatting failed"},
    },
)
def format_sentence(
    request: FormatRequest,
    referer: Annotated[
        Optional[str],
        Header(description="Page the request came from; used for the permalink."),
    ] = None,
) -> FormatResponse:
    format_keys = _validate_formats(request.formats)
    page_url = request.page_url or referer or GLOSS_PAGE_URL
    sentence_id = str(request.sentence_id)

    try:
        result = process_request(request.to_host_dict(), url_provider=static_url(page_url))
    except (KeyError, ValueError) as exc:
        raise HTTPException(
            status_code=422,
            detail="Malformed request: missing or invalid {}".format(exc),
        )
    except Exception:
        logger.exception("Formatting failed for sentence %s", sentence_id)
        raise HTTPException(status_code=500, detail="Formatting failed")

    latex = convert_to_latex(result)
    blocks = build_display_blocks(result, latex)
    result_board.publish(sentence_id, blocks)
    logger.info("Formatted sentence %s of story %s", sentence_id, result.story_id)

    return FormatResponse(
        sentence_id=sentence_id,
        story_id=result.story_id,
        title=result.title,
        sentence_url=result.sentence_url,
        latex=latex,
        blocks=blocks,
        outputs=_run_formatters(result, format_keys),
    )


# ---------------------------------------------------------------------------
# Endpoints: Results
# ---------------------------------------------------------------------------


@app.get(
    "/results/{sentence_id}",
    response_class=HTMLResponse,
    tags=["results"],
    summary="Show the displayed result for a sentence",
    description="Returns the result container as HTML <pre> blocks.",
    responses={404: {"model": ErrorResponse, "description": "No result for this sentence"}},
)
def get_result(sentence_id: str) -> HTMLResponse:
    container = result_board.find_container(sentence_id)
    if container is None:
        raise HTTPException(status_code=404, detail="No result for sentence {}".format(sentence_id))
    return HTMLResponse(container.to_html())


@app.delete(
    "/results",
    status_code=204,
    tags=["results"],
    summary="Close all results",
    description="Discards every displayed result (the close button).",
)
def close_results() -> Response:
    close(result_board)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
    description=(
        "Returns all supported output formats with their identifiers, "
        "human-readable names, and file suffixes."
    ),
)
def list_formats() -> List[FormatInfo]:
    # Format an empty result to read each formatter's suffix
    dummy = FormattedResult(story_id="", title="", sentence_url="")
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        outputs = formatter.format(dummy)
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=outputs[0].suffix if outputs else "",
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for load balancers and orchestrators.",
)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Entry point for the gloss-api console script."""
    import uvicorn

    configure_logging()
    uvicorn.run(app, host=host or GLOSS_API_HOST, port=port or GLOSS_API_PORT)
