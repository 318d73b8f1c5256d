import asyncio
import logging
from typing import AsyncIterator, Dict, List, Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from annotator import __version__, config
from annotator.errors import AnnotatorError, BadRequestError
from annotator.fonts import registered_font
from annotator.image_ops import render_pass
from annotator.layouts import ANIMAL_LAYOUT, BRAIN_LAYOUT
from annotator.models import (
    ErrorResponse,
    GenerateImagesRequest,
    GenerateImagesResponse,
    HealthResponse,
)
from annotator.resources import fetch_resources

# --- Logging ---
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger("annotator.api")

BAD_REQUEST_MESSAGE = 'Request body must contain "animalData" and "brainData" objects.'
GENERATION_FAILED_MESSAGE = "Failed to generate images."

# --- App Init ---
app = FastAPI(title="Percentage Annotator", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Dependencies ---
async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(follow_redirects=True, timeout=config.FETCH_TIMEOUT) as client:
        yield client


# --- Error Envelopes ---
def _error_response(
    status_code: int,
    error: str,
    details: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _summarize_validation_errors(errors: List[dict]) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location or 'body'}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Covers 405 for methods other than POST and 404 for unknown paths.
    return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = BadRequestError(BAD_REQUEST_MESSAGE)
    return _error_response(error.status_code, str(error), _summarize_validation_errors(exc.errors()))


# --- Endpoints ---
@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post(
    "/api/generate-images",
    response_model=GenerateImagesResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_images_endpoint(
    payload: GenerateImagesRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Annotate the animal and brain backgrounds with the given percentages.

    The typeface and both backgrounds are downloaded in parallel, the
    typeface is registered for this request only, and both images are
    rendered concurrently. Either both images are returned or the request
    fails with a single error; the temporary typeface is removed in every
    case.
    """
    try:
        bundle = await fetch_resources(client)
        with registered_font(bundle.font) as font:
            results = await asyncio.gather(
                run_in_threadpool(
                    render_pass, "animal", bundle.animal_background,
                    payload.animalData.as_mapping(), ANIMAL_LAYOUT, font.path,
                ),
                run_in_threadpool(
                    render_pass, "brain", bundle.brain_background,
                    payload.brainData.as_mapping(), BRAIN_LAYOUT, font.path,
                ),
                return_exceptions=True,
            )
        # Both passes have finished here; report the first failure, if any.
        for result in results:
            if isinstance(result, BaseException):
                raise result
        animal_image, brain_image = results
    except AnnotatorError as exc:
        logger.exception("Image generation failed")
        return _error_response(exc.status_code, GENERATION_FAILED_MESSAGE, str(exc))
    except Exception as exc:
        logger.exception("Image generation failed")
        return _error_response(500, GENERATION_FAILED_MESSAGE, str(exc) or "An unknown error occurred.")

    return GenerateImagesResponse(animalImage=animal_image, brainImage=brain_image)
