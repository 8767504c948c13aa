import logging
import os
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from minilink.dependencies import get_store
from minilink.helpers import build_short_url
from minilink.models import ShortenRequest, ShortenResponse
from minilink.repository import URLStore
from minilink.services import (
    CodeGenerationFailed,
    RecordNotFound,
    findMatchingURL,
    generateCode,
)

logger = logging.getLogger(__name__)
router = APIRouter()

BASE_URL = os.getenv("BASE_URL")


# Helper
def bad_request(request: Request, exc: ValidationError) -> JSONResponse:
    detail = "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Rejected {request.method} {request.url.path}: {detail}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "detail": detail},
    )


# Routes
@router.get("/health")
def health_check(store: Annotated[URLStore, Depends(get_store)]):
    health_status = {"status": "healthy", "mappings": len(store)}
    logger.info("Health Check: OK")
    return JSONResponse(content=health_status, status_code=status.HTTP_200_OK)


@router.post("/shorten", response_model=ShortenResponse)
async def shorten(
    request: Request,
    store: Annotated[URLStore, Depends(get_store)],
):
    # Body is decoded as JSON whatever the Content-Type says.
    try:
        body = ShortenRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        return bad_request(request, exc)

    try:
        mapping = await run_in_threadpool(generateCode, store, body.url)
        base_url = BASE_URL or str(request.base_url)
        return ShortenResponse(short_url=build_short_url(base_url, mapping.code))

    except CodeGenerationFailed as exc:
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    except Exception as exc:
        logger.error(f"Error shortening URL: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )


@router.api_route(
    "/shorten",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def shorten_method_not_allowed(request: Request):
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={
            "error": "Method not allowed",
            "detail": f"Only POST requests are allowed, got {request.method}",
        },
        headers={"Allow": "POST"},
    )


@router.get("/{code:path}")
def redirect(
    store: Annotated[URLStore, Depends(get_store)],
    code: str,
):
    try:
        original_url = findMatchingURL(store, code)
        return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)

    except RecordNotFound as exc:
        return JSONResponse(
            status_code=404,
            content={"error": "Content not found", "detail": str(exc)},
        )

    except Exception as exc:
        logger.error(f"Error redirecting URL: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)},
        )
