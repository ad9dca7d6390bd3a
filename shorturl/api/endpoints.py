"""
FastAPI Endpoints for the Short URL Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Reading the submission from the request body
- Rate limiting
- Turning service errors into JSON error payloads
- Delegating to service layer

Error payloads are returned with HTTP 200, matching the public API contract:
{"error": "invalid url"}, {"error": "Wrong format"} and
{"error": "No short URL found for the given input"}.
"""

import logging
from typing import Optional, Union

from fastapi import APIRouter, Request, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shorturl.api.schemas import ErrorResponse, HelloResponse, ShortenResponse
from shorturl.core.exceptions import DatabaseError, URLShortenerException
from shorturl.core.rate_limit import limiter, RATE_LIMITS
from shorturl.core.registry_manager import get_registry, get_resolver
from shorturl.core.setting import settings
from shorturl.services.hostname_resolver import HostnameResolver
from shorturl.services.redirect_service import RedirectService
from shorturl.services.registry import Registry
from shorturl.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_submitted_url(request: Request) -> Optional[str]:
    """
    Extract the `url` field from a form-encoded, multipart or JSON body.

    Returns:
        The field value if present and a string, None otherwise
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            payload = await request.json()
            value = payload.get("url") if isinstance(payload, dict) else None
        else:
            form = await request.form()
            value = form.get("url")
    except (ValueError, StarletteHTTPException) as e:
        logger.info(f"Unreadable submission body: {e}")
        return None

    return value if isinstance(value, str) else None


@router.get("/api/hello", response_model=HelloResponse)
async def hello() -> HelloResponse:
    return HelloResponse(greeting="hello API")


@router.post(
    "/api/shorturl",
    response_model=Union[ShortenResponse, ErrorResponse],
    summary="Create a short URL",
    description="Registers a URL (or finds its existing registration) and returns its numeric short URL"
)
@limiter.limit(RATE_LIMITS["shorten"])
async def create_short_url(
    request: Request,  # Required for rate limiting (slowapi expects parameter named 'request')
    registry: Registry = Depends(get_registry),
    resolver: HostnameResolver = Depends(get_resolver)
) -> Union[ShortenResponse, ErrorResponse]:
    """
    Create a new short URL from a submitted URL.

    Returns:
        ShortenResponse with original_url and short_url, or ErrorResponse
    """
    submitted_url = await read_submitted_url(request)
    url_service = URLShorteningService(
        registry,
        resolver,
        max_url_length=settings.MAX_URL_LENGTH
    )

    try:
        record = await url_service.create_short_url(submitted_url)
    except DatabaseError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except URLShortenerException as e:
        return ErrorResponse(error=e.public_message)

    return ShortenResponse(
        original_url=record.original_url,
        short_url=record.id
    )


@router.get(
    "/api/shorturl/{short_url}",
    response_model=ErrorResponse,
    responses={status.HTTP_302_FOUND: {"description": "Redirect to the original URL"}},
    summary="Redirect to original URL",
    description="Takes a numeric short URL and redirects to the original URL"
)
@limiter.limit(RATE_LIMITS["redirect"])
async def redirect_to_url(
    short_url: str,
    request: Request,
    registry: Registry = Depends(get_registry)
) -> Union[RedirectResponse, ErrorResponse]:
    """
    Redirect to the original URL for a given short URL.

    Args:
        short_url: The raw identifier segment from the path
        request: FastAPI Request object (for rate limiting)

    Returns:
        RedirectResponse (HTTP 302) to original URL, or ErrorResponse when
        the identifier is malformed or unknown
    """
    redirect_service = RedirectService(registry)

    try:
        original_url = await redirect_service.get_redirect_url(short_url)
    except DatabaseError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except URLShortenerException as e:
        return ErrorResponse(error=e.public_message)

    return RedirectResponse(
        url=original_url,
        status_code=status.HTTP_302_FOUND
    )
