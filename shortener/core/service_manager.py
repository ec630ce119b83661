"""
URL Service Manager

This module manages the process-wide URL shortening service instance.
The service is created once per application and shared across requests.

Design:
- One service per application, stored on app.state
- Created when the application is built, so it exists before any request
- Handlers receive it through the get_url_service dependency
"""

import logging
from typing import Set

from fastapi import FastAPI, Request

from shortener.core.setting import Settings
from shortener.services.code_generator import CodeGenerator
from shortener.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)


def reserved_route_codes(app: FastAPI) -> Set[str]:
    """
    Collect single-segment fixed paths (``/health``, ``/docs``, ...).

    A code equal to one of these would be shadowed by that route and
    could never be resolved.
    """
    codes = set()
    for route in app.routes:
        segment = getattr(route, "path", "").strip("/")
        if segment and "/" not in segment and "{" not in segment:
            codes.add(segment)
    return codes


def initialize_service(app: FastAPI, settings: Settings) -> URLShorteningService:
    """
    Build the URL shortening service and attach it to ``app``.

    Call after every route is registered so fixed paths are reserved.

    Returns:
        The existing service if one was already attached
    """
    existing = getattr(app.state, "url_service", None)
    if existing is not None:
        logger.warning("URL service already initialized")
        return existing

    service = URLShorteningService(
        code_length=settings.SHORT_CODE_LENGTH,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
        generator=CodeGenerator(alphabet=settings.SHORT_CODE_ALPHABET),
        max_url_length=settings.MAX_URL_LENGTH,
        reserved_codes=reserved_route_codes(app),
    )
    app.state.url_service = service

    logger.info(
        f"URL service initialized: "
        f"code_length={settings.SHORT_CODE_LENGTH}, "
        f"max_attempts={settings.SHORT_CODE_MAX_ATTEMPTS}, "
        f"alphabet_size={len(settings.SHORT_CODE_ALPHABET)}"
    )
    return service


def get_url_service(request: Request) -> URLShorteningService:
    """
    Dependency function for FastAPI to get the shared service.

    Usage in FastAPI:
        @router.get("/endpoint")
        async def endpoint(service: URLShorteningService = Depends(get_url_service)):
            ...
    """
    return request.app.state.url_service


def shutdown_service(app: FastAPI) -> None:
    """Log final counters. State is in memory and is discarded with the process."""
    service = getattr(app.state, "url_service", None)
    if service is None:
        return
    stats = service.get_stats()
    logger.info(
        f"Shutting down URL service: "
        f"total_urls={stats['total_urls']}, total_visits={stats['total_visits']}"
    )
