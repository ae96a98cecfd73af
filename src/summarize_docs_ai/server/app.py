"""
HTTP boundary for summarize-docs-ai.

Three proxy endpoints (summarize, grammar check, text extraction) plus
health and provider listing. Every SummarizerError is rendered as
``{"error": message}`` with the error's status code.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from summarize_docs_ai import __version__
from summarize_docs_ai.config import Settings
from summarize_docs_ai.errors import (
    FileTooLarge,
    MissingCredentials,
    MissingText,
    SummarizerError,
    UpstreamError,
)
from summarize_docs_ai.extract import extract_text
from summarize_docs_ai.http_client import HttpClientFactory
from summarize_docs_ai.llm import available_providers, get_adapter_class
from summarize_docs_ai.models import ProviderCredentials, SummarizationRequest
from summarize_docs_ai.prompts import apply_quick_action
from summarize_docs_ai.router import ProviderRouter
from summarize_docs_ai.server.schemas import (
    ErrorOut,
    ExtractTextOut,
    GrammarCheckIn,
    GrammarCheckOut,
    ProviderInfo,
    SummarizeIn,
    SummarizeOut,
)
from summarize_docs_ai.service import SummarizerService

logger = logging.getLogger(__name__)


def get_service(request: Request) -> SummarizerService:
    return request.app.state.service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings. Defaults are used if None.
        transport: Optional httpx transport for the shared upstream client.

    Returns:
        Configured FastAPI app. The upstream client lives for the app's lifespan.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client = HttpClientFactory.client(settings.router, transport=transport)
        app.state.service = SummarizerService(ProviderRouter(settings, client=client))
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="summarize-docs-ai", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    if settings.server.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    @app.exception_handler(SummarizerError)
    async def handle_summarizer_error(request: Request, exc: SummarizerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"Invalid request: {location} {first.get('msg', '')}".strip()
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/health")
    async def health():
        return {"ok": True, "version": __version__}

    @app.get("/providers", response_model=list[ProviderInfo])
    async def providers(app_settings: Settings = Depends(get_settings)):
        out = []
        for provider_id in available_providers():
            adapter_cls = get_adapter_class(provider_id)
            vendor = app_settings.providers.for_provider(provider_id)
            out.append(
                ProviderInfo(
                    id=provider_id,
                    model=vendor.model if vendor else adapter_cls.DEFAULT_MODEL,
                    endpoint=vendor.base_url if vendor else adapter_cls.DEFAULT_URL,
                )
            )
        return out

    @app.post(
        "/summarize",
        response_model=SummarizeOut,
        responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    )
    async def summarize(
        payload: SummarizeIn,
        service: SummarizerService = Depends(get_service),
    ):
        api_settings = payload.api_settings
        if api_settings is None or not (api_settings.api_key or "").strip():
            raise MissingCredentials()

        mode, instructions = apply_quick_action(
            payload.mode or "", payload.custom_instructions, payload.quick_action
        )

        request = SummarizationRequest(
            text=payload.text,
            mode=mode,
            length_factor=payload.length,
            custom_instructions=instructions,
        )
        credentials = ProviderCredentials(
            provider=api_settings.provider or "",
            api_key=api_settings.api_key or "",
        )
        result = await service.summarize(request, credentials)
        return SummarizeOut(summary=result.text)

    @app.post(
        "/grammar-check",
        response_model=GrammarCheckOut,
        responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    )
    async def grammar_check(
        payload: GrammarCheckIn,
        service: SummarizerService = Depends(get_service),
    ):
        if not payload.text.strip():
            raise MissingText()
        if not (payload.api_key or "").strip():
            raise MissingCredentials("No API key provided")

        credentials = ProviderCredentials(
            provider=payload.provider or "",
            api_key=payload.api_key or "",
        )
        try:
            result = await service.check_grammar(payload.text, credentials)
        except UpstreamError as e:
            raise SummarizerError("Failed to check grammar", e.details) from e
        return GrammarCheckOut(result=result.text)

    @app.post(
        "/extract-text",
        response_model=ExtractTextOut,
        responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
    )
    async def extract_text_endpoint(
        file: UploadFile | None = File(default=None),
        app_settings: Settings = Depends(get_settings),
    ):
        if file is None:
            return JSONResponse(status_code=400, content={"error": "No file provided"})

        filename = file.filename or ""
        max_bytes = app_settings.extraction.max_upload_bytes
        if file.size is not None and file.size > max_bytes:
            raise FileTooLarge(filename, file.size, max_bytes)

        data = await file.read()
        result = await extract_text(data, filename, file.content_type, max_bytes=max_bytes)
        return ExtractTextOut(text=result.text)

    return app


def serve(settings: Settings | None = None, host: str | None = None, port: int | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    settings = settings or Settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.logging.level.lower(),
    )
