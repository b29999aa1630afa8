from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.errors import ModelOutputError, SchemaError
from app.schemas.extract import ExtractErrorResponse, ExtractRequest
from app.services.extraction import extract_with_schema
from app.services.generation import GeminiClient, GenerationClient
from app.services.schema_translator import translate
from app.settings import Settings, load_settings


def _build_generation_client(settings: Settings) -> GenerationClient | None:
    # No key -> the app still starts; POST / answers 503 until one is configured.
    if not settings.google_api_key:
        print("[STARTUP] LLM is not configured (missing GOOGLE_API_KEY); extraction requests will be rejected")
        return None
    print(f"[STARTUP] Gemini client ready (model={settings.llm_model})")
    return GeminiClient(settings.google_api_key, settings.llm_model, debug=settings.debug)


def get_generation_client(app: FastAPI) -> GenerationClient:
    client = app.state.generation_client
    if client is None:
        raise HTTPException(status_code=503, detail="LLM is not configured (missing GOOGLE_API_KEY).")
    return client


async def _model_output_error_handler(request: Request, exc: ModelOutputError) -> JSONResponse:
    # Retries are exhausted by the time this runs; surface the last failure.
    print(f"[EXTRACT] Extraction failed after retries: {exc}")
    body = ExtractErrorResponse(detail=str(exc), kind=exc.kind)
    return JSONResponse(status_code=502, content=body.model_dump())


def create_app(
    settings: Settings | None = None,
    generation_client: GenerationClient | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="Structured Text Extractor")
    app.state.settings = settings
    app.state.generation_client = (
        generation_client if generation_client is not None else _build_generation_client(settings)
    )

    allow_all = "*" in settings.cors_allow_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        # Browsers reject credentials with a wildcard origin.
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ModelOutputError, _model_output_error_handler)

    @app.post("/")
    async def extract_structured(body: ExtractRequest, request: Request) -> Any:
        """
        Extract data shaped like `body.format` from `body.input`.

        Returns the validated value as-is (same shape as `format`). The body is
        validated and `format` translated before the model client is looked up.
        """
        print(f"[EXTRACT] Processing request: {len(body.input)} chars, {len(body.format)} top-level fields")
        try:
            schema = translate(body.format, max_depth=settings.schema_max_depth)
        except SchemaError as e:
            raise HTTPException(status_code=400, detail=str(e))

        client = get_generation_client(request.app)
        return await extract_with_schema(
            body.input,
            body.format,
            schema,
            client,
            retries=settings.max_retries,
            debug=settings.debug,
        )

    return app


app = create_app()
