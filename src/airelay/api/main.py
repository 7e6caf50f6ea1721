"""AI Relay: FastAPI Application.

This module is the single entry point for the web service.  It defines the
FastAPI ``app`` instance, all REST API routes, and the ``main()`` CLI function
that launches the uvicorn server.

Architecture
------------
Every AI route is a thin translation around one provider call:

- **Dispatch** goes through :class:`~airelay.core.dispatch.Dispatcher`,
  which enforces the model allow-list and maps provider errors to a generic
  failure.
- **Endpoint behaviour** (input field, default model, system instruction,
  response field) is declared once per route in :mod:`airelay.api.endpoints`.
- **Transient files** (generated code, staged uploads) live under unique
  per-request names and are deleted on every exit path.
- **Errors** are :class:`~airelay.core.errors.RelayError` subclasses rendered
  as ``{"error": message}`` by a single exception handler.

Route functions are plain ``def`` so FastAPI runs them in its threadpool; a
slow provider call never blocks unrelated requests.

Endpoints
---------
========  ===========================  =====================================
Method    Path                         Purpose
========  ===========================  =====================================
GET       ``/``                        Liveness text
GET       ``/api/models``              Allow-list and per-endpoint defaults
POST      ``/api/generate-code``       Generate an ``index.html`` download
POST      ``/api/math-reasoning``      Step-by-step math solution
POST      ``/api/coding-task``         Coding task solution
POST      ``/api/youtube-summarize``   Summarize a video transcript
POST      ``/api/chat``                General chat
POST      ``/api/image-to-text``       Describe an uploaded image
POST      ``/api/explainer``           Explain a topic simply
========  ===========================  =====================================

Usage
-----
CLI (installed entry point)::

    airelay

Direct invocation::

    python -m airelay.api.main
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from airelay import __version__
from airelay.api import endpoints
from airelay.api.endpoints import Services
from airelay.api.models import PromptRequest, RelayRequest, TopicRequest, VideoRequest
from airelay.core.allowlist import ALLOWED_MODELS
from airelay.core.artifacts import ArtifactStore
from airelay.core.config import config
from airelay.core.dispatch import Dispatcher, build_client
from airelay.core.errors import InvalidBody, RelayError
from airelay.core.transcripts import TranscriptFetcher

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the request collaborators and store them on ``app.state``.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.dispatcher = Dispatcher(
        build_client(config),
        vision_model_id=config.vision_model_id,
    )
    app.state.transcripts = TranscriptFetcher(languages=config.transcript_languages)
    app.state.artifacts = ArtifactStore(config.generated_dir)
    app.state.uploads = ArtifactStore(config.uploads_dir)
    logger.info("AI Relay ready (provider: %s).", config.provider_base_url)

    yield

    logger.info("AI Relay shutting down.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="AI Relay",
    description="Thin HTTP relay to an OpenAI-compatible chat-completion provider.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error rendering.
# ---------------------------------------------------------------------------


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body for %s: %s", request.url.path, exc.errors())
    error = InvalidBody()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def get_services(request: Request) -> Services:
    """Collect the collaborators built by :func:`lifespan`."""
    state = request.app.state
    return Services(
        dispatcher=state.dispatcher,
        transcripts=state.transcripts,
        artifacts=state.artifacts,
        uploads=state.uploads,
    )


_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def request_body(model: type[RelayRequest]) -> Callable[[Request], Awaitable[RelayRequest]]:
    """Build a dependency that parses the request body into *model*.

    JSON and form-encoded bodies are both accepted.  An empty body or a JSON
    ``null`` parses as an empty payload, so the endpoint reports the missing
    field itself instead of failing schema validation.

    Args:
        model: Request model for the endpoint.

    Returns:
        An async FastAPI dependency.

    Raises:
        InvalidBody: The body is not valid JSON, or does not fit *model*.
    """

    async def parse(request: Request) -> RelayRequest:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_CONTENT_TYPES):
            data = dict(await request.form())
        else:
            raw = await request.body()
            try:
                data = json.loads(raw) if raw.strip() else None
            except ValueError as exc:
                logger.debug("Rejected JSON body for %s: %s", request.url.path, exc)
                raise InvalidBody() from exc

        try:
            return model.model_validate({} if data is None else data)
        except ValidationError as exc:
            logger.debug("Rejected request body for %s: %s", request.url.path, exc.errors())
            raise InvalidBody() from exc

    return parse


prompt_body = request_body(PromptRequest)
topic_body = request_body(TopicRequest)
video_body = request_body(VideoRequest)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "AI Backend is running!"


@app.get("/api/models")
def list_models(services: Services = Depends(get_services)) -> dict:
    """Return the model allow-list and each endpoint's default model.

    Returns:
        Dictionary with ``models`` (allowed ids, in order), ``defaults``
        (route path to default model id) and ``vision_model``.
    """
    return {
        "models": list(ALLOWED_MODELS),
        "defaults": {endpoint.path: endpoint.default_model for endpoint in endpoints.TEXT_ENDPOINTS},
        "vision_model": services.dispatcher.vision_model_id,
    }


@app.post("/api/generate-code")
def generate_code(
    req: PromptRequest = Depends(prompt_body),
    services: Services = Depends(get_services),
):
    """Generate a self-contained HTML page and return it as ``index.html``."""
    return endpoints.GENERATE_CODE.handle(req, services)


@app.post("/api/math-reasoning")
def math_reasoning(
    req: PromptRequest = Depends(prompt_body),
    services: Services = Depends(get_services),
) -> dict:
    """Solve a math problem with step-by-step reasoning."""
    return endpoints.MATH_REASONING.handle(req, services)


@app.post("/api/coding-task")
def coding_task(
    req: PromptRequest = Depends(prompt_body),
    services: Services = Depends(get_services),
) -> dict:
    """Solve a coding task with explanation and complexity analysis."""
    return endpoints.CODING_TASK.handle(req, services)


@app.post("/api/youtube-summarize")
def youtube_summarize(
    req: VideoRequest = Depends(video_body),
    services: Services = Depends(get_services),
) -> dict:
    """Summarize a YouTube video from its transcript."""
    return endpoints.YOUTUBE_SUMMARY.handle(req, services)


@app.post("/api/chat")
def chat(
    req: PromptRequest = Depends(prompt_body),
    services: Services = Depends(get_services),
) -> dict:
    return endpoints.CHAT.handle(req, services)


@app.post("/api/image-to-text")
def image_to_text(
    image: UploadFile | None = File(None),
    services: Services = Depends(get_services),
) -> dict:
    """Describe an uploaded image (multipart field ``image``)."""
    return endpoints.IMAGE_TO_TEXT.handle(image, services)


@app.post("/api/explainer")
def explainer(
    req: TopicRequest = Depends(topic_body),
    services: Services = Depends(get_services),
) -> dict:
    return endpoints.EXPLAINER.handle(req, services)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~airelay.core.config.config` (which loads
    from ``AIRELAY_SERVER_HOST`` and ``AIRELAY_SERVER_PORT`` or ``PORT``).
    Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``airelay`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        "airelay.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
