"""Endpoint definitions for the AI Relay.

Six of the seven AI endpoints share one shape::

    validate input -> pick model -> system + user message -> dispatch -> wrap result

:class:`Endpoint` implements that flow once and is parameterised by the
request field it reads, its default model, its system instruction and the
response field it writes.  Two hook methods carry the endpoint-specific
steps:

- :meth:`Endpoint.user_content` turns the validated input into the user
  message (the YouTube summarizer fetches a transcript here).
- :meth:`Endpoint.respond` turns the model's text into the response (the
  code generator writes a downloadable file here).

Image description does not fit the two-message shape; it has its own
:class:`ImageEndpoint` that talks to the vision path directly.

Every handler raises only :class:`~airelay.core.errors.RelayError`
subclasses.  Anything unexpected is logged and re-raised as
:class:`~airelay.core.errors.InternalFailure`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import UploadFile

from airelay.api import prompts
from airelay.api.models import RelayRequest
from airelay.core.allowlist import is_allowed
from airelay.core.artifacts import ArtifactStore, TransientFileResponse, discard
from airelay.core.dispatch import Dispatcher, compose_messages, to_data_uri
from airelay.core.errors import (
    InternalFailure,
    MissingInput,
    NoTranscript,
    RelayError,
    UpstreamFailure,
)
from airelay.core.transcripts import TranscriptFetcher, join_transcript

logger = logging.getLogger(__name__)

_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass(frozen=True)
class Services:
    """Collaborators a handler needs for one request."""

    dispatcher: Dispatcher
    transcripts: TranscriptFetcher
    artifacts: ArtifactStore
    uploads: ArtifactStore


class Endpoint:
    """A prompt-in, text-out endpoint.

    Args:
        path: Route path, e.g. ``/api/chat``.
        field: Name of the required request field.
        default_model: Model used when the request omits ``model``.  Must
            be in the allow-list.
        system_prompt: Fixed system instruction.
        response_field: Key of the JSON response holding the model's text.
            Not needed when a subclass overrides :meth:`respond`.
        missing_message: Error message when ``field`` is absent or blank.
    """

    def __init__(
        self,
        *,
        path: str,
        field: str,
        default_model: str,
        system_prompt: str,
        missing_message: str,
        response_field: str | None = None,
    ) -> None:
        if not is_allowed(default_model):
            raise ValueError(f"Default model {default_model!r} for {path} is not allowed")
        if response_field is None and type(self).respond is Endpoint.respond:
            raise ValueError(f"{path} needs a response_field")
        self.path = path
        self.field = field
        self.default_model = default_model
        self.system_prompt = system_prompt
        self.response_field = response_field
        self.missing_message = missing_message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r}, default_model={self.default_model!r})"

    def require_input(self, payload: RelayRequest) -> str:
        """Return the required field's value, or raise :class:`MissingInput`."""
        value = getattr(payload, self.field, None)
        if value is None or not value.strip():
            raise MissingInput(self.missing_message)
        return value

    def handle(self, payload: RelayRequest, services: Services) -> Any:
        """Run the full request flow for *payload*.

        Raises:
            RelayError: Any failure, already mapped to the caller-facing
                taxonomy.
        """
        value = self.require_input(payload)
        model_id = payload.model or self.default_model

        try:
            content = self.user_content(value, services)
            text = services.dispatcher.dispatch(
                model_id,
                compose_messages(self.system_prompt, content),
            )
            return self.respond(text, services)
        except RelayError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error in %s", self.path)
            raise InternalFailure() from exc

    def user_content(self, value: str, services: Services) -> str:
        return value

    def respond(self, text: str, services: Services) -> Any:
        return {self.response_field: text}


class TranscriptSummaryEndpoint(Endpoint):
    """Summarize a YouTube video from its transcript."""

    failure_message = (
        "Failed to summarize YouTube video. Please ensure the URL is correct and the video "
        "has a transcript."
    )
    no_transcript_message = (
        "Could not fetch transcript for this video. It might have transcripts disabled."
    )

    def user_content(self, value: str, services: Services) -> str:
        try:
            segments = services.transcripts.fetch(value)
        except RelayError:
            raise
        except Exception as exc:
            logger.exception("Transcript fetch failed for %s", value)
            raise UpstreamFailure(self.failure_message) from exc

        if not segments:
            raise NoTranscript(self.no_transcript_message)
        return f"Transcript: {join_transcript(segments)}"


class CodeArtifactEndpoint(Endpoint):
    """Return the generated markup as a downloadable ``index.html``."""

    download_name = "index.html"
    media_type = "text/html"

    def respond(self, text: str, services: Services) -> TransientFileResponse:
        path = services.artifacts.write_text(text, suffix=".html")
        try:
            return TransientFileResponse(
                path,
                filename=self.download_name,
                media_type=self.media_type,
            )
        except Exception:
            discard(path)
            raise


class ImageEndpoint:
    """Describe an uploaded image with the vision model."""

    path = "/api/image-to-text"
    response_field = "description"
    missing_message = "Image file is required."
    failure_message = "Failed to process image."

    def handle(self, upload: UploadFile | None, services: Services) -> dict[str, str]:
        """Stage the upload, send it to the vision model, and clean up.

        The staged file is removed whether the provider call succeeds or
        fails.

        Raises:
            MissingInput: No file was uploaded.
            UpstreamFailure: The provider call failed.
            InternalFailure: Reading or staging the file failed.
        """
        if upload is None or not upload.filename:
            raise MissingInput(self.missing_message)

        mime_type = upload.content_type or "application/octet-stream"
        suffix = Path(upload.filename).suffix
        if not _SAFE_SUFFIX.match(suffix):
            suffix = ""

        try:
            with services.uploads.staged(upload.file.read(), suffix) as staged_path:
                data_uri = to_data_uri(staged_path.read_bytes(), mime_type)
                description = services.dispatcher.describe_image(
                    data_uri,
                    prompts.IMAGE_DESCRIPTION,
                )
        except UpstreamFailure as exc:
            raise UpstreamFailure(self.failure_message) from exc
        except Exception as exc:
            logger.exception("Image processing error")
            raise InternalFailure(self.failure_message) from exc

        return {self.response_field: description}


# ---------------------------------------------------------------------------
# Endpoint instances.
# ---------------------------------------------------------------------------

GENERATE_CODE = CodeArtifactEndpoint(
    path="/api/generate-code",
    field="prompt",
    default_model="deepseek/deepseek-chat:free",
    system_prompt=prompts.CODE_GENERATION,
    missing_message="Prompt is required.",
)

MATH_REASONING = Endpoint(
    path="/api/math-reasoning",
    field="prompt",
    default_model="microsoft/phi-4-reasoning-plus:free",
    system_prompt=prompts.MATH_REASONING,
    response_field="reasoning",
    missing_message="Math problem prompt is required.",
)

CODING_TASK = Endpoint(
    path="/api/coding-task",
    field="prompt",
    default_model="thudm/glm-z1-32b:free",
    system_prompt=prompts.CODING_TASK,
    response_field="solution",
    missing_message="Coding task prompt is required.",
)

YOUTUBE_SUMMARY = TranscriptSummaryEndpoint(
    path="/api/youtube-summarize",
    field="url",
    default_model="deepseek/deepseek-chat-v3-0324:free",
    system_prompt=prompts.VIDEO_SUMMARY,
    response_field="summary",
    missing_message="YouTube URL is required.",
)

CHAT = Endpoint(
    path="/api/chat",
    field="prompt",
    default_model="qwen/qwen3-32b:free",
    system_prompt=prompts.CHAT,
    response_field="response",
    missing_message="Prompt is required for chat.",
)

EXPLAINER = Endpoint(
    path="/api/explainer",
    field="topic",
    default_model="deepseek/deepseek-chat:free",
    system_prompt=prompts.EXPLAINER,
    response_field="explanation",
    missing_message="Topic is required.",
)

IMAGE_TO_TEXT = ImageEndpoint()

TEXT_ENDPOINTS: tuple[Endpoint, ...] = (
    GENERATE_CODE,
    MATH_REASONING,
    CODING_TASK,
    YOUTUBE_SUMMARY,
    CHAT,
    EXPLAINER,
)
