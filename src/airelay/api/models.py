"""Pydantic request models for the AI Relay API.

The input fields are declared optional on purpose: an absent or blank field
is reported by the route as a ``MissingInput`` error (400 with
``{"error": ...}``) rather than as a schema validation failure, so every
endpoint reports missing input the same way.

Models
------
PromptRequest
    Payload for the prompt-driven endpoints (code generation, math
    reasoning, coding task, chat).
TopicRequest
    Payload for ``POST /api/explainer``.
VideoRequest
    Payload for ``POST /api/youtube-summarize``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RelayRequest(BaseModel):
    """Fields shared by every JSON endpoint.

    Attributes:
        model: Upstream model id.  ``None`` selects the endpoint default.
    """

    model: str | None = Field(
        default=None,
        description="Upstream model id from the allow-list.  Omit for the endpoint default.",
    )


class PromptRequest(RelayRequest):
    """Request body carrying a free-text ``prompt``."""

    prompt: str | None = Field(
        default=None,
        description="User prompt sent as the user message.",
    )


class TopicRequest(RelayRequest):
    """Request body carrying a ``topic`` to explain."""

    topic: str | None = Field(
        default=None,
        description="Topic to explain in simple terms.",
    )


class VideoRequest(RelayRequest):
    """Request body carrying a YouTube ``url``."""

    url: str | None = Field(
        default=None,
        description="YouTube video URL or 11-character video id.",
    )
