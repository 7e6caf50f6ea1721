"""Provider dispatch for the AI Relay.

This module provides :class:`Dispatcher`, the single point through which every
route reaches the upstream chat-completion provider.  The provider speaks the
OpenAI chat-completions protocol (OpenRouter by default), so the official
``openai`` client is used with a custom base URL.

Key Responsibilities
--------------------
- **Allow-list enforcement**: :meth:`Dispatcher.dispatch` rejects any model id
  outside :data:`~airelay.core.allowlist.ALLOWED_MODELS` before the network is
  touched.
- **Single call, no retries**: exactly one ``chat.completions.create`` request
  per dispatch, with the transport's default timeout.
- **Uniform failure**: every provider-side exception is logged with its
  traceback and re-raised as :class:`~airelay.core.errors.UpstreamFailure`
  carrying a generic message.
- **Vision path**: :meth:`Dispatcher.describe_image` sends one user message
  with an image part and a text part to the configured vision model.  It
  bypasses the allow-list.

Usage
-----
::

    from airelay.core.config import config
    from airelay.core.dispatch import Dispatcher, build_client, compose_messages

    dispatcher = Dispatcher(build_client(config), vision_model_id=config.vision_model_id)
    text = dispatcher.dispatch(
        "qwen/qwen3-32b:free",
        compose_messages("You are a helpful assistant.", "Hello!"),
    )
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from openai import OpenAI

from airelay.core import allowlist
from airelay.core.errors import InvalidModel, UpstreamFailure

if TYPE_CHECKING:
    from airelay.core.config import RelayConfig

logger = logging.getLogger(__name__)

Message = dict[str, Any]

UPSTREAM_FAILURE_MESSAGE = "Failed to get response from AI model."
DEFAULT_VISION_MODEL = "qwen/qwen3-32b:free"


# ---------------------------------------------------------------------------
# Message helpers.
# ---------------------------------------------------------------------------


def system_message(text: str) -> Message:
    return {"role": "system", "content": text}


def user_message(content: str | list[dict[str, Any]]) -> Message:
    return {"role": "user", "content": content}


def compose_messages(system: str, user: str) -> list[Message]:
    """Build the two-message list every text endpoint sends.

    Args:
        system: Fixed, endpoint-specific instruction.
        user: Caller-supplied content.

    Returns:
        ``[system_message, user_message]`` in conversation order.
    """
    return [system_message(system), user_message(user)]


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 ``data:`` URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def build_client(config: RelayConfig) -> OpenAI | None:
    """Create an OpenAI client pointed at the configured provider.

    The site identification headers are only sent when configured.  Without
    an API key no client is built; the service still starts and every
    provider call fails with :class:`~airelay.core.errors.UpstreamFailure`.

    Args:
        config: Relay configuration.

    Returns:
        A ready-to-use :class:`openai.OpenAI` client, or ``None`` when no
        API key is configured.
    """
    if not config.provider_api_key:
        logger.warning("No provider API key configured; provider calls will be rejected.")
        return None

    headers: dict[str, str] = {}
    if config.site_url:
        headers["HTTP-Referer"] = config.site_url
    if config.site_name:
        headers["X-Title"] = config.site_name

    return OpenAI(
        base_url=config.provider_base_url,
        api_key=config.provider_api_key,
        default_headers=headers or None,
    )


# ---------------------------------------------------------------------------
# Dispatcher.
# ---------------------------------------------------------------------------


class Dispatcher:
    """Validate model ids and forward message lists to the provider.

    Args:
        client: An ``openai.OpenAI`` client (or any object exposing
            ``chat.completions.create``).  ``None`` means no provider is
            configured.
        allowed: Replacement allow-list.  ``None`` uses
            :func:`airelay.core.allowlist.is_allowed`.
        vision_model_id: Model used by :meth:`describe_image`.
    """

    def __init__(
        self,
        client: OpenAI | None,
        allowed: Sequence[str] | None = None,
        vision_model_id: str = DEFAULT_VISION_MODEL,
    ) -> None:
        self.client = client
        self._custom_allowed = None if allowed is None else frozenset(allowed)
        self.allowed: tuple[str, ...] = (
            allowlist.ALLOWED_MODELS if allowed is None else tuple(allowed)
        )
        self.vision_model_id = vision_model_id

    def is_allowed(self, model_id: str) -> bool:
        if self._custom_allowed is None:
            return allowlist.is_allowed(model_id)
        return model_id in self._custom_allowed

    def dispatch(self, model_id: str, messages: Sequence[Message]) -> str:
        """Send *messages* to *model_id* and return the first choice's text.

        Args:
            model_id: Requested model; must be in the allow-list.
            messages: Non-empty, ordered message list.

        Returns:
            The content of the first choice, unchanged.

        Raises:
            InvalidModel: *model_id* is not allowed.  No request is made.
            UpstreamFailure: The provider call failed for any reason.
            ValueError: *messages* is empty.
        """
        if not self.is_allowed(model_id):
            raise InvalidModel(self.allowed)
        if not messages:
            raise ValueError("messages must not be empty")

        return self._complete(model_id, list(messages))

    def describe_image(self, data_uri: str, instruction: str) -> str:
        """Ask the vision model to describe an image.

        Args:
            data_uri: The image encoded with :func:`to_data_uri`.
            instruction: Text sent alongside the image.

        Returns:
            The model's description.

        Raises:
            UpstreamFailure: The provider call failed for any reason.
        """
        content = [
            {"type": "image_url", "image_url": {"url": data_uri}},
            {"type": "text", "text": instruction},
        ]
        return self._complete(self.vision_model_id, [user_message(content)])

    def _complete(self, model_id: str, messages: list[Message]) -> str:
        if self.client is None:
            logger.error("Cannot call AI model %s: no provider API key configured", model_id)
            raise UpstreamFailure(UPSTREAM_FAILURE_MESSAGE)

        try:
            completion = self.client.chat.completions.create(
                model=model_id,
                messages=messages,
            )
            content = completion.choices[0].message.content
        except Exception as exc:
            logger.exception("Error calling AI model %s", model_id)
            raise UpstreamFailure(UPSTREAM_FAILURE_MESSAGE) from exc

        logger.debug("Model %s returned %d characters", model_id, len(content or ""))
        return content or ""
