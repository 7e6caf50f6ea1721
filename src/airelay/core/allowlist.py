"""Closed set of upstream model identifiers callers may select.

The list is fixed at import time.  ``ALLOWED_MODELS`` keeps a stable order so
error messages and the ``GET /api/models`` listing are deterministic; the
frozen set is used for membership tests.
"""

from __future__ import annotations

ALLOWED_MODELS: tuple[str, ...] = (
    "microsoft/phi-4-reasoning-plus:free",
    "thudm/glm-z1-32b:free",
    "deepseek/deepseek-chat-v3-0324:free",
    "deepseek/deepseek-chat:free",
    "qwen/qwen3-32b:free",
)

_ALLOWED_SET: frozenset[str] = frozenset(ALLOWED_MODELS)


def is_allowed(model_id: str) -> bool:
    """Return ``True`` if *model_id* is a permitted upstream model."""
    return model_id in _ALLOWED_SET
