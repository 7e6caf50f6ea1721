"""Core functionality for the AI Relay.

- **allowlist**: the closed set of selectable upstream models
- **dispatch**: allow-list enforcement and the single provider call
- **transcripts**: YouTube transcript retrieval
- **artifacts**: uniquely named transient files with guaranteed cleanup
- **errors**: caller-facing error taxonomy
- **config**: configuration via Pydantic Settings (AIRELAY_ prefix)
"""

from airelay.core.allowlist import ALLOWED_MODELS, is_allowed
from airelay.core.config import RelayConfig, config
from airelay.core.dispatch import Dispatcher

__all__ = [
    "ALLOWED_MODELS",
    "Dispatcher",
    "RelayConfig",
    "config",
    "is_allowed",
]
