"""Per-request transient files.

Two kinds of file touch the disk while a request is in flight:

- **Generated artifacts**: the code-generation route writes the model's
  output to a file and streams it back as a download.
- **Staged uploads**: the image route stages the uploaded bytes before
  encoding them for the provider.

Both live under a unique ``uuid4`` name, so concurrent requests never share a
path, and both are removed on every exit path.  :meth:`ArtifactStore.staged`
scopes a file to a ``with`` block; :class:`TransientFileResponse` hands a
written artifact to Starlette and deletes it once the transfer has finished,
whether or not it succeeded.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from starlette.responses import FileResponse
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)


def discard(path: Path) -> None:
    """Delete *path* if it exists."""
    path.unlink(missing_ok=True)
    logger.debug("Removed transient file %s", path.name)


class ArtifactStore:
    """Allocate and clean up uniquely named files in one directory.

    Args:
        directory: Where files are written.  Created if missing.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def new_path(self, suffix: str = "") -> Path:
        return self.directory / f"{uuid.uuid4().hex}{suffix}"

    def write_text(self, content: str, suffix: str = "") -> Path:
        """Write *content* verbatim to a fresh path and return it.

        The caller owns the returned file.  A partially written file is
        removed before the error propagates.
        """
        path = self.new_path(suffix)
        try:
            path.write_text(content, encoding="utf-8", newline="")
        except Exception:
            discard(path)
            raise
        return path

    @contextmanager
    def staged(self, data: bytes, suffix: str = "") -> Iterator[Path]:
        """Write *data* to a fresh path for the duration of a ``with`` block.

        Yields:
            Path of the staged file.  It is deleted when the block exits,
            including when it exits with an exception.
        """
        path = self.new_path(suffix)
        try:
            path.write_bytes(data)
            yield path
        finally:
            discard(path)


class TransientFileResponse(FileResponse):
    """A file download whose file is deleted after the response is sent."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            discard(Path(self.path))
