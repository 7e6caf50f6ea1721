"""Shared pytest fixtures for AI Relay tests."""

import shutil
import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from airelay.api.endpoints import Services
from airelay.core.artifacts import ArtifactStore
from airelay.core.config import RelayConfig
from airelay.core.dispatch import Dispatcher
from airelay.core.transcripts import TranscriptFetcher


def make_completion(text: str | None) -> SimpleNamespace:
    """Build an object shaped like an OpenAI chat completion.

    Args:
        text: Content of the first (and only) choice.

    Returns:
        Object exposing ``choices[0].message.content``.
    """
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=text))])


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> RelayConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        RelayConfig instance for testing
    """
    return RelayConfig(
        _env_file=None,
        provider_api_key="test-key",
        uploads_dir=str(temp_dir / "uploads"),
        generated_dir=str(temp_dir / "generated"),
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """OpenAI client stand-in whose completions return ``"Model answer."``."""
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion("Model answer.")
    return client


@pytest.fixture
def mock_transcripts() -> MagicMock:
    """Transcript fetcher stand-in returning no segments by default."""
    fetcher = MagicMock(spec=TranscriptFetcher)
    fetcher.fetch.return_value = []
    return fetcher


@pytest.fixture
def services(
    test_config: RelayConfig,
    mock_client: MagicMock,
    mock_transcripts: MagicMock,
) -> Services:
    """Request collaborators wired to mocks and temporary directories."""
    return Services(
        dispatcher=Dispatcher(mock_client, vision_model_id=test_config.vision_model_id),
        transcripts=mock_transcripts,
        artifacts=ArtifactStore(test_config.generated_dir),
        uploads=ArtifactStore(test_config.uploads_dir),
    )


@pytest.fixture
def test_client(
    services: Services,
    test_config: RelayConfig,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[TestClient, None, None]:
    """TestClient whose routes receive the mocked collaborators.

    The lifespan runs against ``test_config`` and ``get_services`` is
    overridden, so no request leaves the process and the shell environment
    does not matter.
    """
    from airelay.api import main

    monkeypatch.setattr(main, "config", test_config)
    main.app.dependency_overrides[main.get_services] = lambda: services
    try:
        with TestClient(main.app) as client:
            yield client
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture(name="make_completion")
def make_completion_fixture():
    """Expose :func:`make_completion` to test modules."""
    return make_completion
