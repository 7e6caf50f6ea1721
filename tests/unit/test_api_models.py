"""Tests for airelay.api.models: Pydantic request models."""

from __future__ import annotations

from airelay.api.models import PromptRequest, TopicRequest, VideoRequest


class TestRequestModels:
    def test_all_fields_optional(self):
        """Missing input is reported by the route, not by schema validation."""
        assert PromptRequest().prompt is None
        assert TopicRequest().topic is None
        assert VideoRequest().url is None
        assert PromptRequest().model is None

    def test_values_preserved(self):
        req = PromptRequest(prompt="  keep my spacing  ", model="qwen/qwen3-32b:free")
        assert req.prompt == "  keep my spacing  "
        assert req.model == "qwen/qwen3-32b:free"

    def test_unknown_fields_ignored(self):
        req = TopicRequest.model_validate({"topic": "Entropy", "temperature": 2})
        assert req.topic == "Entropy"
        assert not hasattr(req, "temperature")

    def test_model_not_validated_here(self):
        """Allow-list enforcement belongs to the dispatcher."""
        assert VideoRequest(url="x", model="anything").model == "anything"
