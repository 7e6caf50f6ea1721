"""AI Relay - thin HTTP backend in front of an OpenAI-compatible LLM provider."""

__version__ = "1.0.0"
