"""Chat adapter abstraction — pluggable hosted chat model for the AI Study Companion."""

import os

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

_chat_instance = None
_missing_key_warned = False


def get_chat_service():
    """Return the configured chat adapter (singleton), or None when unavailable.

    Uses the Gemini adapter by default, which needs GEMINI_API_KEY (or
    API_KEY) in the environment. Set COMPANION_ADAPTER=fake for a
    deterministic local adapter.
    """
    global _chat_instance, _missing_key_warned
    if _chat_instance is None:
        adapter = os.environ.get("COMPANION_ADAPTER", "gemini")
        if adapter == "fake":
            from companion.fake_adapter import FakeChat

            _chat_instance = FakeChat()
        elif adapter == "gemini":
            api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
            if not api_key:
                if not _missing_key_warned:
                    logger.warning("GEMINI_API_KEY not set, AI Companion features will be unavailable")
                    _missing_key_warned = True
                return None

            from companion.gemini_adapter import GeminiChat

            _chat_instance = GeminiChat(
                api_key=api_key,
                model_name=os.environ.get("COMPANION_MODEL", DEFAULT_MODEL),
            )
        else:
            raise ValueError(f"Unknown companion adapter: {adapter}")
    return _chat_instance


def reset_chat_service():
    """Reset the chat adapter singleton (useful for testing)."""
    global _chat_instance, _missing_key_warned
    _chat_instance = None
    _missing_key_warned = False
