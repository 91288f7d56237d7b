"""Chat port — abstract interface for the hosted chat model behind the AI Study Companion.

The companion service programs against the port; adapters are swapped via
configuration. A session handle is opaque to callers and is passed back on
every send.
"""

from abc import ABC, abstractmethod
from typing import Any


class CompanionUnavailable(Exception):
    """The chat model cannot be used (missing API key or failed start)."""


class TransportError(Exception):
    """Any failure reaching the hosted chat model."""


class ChatPort(ABC):
    """Abstract interface for chat model adapters."""

    model_name: str

    @abstractmethod
    def start_session(self, system_prompt: str) -> Any:
        """Open a chat session primed with the system prompt.

        Returns:
            an opaque session handle for send_message
        """
        ...

    @abstractmethod
    def send_message(self, handle: Any, text: str) -> str:
        """Send a user message within a session and return the model reply.

        Raises:
            TransportError: on any transport or API failure
        """
        ...
