"""Fake chat adapter — deterministic chat model for testing and development.

Replies by echoing the prompt. Configurable failure behavior for
integration testing.
"""

from dataclasses import dataclass, field

from companion.port import ChatPort, TransportError


@dataclass
class FakeChatHandle:
    system_prompt: str
    history: list[tuple[str, str]] = field(default_factory=list)


class FakeChat(ChatPort):
    """Fake chat model that always answers by default."""

    model_name = "fake-chat"

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Chat service unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Chat service unavailable"):
        """Configure the fake chat behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def start_session(self, system_prompt: str) -> FakeChatHandle:
        return FakeChatHandle(system_prompt=system_prompt)

    def send_message(self, handle: FakeChatHandle, text: str) -> str:
        if not self.should_succeed:
            raise TransportError(self.failure_reason)

        reply = f"Study tip: {text}"
        handle.history.append((text, reply))
        return reply
