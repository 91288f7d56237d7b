"""StudyCompanion — conversation service for the AI Study Companion.

Each conversation is a CompanionSession holding the adapter's opaque handle
and the transcript shown to the student. The session is owned by the
caller and passed to every ``ask``; the service keeps no session state.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

import structlog

from companion import get_chat_service
from companion.port import ChatPort, CompanionUnavailable, TransportError

logger = structlog.get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an expert study assistant for university students. Be encouraging, "
    "clear, and focused on helping the user learn and understand their course "
    "material. Break down complex topics into simple, digestible parts."
)

GREETING = (
    "Hello! I'm your AI Study Companion. How can I help you prepare for your exams "
    "today? You can ask me to explain a concept, summarize a topic, or even create "
    "a practice quiz!"
)

UNAVAILABLE_MESSAGE = "Could not initialize AI Companion. The API key might be missing."


class MessageRole(Enum):
    USER = "user"
    MODEL = "model"


@dataclass
class CompanionMessage:
    role: MessageRole
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = f"{self.role.value}-{uuid4().hex[:12]}"


@dataclass
class CompanionSession:
    handle: Any
    messages: list[CompanionMessage] = field(default_factory=list)


class StudyCompanion:
    def __init__(self, chat: ChatPort | None = None):
        self._chat = chat if chat is not None else get_chat_service()

    @property
    def is_available(self) -> bool:
        return self._chat is not None

    def start(self) -> CompanionSession:
        """Open a new conversation, greeting the student.

        Raises:
            CompanionUnavailable: no chat model is configured or it failed to start
        """
        if self._chat is None:
            raise CompanionUnavailable(UNAVAILABLE_MESSAGE)

        try:
            handle = self._chat.start_session(SYSTEM_PROMPT)
        except TransportError as exc:
            logger.error("AI Companion failed to start", error=str(exc))
            raise CompanionUnavailable("An error occurred while starting the AI Companion.") from exc

        logger.info("AI Companion session started", model=self._chat.model_name)
        return CompanionSession(
            handle=handle,
            messages=[CompanionMessage(role=MessageRole.MODEL, text=GREETING)],
        )

    def ask(self, session: CompanionSession, text: str) -> str | None:
        """Send a student's message and record the reply in the transcript.

        Blank messages are ignored and return None. Transport failures are
        turned into an apology that is recorded like any other reply.

        Raises:
            CompanionUnavailable: no chat model is configured
        """
        if not text or not text.strip():
            return None
        if self._chat is None:
            raise CompanionUnavailable(UNAVAILABLE_MESSAGE)

        session.messages.append(CompanionMessage(role=MessageRole.USER, text=text))

        try:
            reply = self._chat.send_message(session.handle, text)
        except TransportError as exc:
            logger.warning("AI Companion message failed", error=str(exc))
            reply = f"I'm sorry, I ran into an issue: {exc}" if str(exc) else "I'm sorry, an unknown error occurred."

        session.messages.append(CompanionMessage(role=MessageRole.MODEL, text=reply))
        return reply
