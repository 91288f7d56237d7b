"""Gemini chat adapter — AI Study Companion backed by Google's hosted Gemini models."""

import google.generativeai as genai
import structlog

from companion.port import ChatPort, TransportError

logger = structlog.get_logger(__name__)


class GeminiChat(ChatPort):
    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        self.model_name = model_name
        genai.configure(api_key=api_key)
        logger.info("Gemini chat adapter initialized", model=model_name)

    def start_session(self, system_prompt: str):
        try:
            model = genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=system_prompt,
            )
            return model.start_chat(history=[])
        except Exception as exc:
            logger.error("Failed to start Gemini chat session", error=str(exc))
            raise TransportError(str(exc)) from exc

    def send_message(self, handle, text: str) -> str:
        try:
            response = handle.send_message(text)
            return response.text
        except Exception as exc:
            logger.error("Gemini chat message failed", error=str(exc))
            raise TransportError(str(exc)) from exc
