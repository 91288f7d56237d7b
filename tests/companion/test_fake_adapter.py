"""Tests for the fake chat adapter."""

import pytest
from companion.fake_adapter import FakeChat, FakeChatHandle
from companion.port import TransportError


class TestFakeChat:
    def test_start_session_keeps_system_prompt(self):
        chat = FakeChat()
        handle = chat.start_session("Be helpful")
        assert isinstance(handle, FakeChatHandle)
        assert handle.system_prompt == "Be helpful"
        assert handle.history == []

    def test_send_message_replies(self):
        chat = FakeChat()
        handle = chat.start_session("Be helpful")
        assert chat.send_message(handle, "Explain osmosis") == "Study tip: Explain osmosis"

    def test_send_message_records_history(self):
        chat = FakeChat()
        handle = chat.start_session("Be helpful")
        chat.send_message(handle, "first")
        chat.send_message(handle, "second")
        assert [prompt for prompt, _ in handle.history] == ["first", "second"]

    def test_sessions_are_independent(self):
        chat = FakeChat()
        first = chat.start_session("Be helpful")
        second = chat.start_session("Be helpful")
        chat.send_message(first, "hello")
        assert second.history == []

    def test_send_message_failure(self):
        chat = FakeChat()
        chat.configure(should_succeed=False, failure_reason="Quota exceeded")
        handle = chat.start_session("Be helpful")
        with pytest.raises(TransportError, match="Quota exceeded"):
            chat.send_message(handle, "hello")
        assert handle.history == []

    def test_configure_changes_behavior(self):
        chat = FakeChat()
        assert chat.should_succeed is True
        chat.configure(should_succeed=False, failure_reason="Custom error")
        assert chat.should_succeed is False
        assert chat.failure_reason == "Custom error"
