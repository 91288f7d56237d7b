import pytest
from companion import reset_chat_service


@pytest.fixture(autouse=True)
def _fresh_chat_service():
    reset_chat_service()
    yield
    reset_chat_service()
