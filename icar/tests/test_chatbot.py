from unittest.mock import MagicMock

import pytest
import requests

from icar.plugin.chatbot import (
    AI_SERVICE_MESSAGES,
    DEFAULT_REPLY,
    FALLBACK_MESSAGES,
    ChatbotClient,
    ChatSession,
    detect_language,
)
from icar.tests.conftest import make_response
from icar.utils.errors import ValidationError


@pytest.mark.parametrize("text, language", [
    ("My brakes are squeaking", "en"),
    ("Bonjour, ma voiture fait un bruit", "fr"),
    ("Problème de démarrage", "fr"),
    ("سيارتي لا تعمل", "ar"),
])
def test_detect_language(text, language):
    assert detect_language(text) == language


def test_send_posts_message_and_language(settings, session):
    session.post.return_value = make_response(200, {"response": "Check the brake pads."})
    reply = ChatbotClient(settings, session).send("brakes squeak", "en")

    assert reply == "Check the brake pads."
    args, kwargs = session.post.call_args
    assert args == ("http://chatbot.test/chat",)
    assert kwargs["json"] == {"message": "brakes squeak", "language": "en"}


def test_send_falls_back_when_unreachable(settings, session):
    session.post.side_effect = requests.ConnectionError("down")
    assert ChatbotClient(settings, session).send("bonjour", "fr") == FALLBACK_MESSAGES["fr"]


def test_send_falls_back_on_error_status(settings, session):
    session.post.return_value = make_response(500, text="Internal Server Error")
    assert ChatbotClient(settings, session).send("hi", "xx") == FALLBACK_MESSAGES["en"]


def test_backend_error_reply_is_replaced(settings, session):
    session.post.return_value = make_response(200, {"response": "Error occurred: model not loaded"})
    assert ChatbotClient(settings, session).send("hi", "ar") == AI_SERVICE_MESSAGES["ar"]


def test_empty_reply_uses_default(settings, session):
    session.post.return_value = make_response(200, {})
    assert ChatbotClient(settings, session).send("hi", "en") == DEFAULT_REPLY


def test_session_offline_uses_fallback_without_posting():
    client = MagicMock(spec=ChatbotClient)
    client.check_health.return_value = False
    chat = ChatSession(client)
    chat.open()

    reply = chat.ask("Bonjour, ma voiture ne démarre pas")

    client.send.assert_not_called()
    assert reply.text == FALLBACK_MESSAGES["fr"]
    assert not reply.is_user
    assert [m.is_user for m in chat.messages] == [False, True, False]


def test_session_unread_badge():
    client = MagicMock(spec=ChatbotClient)
    client.check_health.return_value = True
    client.send.return_value = "ok"
    chat = ChatSession(client, language="en")
    chat.open()

    chat.ask("hello")
    assert chat.unread_badge == "1"
    chat.unread = 120
    assert chat.unread_badge == "99+"
    chat.mark_read()
    assert chat.unread_badge == "0"


def test_empty_message_rejected():
    chat = ChatSession(MagicMock(spec=ChatbotClient))
    with pytest.raises(ValidationError) as exc:
        chat.ask("   ")
    assert exc.value.errors == {"message": "Message is empty"}


@pytest.mark.parametrize("text", [
    "سيارتي لا تعمل",
    "\u0750\u0751 check",  # Arabic supplement block
])
def test_arabic_text_overrides_session_language(text):
    client = MagicMock(spec=ChatbotClient)
    client.check_health.return_value = True
    client.send.return_value = "ok"
    chat = ChatSession(client, language="en")
    chat.open()

    chat.ask(text)

    client.send.assert_called_once_with(text, "ar")


def test_session_language_kept_for_latin_text():
    client = MagicMock(spec=ChatbotClient)
    client.check_health.return_value = True
    client.send.return_value = "ok"
    chat = ChatSession(client, language="en")
    chat.open()

    chat.ask("Bonjour, ma voiture ne démarre pas")

    client.send.assert_called_once_with("Bonjour, ma voiture ne démarre pas", "en")
