"""
Support chatbot client.

The chatbot runs as a separate service; when it is down or answers with
an internal error the user gets a localized fallback text instead.
"""

import re
import uuid
from typing import Dict, List, Optional

import requests

from icar.config import Settings, get_settings
from icar.models.chat import ChatMessage
from icar.utils.errors import ValidationError
from icar.utils.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_MESSAGES: Dict[str, str] = {
    "en": "I'm sorry, but I'm currently unable to connect to the chat service. Please make sure the backend server is running and try again later.",
    "fr": "Je suis désolé, mais je ne peux pas me connecter au service de chat pour le moment. Veuillez vous assurer que le serveur backend fonctionne et réessayez plus tard.",
    "ar": "أعتذر، لكنني لا أستطيع الاتصال بخدمة الدردشة حالياً. يرجى التأكد من تشغيل الخادم الخلفي والمحاولة مرة أخرى لاحقاً.",
}

AI_SERVICE_MESSAGES: Dict[str, str] = {
    "en": "I'm having trouble connecting to the AI service. Please make sure the backend server and Ollama are running properly.",
    "fr": "J'ai des difficultés à me connecter au service IA. Veuillez vous assurer que le serveur backend et Ollama fonctionnent correctement.",
    "ar": "أواجه مشكلة في الاتصال بخدمة الذكاء الاصطناعي. يرجى التأكد من تشغيل الخادم الخلفي و Ollama بشكل صحيح.",
}

WELCOME_MESSAGES: Dict[str, str] = {
    "en": "Hello! I'm your ICAR assistant. Ask me anything about your vehicle.",
    "fr": "Bonjour ! Je suis votre assistant ICAR. Posez-moi vos questions sur votre véhicule.",
    "ar": "مرحباً! أنا مساعد ICAR. اسألني أي شيء عن سيارتك.",
}

DEFAULT_REPLY = "I apologize, but I encountered an error processing your request."
BACKEND_ERROR_MARKERS = ("حدث خطأ: ", "Error occurred:")

_ARABIC = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF]")
_FRENCH_CHARS = re.compile(r"[éèêëàâîïôûùç]", re.IGNORECASE)
_FRENCH_WORDS = {
    "bonjour", "merci", "voiture", "moteur", "vidange", "pneu", "pneus", "frein", "freins",
    "je", "est", "une", "les", "des", "mon", "ma", "pourquoi", "comment", "quand",
}


def detect_language(text: str) -> str:
    if _ARABIC.search(text):
        return "ar"
    words = set(re.findall(r"[a-zA-Zéèêëàâîïôûùç']+", text.lower()))
    if _FRENCH_CHARS.search(text) or words & _FRENCH_WORDS:
        return "fr"
    return "en"


def _localized(table: Dict[str, str], language: str) -> str:
    return table.get(language) or table["en"]


class ChatbotClient:

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def check_health(self) -> bool:
        try:
            response = self.session.get(
                f"{self.settings.chatbot_url}/health",
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Chatbot health check failed: {e}")
            return False
        return response.ok

    def send(self, text: str, language: str) -> str:
        """Send one message and return the bot's reply; never raises."""
        try:
            response = self.session.post(
                f"{self.settings.chatbot_url}/chat",
                json={"message": text, "language": language},
                timeout=self.settings.post_timeout,
            )
            if not response.ok:
                raise requests.HTTPError(
                    f"Network response was not ok: {response.status_code} - {response.text}"
                )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error sending chat message: {e}")
            return _localized(FALLBACK_MESSAGES, language)

        reply = data.get("response") if isinstance(data, dict) else None
        reply = reply or DEFAULT_REPLY
        if any(marker in reply for marker in BACKEND_ERROR_MARKERS):
            return _localized(AI_SERVICE_MESSAGES, language)
        return reply


class ChatSession:
    """Conversation state: message list, connection flag and unread counter."""

    def __init__(self, client: ChatbotClient, language: Optional[str] = None):
        self.client = client
        self.language = language
        self.messages: List[ChatMessage] = []
        self.unread = 0
        self.is_connected: Optional[bool] = None

    def open(self) -> None:
        self.is_connected = self.client.check_health()
        self.unread = 0
        if not self.messages:
            self._append(_localized(WELCOME_MESSAGES, self.language or "en"), is_user=False)

    def _append(self, text: str, is_user: bool) -> ChatMessage:
        message = ChatMessage(id=uuid.uuid4().hex, text=text, is_user=is_user)
        self.messages.append(message)
        return message

    def ask(self, text: str) -> ChatMessage:
        text = text.strip()
        if not text:
            raise ValidationError({"message": "Message is empty"}, message="Message is empty")
        # Arabic script always wins over the session language
        language = "ar" if _ARABIC.search(text) else (self.language or detect_language(text))
        self._append(text, is_user=True)

        if self.is_connected is False:
            logger.info("Chatbot backend not connected, using fallback")
            reply = _localized(FALLBACK_MESSAGES, language)
        else:
            reply = self.client.send(text, language)
        self.unread += 1
        return self._append(reply, is_user=False)

    def mark_read(self) -> None:
        self.unread = 0

    @property
    def unread_badge(self) -> str:
        return "99+" if self.unread > 99 else str(self.unread)
