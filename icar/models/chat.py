from datetime import datetime, timezone

from pydantic import Field

from icar.models.base import CamelModel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(CamelModel):
    id: str
    text: str
    is_user: bool
    timestamp: datetime = Field(default_factory=_now)
