import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


def to_camel(string: str) -> str:
    """snake_case -> camelCase"""
    if not string:
        return string
    # preserve leading underscores
    prefix_match = re.match(r"^(_+)", string)
    prefix = prefix_match.group(1) if prefix_match else ""
    core = string[len(prefix) :]
    parts = core.split("_")
    if not parts:
        return prefix
    first = parts[0].lower()
    rest = "".join(p.capitalize() if p else "" for p in parts[1:])
    return prefix + first + rest


class CamelModel(BaseModel):
    # Inbound: the backend speaks camelCase, callers may use either form.
    # Outbound: model_dump / model_dump_json default to camelCase.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=False,
    )

    def model_dump(self, *args, **kwargs):
        kwargs.setdefault("by_alias", True)
        return super().model_dump(*args, **kwargs)

    def model_dump_json(self, *args, **kwargs):
        kwargs.setdefault("by_alias", True)
        return super().model_dump_json(*args, **kwargs)

    def to_payload(self) -> dict:
        """Request body: camelCase, without unset optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class DocumentModel(CamelModel):
    """Backend document with a Mongo-style ``_id``."""

    id: Optional[str] = Field(default=None, alias="_id")
