"""Conversation data model shared by the store, persistence and frontend."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Sender = Literal["user", "ai"]


class Message(BaseModel):
    """One entry in the conversation. Frozen once appended."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    sender: Sender
    is_error: bool = Field(default=False, alias="isError")
    timestamp: str | None = None
