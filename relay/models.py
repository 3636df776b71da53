"""Pydantic models for the ask endpoint wire contract."""

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Incoming question payload."""

    question: str = Field(description="User supplied question.")


class AskResponse(BaseModel):
    """Successful answer payload."""

    answer: str


class ErrorResponse(BaseModel):
    """Normalized failure payload. ``details`` is only set in development."""

    error: str
    details: str | None = None
