"""Pydantic models for prepayment suggestions."""

from enum import Enum

from pydantic import BaseModel


class SuggestionStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class SuggestionResult(BaseModel):
    status: SuggestionStatus
    text: str | None = None  # Free-form suggestion text on success
    error: str | None = None  # User-displayable message on failure

    @classmethod
    def success(cls, text: str) -> "SuggestionResult":
        return cls(status=SuggestionStatus.SUCCESS, text=text)

    @classmethod
    def failure(cls, error: str) -> "SuggestionResult":
        return cls(status=SuggestionStatus.FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.status == SuggestionStatus.SUCCESS
