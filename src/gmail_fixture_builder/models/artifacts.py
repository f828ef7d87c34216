"""Typed records for the derived fixture artifacts.

Each model maps to one JSON file written by the fixture writer.
"""

from __future__ import annotations

from pydantic import Field

from gmail_fixture_builder.models.gmail import GmailModel
from gmail_fixture_builder.models.persona import Persona


class MessageRef(GmailModel):
    id: str
    thread_id: str


class ListMessagesResponse(GmailModel):
    """Shape of a ``users.messages.list`` response."""

    messages: list[MessageRef] = Field(default_factory=list)
    next_page_token: str | None = Field(default=None)
    result_size_estimate: int = Field(default=0)


class DateRange(GmailModel):
    start: str | None = Field(default=None, description="Date header of the first message")
    end: str | None = Field(default=None, description="Date header of the last message")


class CorpusMetadata(GmailModel):
    """Aggregate statistics over the generated corpus."""

    total_messages: int
    date_range: DateRange
    label_distribution: dict[str, int] = Field(default_factory=dict)
    thread_count: int


class RunStatistics(GmailModel):
    """Bookkeeping for one transformation run."""

    total_processed: int = 0
    total_transformed: int = 0
    errors: list[str] = Field(default_factory=list)
    persona_map: dict[str, Persona] = Field(default_factory=dict)
    thread_count: int = 0
