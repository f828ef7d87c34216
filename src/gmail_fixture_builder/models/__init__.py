"""Data models for Gmail Fixture Builder.

This module contains Pydantic models for data validation and serialization.
"""

from gmail_fixture_builder.models.artifacts import (
    CorpusMetadata,
    DateRange,
    ListMessagesResponse,
    MessageRef,
    RunStatistics,
)
from gmail_fixture_builder.models.gmail import (
    GmailLabel,
    GmailMessage,
    GmailModel,
    Header,
    MessageBody,
    MessagePart,
)
from gmail_fixture_builder.models.persona import Persona
from gmail_fixture_builder.models.raw_record import RawRecord

__all__ = [
    "CorpusMetadata",
    "DateRange",
    "GmailLabel",
    "GmailMessage",
    "GmailModel",
    "Header",
    "ListMessagesResponse",
    "MessageBody",
    "MessagePart",
    "MessageRef",
    "Persona",
    "RawRecord",
    "RunStatistics",
]
