"""Gmail API message shapes produced by the transformer.

Field names are snake_case in Python and serialized with the camelCase
aliases used by the Gmail REST API (``threadId``, ``labelIds``, ...).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GmailLabel(str, Enum):
    """System and user label IDs assigned by the label inferencer."""

    UNREAD = "UNREAD"
    INBOX = "INBOX"
    SENT = "SENT"
    TRASH = "TRASH"
    IMPORTANT = "IMPORTANT"
    CATEGORY_PERSONAL = "CATEGORY_PERSONAL"
    CATEGORY_PROMOTIONS = "CATEGORY_PROMOTIONS"
    CATEGORY_UPDATES = "CATEGORY_UPDATES"
    TRAVEL = "Label_Travel"
    MEETINGS = "Label_Meetings"


class GmailModel(BaseModel):
    """Base for models serialized with Gmail API field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Header(GmailModel):
    name: str
    value: str


class MessageBody(GmailModel):
    size: int = Field(description="Length of the decoded body")
    data: str = Field(description="Base64 encoded body")


class MessagePart(GmailModel):
    """Message payload (single text/plain part)."""

    part_id: str | None = Field(default=None, description="Part ID, omitted for the root part")
    mime_type: str = Field(default="text/plain", description="MIME type of the part")
    filename: str | None = Field(default=None, description="Attachment file name")
    headers: list[Header] = Field(default_factory=list, description="Transformed headers")
    body: MessageBody | None = Field(default=None, description="Part body")
    parts: list[MessagePart] | None = Field(default=None, description="Child parts")

    def header(self, name: str) -> str | None:
        """Return the first header value matching ``name`` (case-insensitive)."""
        wanted = name.lower()
        for h in self.headers:
            if h.name.lower() == wanted:
                return h.value
        return None


class GmailMessage(GmailModel):
    """A message as returned by ``users.messages.get`` with ``format=full``."""

    id: str = Field(description="Deterministic message ID")
    thread_id: str = Field(description="Reconstructed thread ID")
    label_ids: list[str] = Field(default_factory=list, description="Inferred label IDs")
    snippet: str = Field(default="", description="Short plain-text preview")
    history_id: str = Field(description="Shifted unix timestamp in seconds")
    internal_date: str = Field(description="Shifted unix timestamp in milliseconds")
    size_estimate: int = Field(description="Approximate message size in bytes")
    payload: MessagePart = Field(description="Headers and body")
