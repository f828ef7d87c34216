"""Rule-based label inference.

Rules are applied in order and are not exclusive: a message typically ends up
with UNREAD, one of SENT/INBOX, and any number of category labels. Keyword
tables live on ``LabelRules`` so they can be replaced wholesale.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from gmail_fixture_builder.models import GmailLabel, RawRecord
from gmail_fixture_builder.utils import extract_email

IMPORTANT_BODY_PREFIX = 200


class FolderRule(BaseModel):
    """Adds ``label`` when the source folder contains any of ``fragments``."""

    fragments: tuple[str, ...]
    label: str


class LabelRules(BaseModel):
    """Keyword tables driving the label heuristics."""

    folder_rules: tuple[FolderRule, ...] = Field(
        default=(
            FolderRule(fragments=("trash", "deleted"), label=GmailLabel.TRASH.value),
            FolderRule(fragments=("personal",), label=GmailLabel.CATEGORY_PERSONAL.value),
            FolderRule(fragments=("travel",), label=GmailLabel.TRAVEL.value),
            FolderRule(fragments=("conferences", "meetings"), label=GmailLabel.MEETINGS.value),
        ),
        description="Evaluated in order; the first matching rule wins",
    )
    important_keywords: tuple[str, ...] = Field(
        default=(
            "urgent",
            "asap",
            "important",
            "critical",
            "action required",
            "deadline",
            "immediate",
            "confidential",
            "board meeting",
            "executive",
        ),
        description="Matched against the subject and the start of the body",
    )
    priority_senders: tuple[str, ...] = Field(
        default=("gibner", "buy", "lay"),
        description="Sender fragments that always make a message important",
    )
    promotional_keywords: tuple[str, ...] = Field(
        default=(
            "unsubscribe",
            "click here",
            "special offer",
            "deal",
            "discount",
            "sale",
            "free shipping",
            "act now",
            "limited time",
        ),
        description="Matched against subject and body",
    )
    automated_senders: tuple[str, ...] = Field(
        default=(
            "no-reply",
            "noreply",
            "donotreply",
            "notification",
            "alert",
            "system",
            "automated",
            "mailman",
            "listserv",
        ),
        description="Sender fragments of machine-generated mail",
    )


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)


class LabelInferencer:
    """Assigns Gmail label IDs to a raw record."""

    def __init__(self, owner_fragment: str, rules: LabelRules | None = None) -> None:
        self._owner_fragment = owner_fragment.lower()
        self.rules = rules or LabelRules()

    def infer(self, record: RawRecord) -> list[str]:
        labels = [GmailLabel.UNREAD.value]

        sender = record.sender.lower()
        if self._owner_fragment and self._owner_fragment in (extract_email(sender) or sender):
            labels.append(GmailLabel.SENT.value)
        else:
            labels.append(GmailLabel.INBOX.value)

        folder_label = self.folder_label(record)
        if folder_label is not None:
            labels.append(folder_label)

        if self.is_important(record):
            labels.append(GmailLabel.IMPORTANT.value)

        if self.is_promotional(record):
            labels.append(GmailLabel.CATEGORY_PROMOTIONS.value)
        elif self.is_automated(record):
            labels.append(GmailLabel.CATEGORY_UPDATES.value)

        return labels

    def folder_label(self, record: RawRecord) -> str | None:
        folder = f"{record.origin_folder} {record.x_folder}".lower()
        for rule in self.rules.folder_rules:
            if _contains_any(folder, rule.fragments):
                return rule.label
        return None

    def is_important(self, record: RawRecord) -> bool:
        subject = record.subject.lower()
        body_start = record.body[:IMPORTANT_BODY_PREFIX].lower()
        for keyword in self.rules.important_keywords:
            if keyword in subject or keyword in body_start:
                return True
        return _contains_any(record.sender.lower(), self.rules.priority_senders)

    def is_promotional(self, record: RawRecord) -> bool:
        content = f"{record.subject} {record.body}".lower()
        return _contains_any(content, self.rules.promotional_keywords)

    def is_automated(self, record: RawRecord) -> bool:
        return _contains_any(record.sender.lower(), self.rules.automated_senders)
