"""Thread reconstruction for archives without thread identifiers.

Messages are grouped by normalized subject plus the first three sorted
participants; each distinct key gets a hash-derived thread ID.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from gmail_fixture_builder.utils import extract_email, short_digest

RE_PREFIX = re.compile(r"^(re|fwd?|fw)\s*:\s*", re.IGNORECASE)

MAX_KEY_PARTICIPANTS = 3


def normalize_subject(subject: str | None) -> str:
    if not subject:
        return ""
    s = RE_PREFIX.sub("", subject.strip())
    return s.strip().lower()


def participant_key(participants: Iterable[str]) -> str:
    addresses = []
    for raw in participants:
        address = extract_email(raw) or raw.strip().lower()
        if address:
            addresses.append(address)
    return ",".join(sorted(addresses)[:MAX_KEY_PARTICIPANTS])


def thread_key(subject: str | None, participants: Iterable[str]) -> str:
    return f"{normalize_subject(subject)}|{participant_key(participants)}"


def thread_id_for_key(key: str) -> str:
    return short_digest(f"thread:{key}")


class ThreadResolver:
    """Maps thread keys to stable thread IDs, memoized for one run."""

    def __init__(self) -> None:
        self.cache: dict[str, str] = {}

    @property
    def thread_count(self) -> int:
        return len(self.cache)

    def resolve(self, subject: str | None, participants: Iterable[str]) -> str:
        key = thread_key(subject, participants)
        thread_id = self.cache.get(key)
        if thread_id is None:
            thread_id = thread_id_for_key(key)
            self.cache[key] = thread_id
        return thread_id
