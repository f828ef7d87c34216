"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gmail_fixture_builder.models import RawRecord

DEFAULT_DATE = "Mon, 14 May 2001 16:39:00 -0700 (PDT)"


def render_email(
    message_id: str,
    *,
    date: str | None = DEFAULT_DATE,
    sender: str = "alice@enron.com",
    to: Sequence[str] = ("vince.kaminski@enron.com",),
    cc: Sequence[str] = (),
    subject: str = "Hello",
    body: str = "Hi there.\n",
    extra_headers: Sequence[str] = (),
) -> str:
    lines = [f"Message-ID: {message_id}"]
    if date is not None:
        lines.append(f"Date: {date}")
    lines.append(f"From: {sender}")
    if to:
        lines.append(f"To: {', '.join(to)}")
    if cc:
        lines.append(f"Cc: {', '.join(cc)}")
    lines.append(f"Subject: {subject}")
    lines.extend(extra_headers)
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def maildir(tmp_path: Path) -> Callable[..., Path]:
    """Write an email file under ``<tmp>/maildir/kaminski-v/<folder>/<name>``.

    Returns the archive root; call with no arguments to just get the root.
    """
    root = tmp_path / "maildir"
    (root / "kaminski-v").mkdir(parents=True)

    def write(folder: str | None = None, name: str | None = None, text: str = "", **kwargs) -> Path:
        if folder is None or name is None:
            return root
        folder_path = root / "kaminski-v" / folder
        folder_path.mkdir(parents=True, exist_ok=True)
        if not text:
            text = render_email(**kwargs)
        (folder_path / name).write_text(text, encoding="utf-8")
        return root

    return write


@pytest.fixture
def make_record() -> Callable[..., RawRecord]:
    """Build RawRecords with sensible defaults."""

    def build(message_id: str = "<1.JavaMail.evans@thyme>", **fields) -> RawRecord:
        fields.setdefault("date", datetime(2001, 5, 14, 23, 39, tzinfo=timezone.utc))
        fields.setdefault("sender", "alice@enron.com")
        fields.setdefault("to", ["vince.kaminski@enron.com"])
        fields.setdefault("subject", "Hello")
        fields.setdefault("body", "Hi there.\n")
        return RawRecord(message_id=message_id, **fields)

    return build
