"""Helpers for parsing raw archive files into RawRecord models.

Files use the plain ``Header-Name: value`` layout of the Enron maildir
export: a header block with folded continuation lines, a blank line, then the
free-text body.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path

import structlog

from gmail_fixture_builder.exceptions import ParseError
from gmail_fixture_builder.models import RawRecord

logger = structlog.get_logger()

Clock = Callable[[], datetime]

# Tried in order; the first pattern that matches wins. Named zones (GMT,
# PDT, EST, ...) are left to parsedate_to_datetime so they never depend on
# the host's local zone names.
DATE_FORMATS: tuple[str, ...] = (
    "%a, %d %b %Y %H:%M:%S %z",
    "%d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M %z",
    "%a, %d %b %Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S%z",
)

_ZONE_COMMENT_RE = re.compile(r"\s*\([^)]*\)\s*$")

# Header name -> RawRecord field. Anything else is dropped.
_SIMPLE_HEADERS: dict[str, str] = {
    "Message-ID": "message_id",
    "From": "sender",
    "Subject": "subject",
    "X-To": "x_to",
    "X-cc": "x_cc",
    "X-bcc": "x_bcc",
    "X-Folder": "x_folder",
    "X-Origin": "x_origin",
    "X-FileName": "x_filename",
}
_LIST_HEADERS: dict[str, str] = {"To": "to", "Cc": "cc", "Bcc": "bcc"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: str) -> datetime | None:
    """Parse a Date header using ``DATE_FORMATS``, then RFC 2822 rules.

    Returns:
        A timezone-aware datetime, or None when nothing matches.
    """
    cleaned = _ZONE_COMMENT_RE.sub("", value.strip())
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    try:
        parsed = parsedate_to_datetime(cleaned)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_address_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def clean_exchange_address(value: str) -> str:
    """Strip the ``</O=ENRON/OU=...>`` Exchange suffix from X-From values."""
    idx = value.find("</O=")
    if idx > 0:
        return value[:idx].strip()
    return value


def split_headers(text: str) -> tuple[list[tuple[str, str]], str]:
    """Split file text into folded ``(name, value)`` headers and the body.

    Continuation lines (leading space or tab) are appended to the previous
    header value with a single separating space.
    """
    headers: list[tuple[str, str]] = []
    body_lines: list[str] = []
    in_headers = True

    for line in text.splitlines():
        if not in_headers:
            body_lines.append(line + "\n")
            continue

        if line == "":
            in_headers = False
            continue

        if line[0] in (" ", "\t"):
            if headers:
                name, value = headers[-1]
                headers[-1] = (name, f"{value} {line.strip()}")
            continue

        name, sep, value = line.partition(":")
        if sep:
            headers.append((name.strip(), value.strip()))

    return headers, "".join(body_lines)


def parse_record(
    data: bytes,
    *,
    origin_folder: str = "",
    origin_filename: str = "",
    file_path: str = "",
    clock: Clock | None = None,
    strict_dates: bool = False,
) -> RawRecord:
    """Parse the bytes of one archive file.

    Args:
        data: Raw file contents.
        origin_folder: Folder the loader found the file in.
        origin_filename: File name inside that folder.
        file_path: Full source path, kept for diagnostics.
        clock: Returns "now" when the Date header is unparseable.
        strict_dates: Raise instead of falling back to the clock.

    Returns:
        RawRecord: Parsed record.

    Raises:
        ParseError: If the file has no header block, no Message-ID, or (with
            ``strict_dates``) an unparseable Date header.
    """
    text = data.decode("utf-8", errors="replace")
    headers, body = split_headers(text)
    if not headers:
        raise ParseError(f"no header block in {file_path or origin_filename or 'record'}")

    fields: dict[str, object] = {
        "body": body,
        "origin_folder": origin_folder,
        "origin_filename": origin_filename,
        "file_path": file_path,
    }
    raw_date: str | None = None

    for name, value in headers:
        if name in _SIMPLE_HEADERS:
            fields[_SIMPLE_HEADERS[name]] = value
        elif name in _LIST_HEADERS:
            fields[_LIST_HEADERS[name]] = parse_address_list(value)
        elif name == "X-From":
            fields["x_from"] = clean_exchange_address(value)
        elif name == "Date":
            raw_date = value

    if not fields.get("message_id"):
        raise ParseError(f"missing Message-ID in {file_path or origin_filename or 'record'}")

    parsed = parse_date(raw_date) if raw_date else None
    if parsed is None:
        if strict_dates:
            raise ParseError(f"unparseable Date header {raw_date!r} in {fields['message_id']}")
        logger.warning(
            "record_date_unparseable",
            message_id=fields["message_id"],
            date=raw_date,
        )
        parsed = (clock or _utcnow)()
        fields["date_fallback"] = True

    fields["date"] = parsed
    return RawRecord(**fields)


def parse_record_file(
    path: Path,
    *,
    origin_folder: str = "",
    clock: Clock | None = None,
    strict_dates: bool = False,
) -> RawRecord:
    """Read and parse one archive file.

    Raises:
        ParseError: If the file cannot be read or parsed.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ParseError(f"cannot read {path}: {exc}") from exc

    return parse_record(
        data,
        origin_folder=origin_folder,
        origin_filename=path.name,
        file_path=str(path),
        clock=clock,
        strict_dates=strict_dates,
    )
