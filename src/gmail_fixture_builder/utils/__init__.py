"""Utility functions for Gmail Fixture Builder."""

from __future__ import annotations

import hashlib
import re
from email.utils import parseaddr

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

_WHITESPACE_RE = re.compile(r"\s+")

# Quoted-printable soft encodings and HTML entities left over in the archive.
_ENCODING_FIXES: tuple[tuple[str, str], ...] = (
    ("=20", " "),
    ("=09", "\t"),
    ("=0A", "\n"),
    ("=0D", "\r"),
    ("=3D", "="),
    ("&lt;", "<"),
    ("&gt;", ">"),
    # Last, so "&amp;lt;" decodes once to "&lt;"
    ("&amp;", "&"),
)

ID_LENGTH = 16


def short_digest(value: str, length: int = ID_LENGTH) -> str:
    """Return the first ``length`` hex characters of the MD5 digest of ``value``.

    Used for content-addressed IDs, not for anything security related.
    """
    return hashlib.md5(value.encode("utf-8")).hexdigest()[:length]


def extract_email(address: str) -> str:
    """Extract a lower-cased address from any RFC 5322 address form.

    ``Name <addr>``, ``addr (Name)`` and quoted bare addresses all reduce to
    the same ``addr``. Returns an empty string when the value does not
    contain an address.
    """
    _, addr = parseaddr(address)
    match = EMAIL_RE.search(addr) or EMAIL_RE.search(address)
    return match.group(0).lower() if match else ""


def name_from_email(address: str) -> str:
    """Derive a display name from the local part of an address.

    ``jane.doe@example.com`` becomes ``Jane Doe``.
    """
    local = address.split("@", 1)[0]
    for sep in (".", "_", "-"):
        local = local.replace(sep, " ")
    local = " ".join(local.split())
    return local.title() if local else "Unknown"


def email_domain(address: str) -> str:
    if "@" not in address:
        return ""
    return address.rsplit("@", 1)[1].lower()


def fix_encoding(text: str) -> str:
    for old, new in _ENCODING_FIXES:
        text = text.replace(old, new)
    return text


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
