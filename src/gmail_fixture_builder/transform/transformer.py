"""Transform raw archive records into Gmail API messages.

A ``CorpusTransformer`` owns all per-run state (persona map, thread cache,
message ID map and statistics). Create a new instance for every run.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import structlog

from gmail_fixture_builder.config import Settings
from gmail_fixture_builder.exceptions import TransformError
from gmail_fixture_builder.models import (
    GmailMessage,
    Header,
    MessageBody,
    MessagePart,
    Persona,
    RawRecord,
    RunStatistics,
)
from gmail_fixture_builder.transform.labels import LabelInferencer, LabelRules
from gmail_fixture_builder.transform.personas import PersonaAssigner
from gmail_fixture_builder.transform.threads import ThreadResolver
from gmail_fixture_builder.utils import (
    EMAIL_RE,
    collapse_whitespace,
    email_domain,
    extract_email,
    fix_encoding,
    name_from_email,
    short_digest,
)

logger = structlog.get_logger()

SNIPPET_LENGTH = 100
ENVELOPE_OVERHEAD = 512
QUOTE_MARKERS: tuple[str, ...] = ("-----Original Message-----", "----- Forwarded by")
OWNER_DISPLAY_NAME = "You"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_time_shift(target_start: datetime, source_start: datetime) -> timedelta:
    """Offset that moves ``source_start`` onto ``target_start``."""
    return _as_utc(target_start) - _as_utc(source_start)


def generate_message_id(source_id: str) -> str:
    return short_digest(source_id)


def generate_snippet(body: str) -> str:
    """Build a short preview, stopping at quoted or forwarded content.

    Snippets longer than ``SNIPPET_LENGTH`` are cut and end in ``...``.
    """
    kept: list[str] = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith(">") or any(marker in stripped for marker in QUOTE_MARKERS):
            break
        kept.append(stripped)

    snippet = collapse_whitespace(" ".join(kept))
    if len(snippet) > SNIPPET_LENGTH:
        snippet = snippet[: SNIPPET_LENGTH - 3] + "..."
    return snippet


def _format_address(name: str, email: str) -> str:
    return f"{name} <{email}>"


class CorpusTransformer:
    """Converts RawRecords into GmailMessages for a single run."""

    def __init__(
        self,
        owner_fragment: str,
        primary_email: str,
        time_shift: timedelta,
        *,
        personas: PersonaAssigner | None = None,
        labels: LabelInferencer | None = None,
        source_org_name: str = "Enron",
        source_org_domain: str = "enron.com",
        placeholder_org_name: str = "TechCorp",
        placeholder_domain: str = "example.com",
    ) -> None:
        """Initialize the transformer.

        Args:
            owner_fragment: Identity fragment of the mailbox owner (e.g. ``kaminski``).
            primary_email: Address that replaces the owner everywhere.
            time_shift: Offset added to every timestamp.
            personas: Persona assigner. If None, uses the default roster.
            labels: Label inferencer. If None, uses the default rules.
        """
        self.owner_fragment = owner_fragment.lower()
        self.primary_email = primary_email
        self.time_shift = time_shift

        self._personas = personas or PersonaAssigner(self.owner_fragment)
        self._labels = labels or LabelInferencer(self.owner_fragment)
        self._source_org_name = source_org_name
        self._source_org_domain = source_org_domain.lower()
        self._placeholder_org_name = placeholder_org_name
        self._placeholder_domain = placeholder_domain

        self.threads = ThreadResolver()
        self.persona_map: dict[str, Persona] = {}
        self.message_id_map: dict[str, str] = {}
        self.stats = RunStatistics()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        now: datetime | None = None,
        label_rules: LabelRules | None = None,
    ) -> CorpusTransformer:
        owner = settings.owner_fragment
        shift = compute_time_shift(settings.resolve_target_start(now), settings.source_epoch)
        return cls(
            owner,
            settings.primary_email,
            shift,
            labels=LabelInferencer(owner, label_rules),
            source_org_name=settings.source_org_name,
            source_org_domain=settings.source_org_domain,
            placeholder_org_name=settings.placeholder_org_name,
            placeholder_domain=settings.placeholder_domain,
        )

    def transform_dataset(self, records: Iterable[RawRecord]) -> list[GmailMessage]:
        """Transform a whole corpus in chronological order.

        Per-record failures are collected in ``stats.errors`` and do not stop
        the run.
        """
        ordered = sorted(records, key=lambda r: (r.date, r.message_id))
        self.persona_map = self._personas.assign(ordered)

        messages: list[GmailMessage] = []
        for record in ordered:
            self.stats.total_processed += 1
            try:
                message = self.transform_record(record)
            except TransformError as exc:
                self.stats.errors.append(f"Error transforming {record.message_id}: {exc}")
                logger.debug("record_transform_failed", message_id=record.message_id, error=str(exc))
                continue

            messages.append(message)
            self.stats.total_transformed += 1

        self.stats.thread_count = self.threads.thread_count
        self.stats.persona_map = dict(self.persona_map)

        logger.info(
            "dataset_transformed",
            processed=self.stats.total_processed,
            transformed=self.stats.total_transformed,
            errors=len(self.stats.errors),
            threads=self.stats.thread_count,
            personas=len(self.persona_map),
        )
        return messages

    def transform_record(self, record: RawRecord) -> GmailMessage:
        """Transform a single record.

        Raises:
            TransformError: If the record has no identifier or its date cannot
                be shifted.
        """
        if not record.message_id:
            raise TransformError("record has no Message-ID")

        try:
            shifted = record.date + self.time_shift
        except OverflowError as exc:
            raise TransformError(f"date {record.date.isoformat()} out of range after shift") from exc

        gmail_id = generate_message_id(record.message_id)
        self.message_id_map[record.message_id] = gmail_id

        body = self.transform_body(record.body)
        body_bytes = body.encode("utf-8")
        thread_id = self.threads.resolve(
            record.subject, [record.sender, *record.to, *record.cc, *record.bcc]
        )

        payload = MessagePart(
            mime_type="text/plain",
            headers=self.transform_headers(record, gmail_id, shifted),
            body=MessageBody(
                size=len(body_bytes),
                data=base64.b64encode(body_bytes).decode("ascii"),
            ),
        )

        epoch_seconds = int(shifted.timestamp())
        return GmailMessage(
            id=gmail_id,
            thread_id=thread_id,
            label_ids=self._labels.infer(record),
            snippet=generate_snippet(body),
            history_id=str(epoch_seconds),
            internal_date=str(epoch_seconds * 1000 + shifted.microsecond // 1000),
            size_estimate=len(record.body.encode("utf-8")) + ENVELOPE_OVERHEAD,
            payload=payload,
        )

    def transform_headers(
        self, record: RawRecord, gmail_id: str, shifted: datetime
    ) -> list[Header]:
        headers = [Header(name="From", value=self.transform_address(record.sender))]
        if record.to:
            headers.append(Header(name="To", value=self.transform_address_list(record.to)))
        if record.cc:
            headers.append(Header(name="Cc", value=self.transform_address_list(record.cc)))

        headers.extend(
            [
                Header(name="Subject", value=record.subject),
                Header(name="Date", value=format_datetime(shifted)),
                Header(name="Message-ID", value=f"<{gmail_id}@mail.gmail.com>"),
            ]
        )
        return headers

    def resolve_address(self, raw: str) -> tuple[str, str]:
        """Map an original address to an output ``(display name, email)`` pair."""
        address = extract_email(raw)
        candidate = address or raw.strip().lower()

        if self.owner_fragment and self.owner_fragment in candidate:
            return OWNER_DISPLAY_NAME, self.primary_email

        persona = self.persona_map.get(address)
        if persona is not None:
            return persona.name, persona.email

        name = name_from_email(address or raw.strip())
        domain = email_domain(address)
        if not domain or self._is_source_domain(domain):
            domain = self._placeholder_domain
        local = ".".join(name.lower().split())
        return name, f"{local}@{domain}"

    def transform_address(self, raw: str) -> str:
        return _format_address(*self.resolve_address(raw))

    def transform_address_list(self, addresses: Iterable[str]) -> str:
        return ", ".join(self.transform_address(a) for a in addresses)

    def transform_body(self, body: str) -> str:
        """Repair encoding artefacts and anonymize addresses and the organization name."""
        body = fix_encoding(body)
        body = EMAIL_RE.sub(lambda m: self.resolve_address(m.group(0))[1], body)
        body = body.replace(self._source_org_name, self._placeholder_org_name)
        body = body.replace(self._source_org_name.upper(), self._placeholder_org_name.upper())
        return body

    def _is_source_domain(self, domain: str) -> bool:
        return domain == self._source_org_domain or domain.endswith("." + self._source_org_domain)
