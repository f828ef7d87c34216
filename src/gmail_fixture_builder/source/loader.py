"""Load raw records from a maildir-style archive.

Layout: ``<root>/<user>/<folder>/<file>``. Priority folders are scanned first
so that a limited run is biased toward sent mail and discussions; the
catch-all archive folder only tops the corpus up.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from gmail_fixture_builder.exceptions import LoadError, ParseError
from gmail_fixture_builder.models import RawRecord
from gmail_fixture_builder.source.parsing import Clock, parse_record_file

logger = structlog.get_logger()

DEFAULT_PRIORITY_FOLDERS: tuple[str, ...] = (
    "sent_items",
    "inbox",
    "discussion_threads",
    "personal",
)
DEFAULT_ARCHIVE_FOLDER = "all_documents"


def _is_numbered_file(name: str) -> bool:
    # Archive files are named "1.", "2.", ...
    return name.rstrip(".").isdigit()


class RecordLoader:
    """Reads records for one mailbox owner, deduplicated by Message-ID."""

    def __init__(
        self,
        root: Path,
        user: str,
        *,
        priority_folders: Sequence[str] = DEFAULT_PRIORITY_FOLDERS,
        archive_folder: str = DEFAULT_ARCHIVE_FOLDER,
        clock: Clock | None = None,
        strict_dates: bool = False,
    ) -> None:
        self._root = Path(root)
        self._user = user
        self._priority_folders = tuple(priority_folders)
        self._archive_folder = archive_folder
        self._clock = clock
        self._strict_dates = strict_dates

    @property
    def user_path(self) -> Path:
        return self._root / self._user

    def load(self, limit: int) -> list[RawRecord]:
        """Load at most ``limit`` records.

        Raises:
            LoadError: If the archive root or the user directory does not exist.
            ValueError: If ``limit`` is negative.
        """
        if limit < 0:
            raise ValueError(f"record limit must be >= 0, got {limit}")
        if not self._root.is_dir():
            raise LoadError(f"source root not found: {self._root}")
        if not self.user_path.is_dir():
            raise LoadError(f"mailbox directory not found: {self.user_path}")

        records: list[RawRecord] = []
        seen: set[str] = set()
        skipped = 0

        for folder in self._priority_folders:
            if len(records) >= limit:
                break
            skipped += self._load_folder(folder, records, seen, limit, numbered_only=False)

        if len(records) < limit:
            skipped += self._load_folder(
                self._archive_folder, records, seen, limit, numbered_only=True
            )

        logger.info(
            "records_loaded",
            user=self._user,
            loaded=len(records),
            skipped=skipped,
            limit=limit,
        )
        return records

    def _load_folder(
        self,
        folder: str,
        records: list[RawRecord],
        seen: set[str],
        limit: int,
        *,
        numbered_only: bool,
    ) -> int:
        folder_path = self.user_path / folder
        if not folder_path.is_dir():
            logger.debug("source_folder_missing", folder=folder)
            return 0

        skipped = 0
        for path in sorted(folder_path.iterdir()):
            if len(records) >= limit:
                break
            if path.is_dir():
                continue
            if numbered_only and not _is_numbered_file(path.name):
                continue

            try:
                record = parse_record_file(
                    path,
                    origin_folder=folder,
                    clock=self._clock,
                    strict_dates=self._strict_dates,
                )
            except ParseError as exc:
                skipped += 1
                logger.debug("record_parse_skipped", path=str(path), error=str(exc))
                continue

            if record.message_id in seen:
                continue
            seen.add(record.message_id)
            records.append(record)

        return skipped


def load_records(
    root: Path,
    user: str,
    limit: int,
    *,
    priority_folders: Sequence[str] = DEFAULT_PRIORITY_FOLDERS,
    archive_folder: str = DEFAULT_ARCHIVE_FOLDER,
    clock: Clock | None = None,
    strict_dates: bool = False,
) -> list[RawRecord]:
    """Convenience wrapper around ``RecordLoader(...).load(limit)``."""
    loader = RecordLoader(
        root,
        user,
        priority_folders=priority_folders,
        archive_folder=archive_folder,
        clock=clock,
        strict_dates=strict_dates,
    )
    return loader.load(limit)
