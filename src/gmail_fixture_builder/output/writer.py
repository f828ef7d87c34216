"""Write the generated corpus and its derived views to disk.

The output directory holds four JSON artifacts consumed by the Gmail
emulator: the full message list, a ``messages.list`` response, aggregate
metadata and the run statistics.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from pathlib import Path

import structlog
from pydantic import BaseModel, TypeAdapter

from gmail_fixture_builder.exceptions import OutputError
from gmail_fixture_builder.models import (
    CorpusMetadata,
    DateRange,
    GmailMessage,
    ListMessagesResponse,
    MessageRef,
    RunStatistics,
)

logger = structlog.get_logger()

MESSAGES_FILE = "gmail_messages.json"
LIST_RESPONSE_FILE = "list_messages_response.json"
METADATA_FILE = "test_metadata.json"
STATS_FILE = "transform_stats.json"

_MESSAGES_ADAPTER = TypeAdapter(list[GmailMessage])


def build_list_response(messages: Sequence[GmailMessage]) -> ListMessagesResponse:
    return ListMessagesResponse(
        messages=[MessageRef(id=m.id, thread_id=m.thread_id) for m in messages],
        result_size_estimate=len(messages),
    )


def label_distribution(messages: Sequence[GmailMessage]) -> dict[str, int]:
    counts: Counter[str] = Counter()
    for message in messages:
        counts.update(message.label_ids)
    return dict(counts)


def build_metadata(messages: Sequence[GmailMessage]) -> CorpusMetadata:
    """Aggregate metadata; the date range uses the first and last message as given."""
    date_range = DateRange()
    if messages:
        date_range = DateRange(
            start=messages[0].payload.header("Date"),
            end=messages[-1].payload.header("Date"),
        )

    return CorpusMetadata(
        total_messages=len(messages),
        date_range=date_range,
        label_distribution=label_distribution(messages),
        thread_count=len({m.thread_id for m in messages}),
    )


class FixtureWriter:
    """Writes fixture artifacts into one output directory."""

    def __init__(self, output_dir: Path) -> None:
        """Create a writer.

        Args:
            output_dir: Directory receiving the JSON files; created on demand.
        """

        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def initialize(self) -> None:
        """Create the output directory.

        Raises:
            OutputError: If the directory cannot be created.
        """

        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"cannot create output directory {self._output_dir}: {exc}") from exc

    def write_all(self, messages: Sequence[GmailMessage], stats: RunStatistics) -> list[Path]:
        """Write every artifact in order and return the written paths."""

        self.initialize()
        messages = list(messages)
        return [
            self._write_bytes(
                MESSAGES_FILE,
                _MESSAGES_ADAPTER.dump_json(messages, indent=2, by_alias=True, exclude_none=True),
            ),
            self._write_model(LIST_RESPONSE_FILE, build_list_response(messages), exclude_none=True),
            self._write_model(METADATA_FILE, build_metadata(messages)),
            self._write_model(STATS_FILE, stats),
        ]

    def _write_model(self, name: str, model: BaseModel, *, exclude_none: bool = False) -> Path:
        data = model.model_dump_json(indent=2, by_alias=True, exclude_none=exclude_none)
        return self._write_bytes(name, data.encode("utf-8"))

    def _write_bytes(self, name: str, data: bytes) -> Path:
        path = self._output_dir / name
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise OutputError(f"cannot write {path}: {exc}") from exc

        logger.info("artifact_written", path=str(path), size=len(data))
        return path
