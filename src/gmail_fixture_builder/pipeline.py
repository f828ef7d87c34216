"""Fixture generation pipeline.

This module wires the loader, transformer and writer together for one run.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import structlog

from gmail_fixture_builder.config import Settings
from gmail_fixture_builder.exceptions import ConfigurationError
from gmail_fixture_builder.models import GmailMessage, RunStatistics
from gmail_fixture_builder.output import FixtureWriter
from gmail_fixture_builder.source import RecordLoader
from gmail_fixture_builder.source.parsing import Clock
from gmail_fixture_builder.transform import CorpusTransformer, LabelRules

logger = structlog.get_logger()


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a completed run."""

    messages: list[GmailMessage]
    stats: RunStatistics
    written: list[Path]


class FixturePipeline:
    """Runs load -> transform -> write for one mailbox.

    Each call to ``run`` uses a fresh transformer, so runs never share
    persona or thread state.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
        now: datetime | None = None,
        label_rules: LabelRules | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings. If None, uses default settings.
            clock: Substitute for unparseable Date headers.
            now: Reference time for the default time-shift target.
            label_rules: Keyword tables for label inference.
        """
        from gmail_fixture_builder.config import get_settings

        self.settings = settings or get_settings()
        self._clock = clock
        self._now = now
        self._label_rules = label_rules

    def run(self) -> PipelineResult:
        """Execute the pipeline.

        Raises:
            ConfigurationError: If no source root is configured.
            LoadError: If the source archive cannot be read.
            OutputError: If any artifact cannot be written.
        """
        settings = self.settings
        if settings.source_root is None:
            raise ConfigurationError("source root is required (--source-root)")

        logger.info(
            "pipeline_started",
            source_root=str(settings.source_root),
            user=settings.source_user,
            limit=settings.record_limit,
        )

        loader = RecordLoader(
            settings.source_root,
            settings.source_user,
            priority_folders=settings.priority_folders,
            archive_folder=settings.archive_folder,
            clock=self._clock,
            strict_dates=settings.strict_dates,
        )
        records = loader.load(settings.record_limit)

        transformer = CorpusTransformer.from_settings(
            settings, now=self._now, label_rules=self._label_rules
        )
        messages = transformer.transform_dataset(records)
        stats = transformer.stats

        if stats.errors:
            logger.warning("transform_errors", count=len(stats.errors))
            for error in stats.errors[: settings.error_report_limit]:
                logger.warning("transform_error", error=error)

        writer = FixtureWriter(settings.output_dir)
        written = writer.write_all(messages, stats)

        logger.info(
            "pipeline_completed",
            output_dir=str(settings.output_dir),
            messages=len(messages),
            threads=stats.thread_count,
            personas=len(stats.persona_map),
            files=[p.name for p in written],
        )
        return PipelineResult(messages=messages, stats=stats, written=written)
