"""Command-line interface for Gmail Fixture Builder.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

import structlog

from gmail_fixture_builder import __version__
from gmail_fixture_builder.config import Settings, get_settings
from gmail_fixture_builder.exceptions import ConfigurationError, LoadError, OutputError
from gmail_fixture_builder.pipeline import FixturePipeline

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmail-fixture-builder",
        description="Transform a maildir archive into Gmail API test fixtures",
    )
    parser.add_argument(
        "--source-root",
        type=Path,
        default=None,
        help="Path to the maildir archive (default: settings source_root)",
    )
    parser.add_argument(
        "--user",
        default=None,
        help="Mailbox owner directory to process (default: settings source_user)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of emails to process (default: settings record_limit)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output directory for fixture files (default: settings output_dir)",
    )
    parser.add_argument(
        "--primary-email",
        default=None,
        help="Address that replaces the mailbox owner (default: settings primary_email)",
    )
    parser.add_argument(
        "--target-start",
        type=datetime.fromisoformat,
        default=None,
        help="ISO date the source epoch is shifted to (default: three years ago)",
    )
    parser.add_argument(
        "--strict-dates",
        action="store_true",
        default=None,
        help="Skip records with unparseable Date headers instead of using the current time",
    )
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {
        "source_root": args.source_root,
        "source_user": args.user,
        "record_limit": args.limit,
        "output_dir": args.output,
        "primary_email": args.primary_email,
        "target_start": args.target_start,
        "strict_dates": args.strict_dates,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    if args.limit is not None and args.limit < 0:
        raise ConfigurationError(f"--limit must be >= 0, got {args.limit}")
    return settings.model_copy(update=update)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Gmail Fixture Builder CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Configure logging
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
    )

    parsed = _build_parser().parse_args(args)
    logger.info("gmail_fixture_builder_started", version=__version__, debug=settings.debug)

    try:
        settings = _apply_overrides(settings, parsed)
        result = FixturePipeline(settings).run()
    except (ConfigurationError, LoadError, OutputError) as exc:
        logger.error("fixture_generation_failed", error=str(exc), error_type=type(exc).__name__)
        return 1

    print(
        f"Transformed {result.stats.total_transformed}/{result.stats.total_processed} emails "
        f"into {result.stats.thread_count} threads with {len(result.stats.persona_map)} personas "
        f"({len(result.stats.errors)} errors) -> {settings.output_dir}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
