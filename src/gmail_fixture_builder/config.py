"""Configuration management for Gmail Fixture Builder.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the FIXTURE_BUILDER_ prefix (e.g., FIXTURE_BUILDER_RECORD_LIMIT).
    """

    model_config = SettingsConfigDict(
        env_prefix="FIXTURE_BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Source archive
    source_root: Path | None = Field(
        default=None,
        description="Root of the maildir archive (one sub-directory per mailbox owner)",
    )
    source_user: str = Field(
        default="kaminski-v",
        description="Mailbox owner directory to transform",
    )
    record_limit: int = Field(
        default=5000,
        ge=0,
        description="Maximum number of records to load",
    )
    priority_folders: list[str] = Field(
        default_factory=lambda: ["sent_items", "inbox", "discussion_threads", "personal"],
        description="Folders scanned first, in order",
    )
    archive_folder: str = Field(
        default="all_documents",
        description="Catch-all folder scanned last while under the record limit",
    )
    strict_dates: bool = Field(
        default=False,
        description=(
            "Reject records whose Date header cannot be parsed instead of "
            "substituting the current time"
        ),
    )

    # Output
    output_dir: Path = Field(
        default=Path("./test-data"),
        description="Directory receiving the generated fixture files",
    )
    primary_email: str = Field(
        default="test@example.com",
        description="Address that replaces the mailbox owner in the output",
    )

    # Time shift
    source_epoch: datetime = Field(
        default=datetime(2000, 1, 1, tzinfo=timezone.utc),
        description="Start of the source corpus; mapped onto target_start",
    )
    target_start: datetime | None = Field(
        default=None,
        description="Where source_epoch lands after shifting (default: now minus target_offset_years)",
    )
    target_offset_years: int = Field(
        default=3,
        ge=0,
        description="Years before now used when target_start is not set",
    )

    # Anonymization
    source_org_name: str = Field(default="Enron", description="Organization name to replace")
    source_org_domain: str = Field(default="enron.com", description="Organization mail domain")
    placeholder_org_name: str = Field(default="TechCorp", description="Replacement organization")
    placeholder_domain: str = Field(
        default="example.com",
        description="Domain used for correspondents without a persona",
    )

    # Application Configuration
    error_report_limit: int = Field(
        default=5,
        ge=0,
        description="Number of transform errors echoed to the log at the end of a run",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    @property
    def owner_fragment(self) -> str:
        """Identity fragment used to recognise the mailbox owner (``kaminski`` for ``kaminski-v``)."""
        return self.source_user.split("-")[0].lower()

    def resolve_target_start(self, now: datetime | None = None) -> datetime:
        """Return the configured target start or ``now`` minus the offset years."""
        if self.target_start is not None:
            if self.target_start.tzinfo is None:
                return self.target_start.replace(tzinfo=timezone.utc)
            return self.target_start

        now = now or datetime.now(timezone.utc)
        year = now.year - self.target_offset_years
        try:
            return now.replace(year=year)
        except ValueError:
            # Feb 29 in a non-leap target year
            return now.replace(year=year, month=3, day=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
