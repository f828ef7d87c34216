"""Raw record model for one source email file.

Records are created by the parser and never mutated afterwards; the
transformer only reads them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RawRecord(BaseModel):
    """A parsed email file from the source archive."""

    model_config = ConfigDict(frozen=True)

    message_id: str = Field(description="Message-ID header, unique within a run")
    date: datetime = Field(description="Parsed Date header (timezone aware)")
    date_fallback: bool = Field(
        default=False,
        description="True when the Date header was unparseable and the clock was used instead",
    )

    sender: str = Field(default="", description="Raw From header")
    to: list[str] = Field(default_factory=list, description="To addresses")
    cc: list[str] = Field(default_factory=list, description="Cc addresses")
    bcc: list[str] = Field(default_factory=list, description="Bcc addresses")
    subject: str = Field(default="", description="Subject header")
    body: str = Field(default="", description="Everything after the header block")

    # Source-internal X- headers
    x_from: str = Field(default="", description="X-From header without Exchange suffix")
    x_to: str = Field(default="", description="X-To header")
    x_cc: str = Field(default="", description="X-cc header")
    x_bcc: str = Field(default="", description="X-bcc header")
    x_folder: str = Field(default="", description="X-Folder header")
    x_origin: str = Field(default="", description="X-Origin header")
    x_filename: str = Field(default="", description="X-FileName header")

    # Where the loader found the file
    origin_folder: str = Field(default="", description="Sub-folder the record was loaded from")
    origin_filename: str = Field(default="", description="File name inside the origin folder")
    file_path: str = Field(default="", description="Full path of the source file")
