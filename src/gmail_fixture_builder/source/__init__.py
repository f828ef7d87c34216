"""Reading the source maildir archive.

This package walks the archive layout and parses each raw email file into a
``RawRecord``.
"""

from .loader import RecordLoader, load_records
from .parsing import parse_record, parse_record_file

__all__ = ["RecordLoader", "load_records", "parse_record", "parse_record_file"]
