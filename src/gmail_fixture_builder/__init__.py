"""Gmail Fixture Builder - synthetic Gmail API corpora from maildir archives.

This package turns a folder hierarchy of raw email files into an anonymized,
time-shifted corpus shaped like Gmail API responses, suitable for driving
test emulators.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from gmail_fixture_builder.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__", "__author__"]
