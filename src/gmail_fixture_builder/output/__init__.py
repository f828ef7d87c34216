"""Fixture artifact serialization."""

from .writer import FixtureWriter, build_list_response, build_metadata

__all__ = ["FixtureWriter", "build_list_response", "build_metadata"]
