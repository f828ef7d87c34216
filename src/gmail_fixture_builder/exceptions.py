"""Custom exceptions for Gmail Fixture Builder."""


class FixtureBuilderError(Exception):
    """Base exception for all Gmail Fixture Builder errors."""


class ConfigurationError(FixtureBuilderError):
    """Exception raised for configuration related errors."""


class LoadError(FixtureBuilderError):
    """Exception raised when the source archive cannot be loaded."""


class ParseError(FixtureBuilderError):
    """Exception raised when a raw email file cannot be parsed."""


class TransformError(FixtureBuilderError):
    """Exception raised when a single record cannot be transformed."""


class OutputError(FixtureBuilderError):
    """Exception raised when fixture artifacts cannot be written."""
