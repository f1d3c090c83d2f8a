from __future__ import annotations


class CompressionEvalError(Exception):
    """Base error for benchmark configuration, corpus and result handling."""


class ConfigurationError(CompressionEvalError, ValueError):
    """A benchmark configuration cannot be run as requested."""


class LevelOutOfRangeError(ConfigurationError):
    """Requested level lies outside the method's inclusive level range."""


class EmptyResultsError(CompressionEvalError):
    """An aggregate with no samples has no mean."""


class CompressorUnavailableError(CompressionEvalError):
    """The library backing a compression method is not installed."""


class CorpusError(CompressionEvalError):
    """The corpus location exists but cannot be read as a sample directory."""
