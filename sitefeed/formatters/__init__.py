"""Output formatters."""
from .console import ConsoleFormatter
from .jsonfeed import JSONFeedFormatter

__all__ = ["ConsoleFormatter", "JSONFeedFormatter"]
