"""
Base parser classes and utilities.

Provides reusable parsing functionality for AT command responses.
"""

import logging
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional

from ..exceptions import MalformedResponseError
from .ucs2 import trim_quotes

logger = logging.getLogger(__name__)

T = TypeVar('T')


def response_lines(response: str) -> list[str]:
    """Split a response body into its non-empty, stripped lines."""
    return [line.strip() for line in response.splitlines() if line.strip()]


def strip_prefix(line: str, prefix: Optional[str]) -> str:
    """
    Remove a "+CMD:" prefix from a response line.

    Args:
        line: Response line (e.g., "+CSQ: 15,99")
        prefix: Prefix to remove (e.g., "+CSQ:"), or None

    Returns:
        Line with prefix removed (e.g., "15,99")
    """
    if prefix and line.startswith(prefix):
        return line[len(prefix):].strip()
    return line


def split_fields(line: str) -> list[str]:
    """
    Split a comma-separated response line.

    Commas inside double quotes do not split, so quoted timestamps such as
    "24/01/15,10:30:45+08" stay in one field. Quotes are kept.
    """
    fields = []
    current = []
    quoted = False

    for char in line:
        if char == '"':
            quoted = not quoted
            current.append(char)
        elif char == "," and not quoted:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


class ResponseParser(ABC, Generic[T]):
    """
    Abstract base class for response parsers.

    Parsers convert the text of a completed AT command response into typed
    data structures. They never see partial responses.
    """

    @abstractmethod
    def parse(self, response: str) -> T:
        """
        Parse AT command response.

        Args:
            response: Response text, terminator already removed

        Returns:
            Parsed data structure

        Raises:
            MalformedResponseError: If response cannot be parsed
        """
        pass


class SimpleValueParser(ResponseParser[str]):
    """Parser for simple single-value responses."""

    def __init__(self, prefix: Optional[str] = None):
        """
        Initialize parser.

        Args:
            prefix: Optional "+CMD:" prefix to strip from the value
        """
        self.prefix = prefix

    def parse(self, response: str) -> str:
        """Parse simple value response."""
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError("Empty response", response=response)
        return strip_prefix(lines[0], self.prefix)


class IntValueParser(ResponseParser[int]):
    """Parser for integer value responses."""

    def __init__(self, prefix: Optional[str] = None):
        self.prefix = prefix

    def parse(self, response: str) -> int:
        """Parse integer value."""
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError("Empty response", response=response)

        value = strip_prefix(lines[0], self.prefix)
        try:
            return int(value)
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse integer: {value}",
                response=response
            ) from e


class CommaSeparatedParser(ResponseParser[list[str]]):
    """Parser for comma-separated values."""

    def __init__(self, prefix: Optional[str] = None, expected_parts: Optional[int] = None):
        """
        Initialize parser.

        Args:
            prefix: Optional "+CMD:" prefix to strip
            expected_parts: Expected number of parts (None = any)
        """
        self.prefix = prefix
        self.expected_parts = expected_parts

    def parse(self, response: str) -> list[str]:
        """Parse comma-separated values."""
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError("Empty response", response=response)

        parts = [trim_quotes(p) for p in split_fields(strip_prefix(lines[0], self.prefix))]

        if self.expected_parts is not None and len(parts) != self.expected_parts:
            raise MalformedResponseError(
                f"Expected {self.expected_parts} parts, got {len(parts)}",
                response=response
            )

        return parts
