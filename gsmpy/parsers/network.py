"""
Network-specific response parsers.

Parses responses for signal quality and operator commands.
"""

import logging

from .base import ResponseParser, response_lines, split_fields, strip_prefix
from .ucs2 import trim_quotes
from ..types import SignalQuality, SignalValue, UNKNOWN
from ..exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

# Vendor sentinel for "not known or not detectable"
_NOT_DETECTABLE = 99


def _signal_value(raw: str) -> SignalValue:
    value = int(raw)
    return UNKNOWN if value == _NOT_DETECTABLE else value


class SignalQualityParser(ResponseParser[SignalQuality]):
    """Parser for AT+CSQ (signal quality) response."""

    def parse(self, response: str) -> SignalQuality:
        """
        Parse AT+CSQ response.

        Expected format: "+CSQ: 24,99" (prefix optional)
        """
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError(
                "Empty signal quality response",
                command="AT+CSQ",
                response=response
            )

        try:
            rssi_str, ber_str = strip_prefix(lines[0], "+CSQ:").split(",")
            return SignalQuality(rssi=_signal_value(rssi_str), ber=_signal_value(ber_str))
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse signal quality: {lines[0]}",
                command="AT+CSQ",
                response=response
            ) from e


class CurrentOperatorParser(ResponseParser[str]):
    """Parser for AT+COPS? (current operator) response."""

    def parse(self, response: str) -> str:
        """
        Parse AT+COPS? response.

        Expected format: '+COPS: 0,0,"Vodafone"'
        Returns "Unknown" if no operator is selected (e.g., "+COPS: 0")
        """
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError(
                "Empty operator response",
                command="AT+COPS?",
                response=response
            )

        parts = split_fields(strip_prefix(lines[0], "+COPS:"))
        if len(parts) > 2 and parts[2]:
            return trim_quotes(parts[2])
        return "Unknown"
