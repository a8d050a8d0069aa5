"""
GNSS response parsers.

Parses the AT+CGNSINF navigation information reply.
"""

import logging
from typing import Optional

from .base import ResponseParser, response_lines, split_fields, strip_prefix
from ..types import GPSFix
from ..exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

# UTC date & time is packed as yyyyMMddhhmmss.sss
_HOUR = slice(8, 10)
_MINUTE = slice(10, 12)
_SECOND = slice(12, 14)

_MIN_FIELDS = 6


def _optional_int(value: str) -> Optional[int]:
    return int(value) if value else None


def _optional_float(value: str) -> Optional[float]:
    return float(value) if value else None


class GPSFixParser(ResponseParser[GPSFix]):
    """Parser for AT+CGNSINF (GNSS navigation information) response."""

    def parse(self, response: str) -> GPSFix:
        """
        Parse AT+CGNSINF response.

        Expected format:
            +CGNSINF: 1,1,20240115103045.000,31.230416,121.473701,15.200,0.00,...

        Without a fix the receiver leaves date, position and altitude empty;
        those map to None.
        """
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError(
                "Empty GNSS response",
                command="AT+CGNSINF",
                response=response
            )

        line = lines[-1]
        fields = split_fields(strip_prefix(line, "+CGNSINF:"))
        if len(fields) < _MIN_FIELDS:
            raise MalformedResponseError(
                f"Expected at least {_MIN_FIELDS} fields in GNSS info, got {len(fields)}",
                command="AT+CGNSINF",
                response=response
            )

        stamp = fields[2]
        time_of_day = None
        if stamp:
            if len(stamp) < _SECOND.stop or not stamp[:_SECOND.stop].isdigit():
                raise MalformedResponseError(
                    f"Invalid GNSS timestamp: {stamp}",
                    command="AT+CGNSINF",
                    response=response
                )
            time_of_day = f"{stamp[_HOUR]}:{stamp[_MINUTE]}:{stamp[_SECOND]}"

        try:
            return GPSFix(
                run_status=_optional_int(fields[0]),
                fix_status=_optional_int(fields[1]),
                time=time_of_day,
                latitude=_optional_float(fields[3]),
                longitude=_optional_float(fields[4]),
                altitude=_optional_float(fields[5]),
                raw_reply=line
            )
        except ValueError as e:
            raise MalformedResponseError(
                f"Failed to parse GNSS info: {line}",
                command="AT+CGNSINF",
                response=response
            ) from e
