"""
UCS2 hex text codec.

When the modem's character set is UCS2 (AT+CSCS="UCS2"), every string
parameter travels as four hex digits per character, e.g. "ABC" is sent as
"004100420043". Contact names, message bodies and even phone numbers use
this form.
"""

import logging
import re

from ..exceptions import MalformedEncodingError

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9A-Fa-f]*")

# Highest code point that fits in one UCS2 unit
_MAX_CODE_POINT = 0xFFFF


def encode_ucs2_hex(text: str) -> str:
    """
    Encode text as UCS2 hex.

    Args:
        text: Text to encode

    Returns:
        Uppercase hex string, four digits per character

    Raises:
        MalformedEncodingError: If a character is outside the 16-bit range
    """
    digits = []
    for char in text:
        code_point = ord(char)
        if code_point > _MAX_CODE_POINT:
            raise MalformedEncodingError(
                f"Character {char!r} (U+{code_point:X}) cannot be encoded in UCS2"
            )
        digits.append(f"{code_point:04X}")
    return "".join(digits)


def decode_ucs2_hex(data: str) -> str:
    """
    Decode UCS2 hex back to text.

    Args:
        data: Hex string, four digits per character (case-insensitive)

    Returns:
        Decoded text

    Raises:
        MalformedEncodingError: If the length is not a multiple of four or
            the input contains non-hex characters
    """
    if len(data) % 4 != 0:
        raise MalformedEncodingError(
            f"UCS2 hex length must be a multiple of 4, got {len(data)}",
            response=data
        )

    if not _HEX_RE.fullmatch(data):
        raise MalformedEncodingError("UCS2 hex contains non-hex characters", response=data)

    return "".join(chr(int(data[i:i + 4], 16)) for i in range(0, len(data), 4))


def decode_ucs2_hex_lenient(data: str) -> str:
    """
    Decode UCS2 hex, or return the input unchanged if it is not UCS2 hex.

    Used for fields the modem may report in either character set.
    """
    try:
        return decode_ucs2_hex(data)
    except MalformedEncodingError:
        logger.debug(f"Field is not UCS2 hex, keeping as-is: {data!r}")
        return data


def trim_quotes(text: str) -> str:
    """Remove one pair of surrounding double quotes, if present."""
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text
