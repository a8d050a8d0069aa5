"""
Response parsers for AT command responses.

Provides type-safe parsing of modem responses into structured data.
"""

from .base import ResponseParser, SimpleValueParser, IntValueParser, CommaSeparatedParser
from .network import SignalQualityParser, CurrentOperatorParser
from .phonebook import ContactListParser, PhoneBookUsageParser
from .sms import SMSListParser, MessageReferenceParser
from .gps import GPSFixParser
from .ucs2 import encode_ucs2_hex, decode_ucs2_hex, decode_ucs2_hex_lenient, trim_quotes

__all__ = [
    "ResponseParser",
    "SimpleValueParser",
    "IntValueParser",
    "CommaSeparatedParser",
    "SignalQualityParser",
    "CurrentOperatorParser",
    "ContactListParser",
    "PhoneBookUsageParser",
    "SMSListParser",
    "MessageReferenceParser",
    "GPSFixParser",
    "encode_ucs2_hex",
    "decode_ucs2_hex",
    "decode_ucs2_hex_lenient",
    "trim_quotes",
]
