"""
Phonebook response parsers.

Parses responses from phonebook AT commands:
- AT+CPBR (Read entries)
- AT+CPBS? (Selected storage and usage)
"""

import logging
import re

from .base import ResponseParser, response_lines, split_fields, strip_prefix
from .ucs2 import decode_ucs2_hex_lenient
from ..types import Contact, PhoneBookUsage
from ..exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

# [+CPBR: ]<index>,"<number>",<type>,"<text>"[,...]
_CONTACT_RE = re.compile(
    r'(?:\+CPBR:\s*)?(\d+),"([^"]*)",(\d+),"([^"]*)"(?:,.*)?'
)


class ContactListParser(ResponseParser[list[Contact]]):
    """
    Parser for AT+CPBR (read phonebook entries) response.

    Lines that do not look like a phonebook entry are skipped rather than
    failing the whole listing. With ``ucs2`` set, names are decoded from UCS2
    hex when they are well-formed hex and kept verbatim otherwise; a plain
    text name such as "CAFE" would be misread as hex, so parse replies read
    under another character set with ``ucs2=False``.
    """

    def __init__(self, ucs2: bool = True):
        """
        Initialize parser.

        Args:
            ucs2: Whether names are UCS2 hex encoded (AT+CSCS="UCS2")
        """
        self.ucs2 = ucs2

    def parse(self, response: str) -> list[Contact]:
        """
        Parse AT+CPBR response.

        Expected format (one entry per line):
            +CPBR: 1,"1234",129,"004100420043"
            +CPBR: 3,"+5678",145,"0058"
        """
        contacts = []

        for line in response_lines(response):
            match = _CONTACT_RE.fullmatch(line)
            if not match:
                logger.debug(f"Skipping malformed phonebook line: {line!r}")
                continue

            name = match.group(4)
            if self.ucs2:
                name = decode_ucs2_hex_lenient(name)

            contacts.append(Contact(
                index=int(match.group(1)),
                number=match.group(2),
                number_type=int(match.group(3)),
                name=name
            ))

        return contacts


class PhoneBookUsageParser(ResponseParser[PhoneBookUsage]):
    """Parser for AT+CPBS? (phonebook storage usage) response."""

    def parse(self, response: str) -> PhoneBookUsage:
        """
        Parse AT+CPBS? response.

        Expected format: '+CPBS: "SM",12,250'
        """
        lines = response_lines(response)
        if not lines:
            raise MalformedResponseError(
                "Empty phonebook storage response",
                command="AT+CPBS?",
                response=response
            )

        parts = split_fields(strip_prefix(lines[0], "+CPBS:"))
        try:
            return PhoneBookUsage(used=int(parts[1]), capacity=int(parts[2]))
        except (ValueError, IndexError) as e:
            raise MalformedResponseError(
                f"Failed to parse phonebook usage: {lines[0]}",
                command="AT+CPBS?",
                response=response
            ) from e
