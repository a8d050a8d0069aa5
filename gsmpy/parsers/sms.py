"""
SMS response parsers for AT commands.

Parses responses from SMS-related AT commands like:
- AT+CMGL (List messages, text mode)
- AT+CMGS (Send message)
"""

import logging
import re

from .base import ResponseParser, response_lines, split_fields, strip_prefix
from .ucs2 import decode_ucs2_hex, decode_ucs2_hex_lenient, trim_quotes
from ..types import SMSMessage
from ..exceptions import MalformedResponseError

logger = logging.getLogger(__name__)

_HEADER_PREFIX = "+CMGL:"


class SMSListParser(ResponseParser[list[SMSMessage]]):
    """
    Parser for AT+CMGL response in text mode.

    Every message is a header line followed by its body line. With the
    UCS2 character set active the body (and usually the sender) is UCS2 hex.
    """

    def __init__(self, ucs2: bool = True):
        """
        Initialize parser.

        Args:
            ucs2: Whether bodies are UCS2 hex encoded (AT+CSCS="UCS2")
        """
        self.ucs2 = ucs2

    def parse(self, response: str) -> list[SMSMessage]:
        """
        Parse AT+CMGL response.

        Expected format (multiple messages):
            +CMGL: 1,"REC READ","002B0031",,"24/01/15,10:30:45+08",145,5
            00480065006C006C006F
            +CMGL: 2,"REC UNREAD","002B0032","","24/01/15,11:00:00+08",145,2
            00480069

        An empty message has a blank body line, so each pair is anchored on
        its header: the body is the following line unless that line is the
        next header.

        Raises:
            MalformedResponseError: On a body line without a header, or a bad header
            MalformedEncodingError: If a UCS2 body is not valid hex
        """
        lines = [line.strip() for line in response.strip().splitlines()]

        messages = []
        i = 0
        while i < len(lines):
            header = lines[i]
            i += 1

            if not header:
                continue

            if not header.startswith(_HEADER_PREFIX):
                raise MalformedResponseError(
                    f"Message body without a CMGL header: {header}",
                    command="AT+CMGL",
                    response=response
                )

            body = ""
            if i < len(lines) and not lines[i].startswith(_HEADER_PREFIX):
                body = lines[i]
                i += 1

            message = self._parse_header(header, response)
            content = decode_ucs2_hex(body) if self.ucs2 else body
            messages.append(SMSMessage(content=content, **message))

        return messages

    def _parse_header(self, header: str, response: str) -> dict:
        """Parse '<index>,"<stat>","<oa>",[<alpha>],"<scts>"[,...]'."""
        fields = split_fields(strip_prefix(header, _HEADER_PREFIX))

        if len(fields) < 5:
            raise MalformedResponseError(
                f"Could not parse CMGL header: {header}",
                command="AT+CMGL",
                response=response
            )

        try:
            index = int(fields[0])
        except ValueError as e:
            raise MalformedResponseError(
                f"Invalid message index in CMGL header: {header}",
                command="AT+CMGL",
                response=response
            ) from e

        alpha = trim_quotes(fields[3]) or None
        if alpha and self.ucs2:
            alpha = decode_ucs2_hex_lenient(alpha)

        sender = trim_quotes(fields[2])
        if self.ucs2:
            sender = decode_ucs2_hex_lenient(sender)

        return {
            "index": index,
            "status": trim_quotes(fields[1]),
            "sender": sender,
            "timestamp": trim_quotes(fields[4]),
            "alpha": alpha,
        }


class MessageReferenceParser(ResponseParser[int]):
    """Parser for AT+CMGS (send message) response."""

    def parse(self, response: str) -> int:
        """
        Parse AT+CMGS response.

        Expected format:
            +CMGS: 123

        Where 123 is the message reference number. Anything the modem
        echoed before the reference line is ignored.
        """
        for line in response_lines(response):
            match = re.match(r'\+CMGS:\s*(\d+)', line)
            if match:
                return int(match.group(1))

        raise MalformedResponseError(
            "No message reference in CMGS response",
            command="AT+CMGS",
            response=response
        )
