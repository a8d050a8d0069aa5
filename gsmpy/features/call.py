"""
Call manager.

Handles dialing, answering and hanging up calls.
"""

import logging
import re
from typing import TYPE_CHECKING

from ..parsers.base import IntValueParser

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)

_DIAL_STRING_RE = re.compile(r"[0-9*#ABCD+]+")

MAX_AUTO_ANSWER_RINGS = 255


class CallManager:
    """
    Manages call state.

    The call type of dial() (data, fax or voice) follows the active service
    class, see DeviceManager.set_service_class().
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        self.modem = modem_core
        logger.debug("Initialized CallManager")

    @staticmethod
    def _validate_number(number: str) -> None:
        if not _DIAL_STRING_RE.fullmatch(number):
            raise ValueError(
                f"Invalid dial string {number!r}: only 0-9, *, #, A, B, C, D and + are allowed"
            )

    def dial(self, number: str) -> str:
        """
        Start a call to the given number.

        Args:
            number: Phone number to dial

        Returns:
            Modem response text

        Raises:
            ValueError: If the number contains characters the modem rejects
        """
        self._validate_number(number)
        logger.info(f"Dialing {number}")
        return self.modem.send_at(f"ATD{number}")

    def dial_voice(self, number: str) -> str:
        """Start a voice call to the given number."""
        self._validate_number(number)
        logger.info(f"Dialing voice call to {number}")
        return self.modem.send_at(f"ATD{number};")

    def answer(self) -> str:
        """Answer an incoming call (when auto answer is disabled)."""
        logger.info("Answering call")
        return self.modem.send_at("ATA")

    def hangup(self) -> None:
        """Close the current conversation (voice, data or fax)."""
        logger.info("Hanging up")
        self.modem.send_at("AT+CHUP")

    def get_auto_answer_rings(self) -> int:
        """
        Get the number of rings before the modem answers automatically.

        Returns:
            Number of rings; 0 means auto answer is disabled
        """
        logger.info("Getting auto answer rings")
        response = self.modem.send_at("ATS0?")
        return IntValueParser().parse(response)

    def set_auto_answer_rings(self, rings: int) -> None:
        """
        Set the number of rings before the modem answers automatically.

        Args:
            rings: 0-255, 0 disables auto answer
        """
        if not 0 <= rings <= MAX_AUTO_ANSWER_RINGS:
            raise ValueError(f"Rings must be between 0 and {MAX_AUTO_ANSWER_RINGS}, got {rings}")

        logger.info(f"Setting auto answer rings to {rings}")
        self.modem.send_at(f"ATS0={rings}")
