"""
GPS manager.

Handles GNSS power and position queries.
"""

import logging
from typing import TYPE_CHECKING

from ..types import GPSFix
from ..parsers.gps import GPSFixParser

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class GPSManager:
    """
    Manages the GNSS receiver.

    Tracks whether the receiver was powered on since the last connect, so that
    get_position() only sends the power command when needed.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        self.modem = modem_core
        self._parser = GPSFixParser()
        self._is_on = False

        logger.debug("Initialized GPSManager")

    @property
    def is_on(self) -> bool:
        """Whether the receiver was powered on through this manager."""
        return self._is_on

    def reset_state(self) -> None:
        """Forget the tracked power state; the next get_position() powers on again."""
        self._is_on = False

    def set_power(self, on: bool) -> str:
        """
        Power the GNSS receiver on or off (AT+CGNSPWR).

        Args:
            on: True to power on, False to power off

        Returns:
            Modem response text
        """
        logger.info(f"Turning GPS {'on' if on else 'off'}")
        reply = self.modem.send_at(f"AT+CGNSPWR={1 if on else 0}")
        self._is_on = on
        return reply

    def turn_on(self) -> str:
        """Power the GNSS receiver on."""
        return self.set_power(True)

    def turn_off(self) -> str:
        """Power the GNSS receiver off."""
        return self.set_power(False)

    def get_position(self) -> GPSFix:
        """
        Get the current GNSS fix, powering the receiver on first if needed.

        Returns:
            GPSFix; check has_fix before trusting the position

        Example:

        .. code-block:: python

            fix = modem.gps.get_position()
            if fix.has_fix:
                print(f"{fix.time} {fix.latitude},{fix.longitude}")
        """
        if not self._is_on:
            self.turn_on()

        logger.info("Getting GPS position")
        response = self.modem.send_at("AT+CGNSINF")
        fix = self._parser.parse(response)
        logger.debug(f"GPS fix: {fix}")
        return fix
