"""
Device information manager.

Handles identity, capability and terminal configuration queries.
"""

import logging
from typing import TYPE_CHECKING

from ..types import CharacterSet, ServiceClass
from ..core.protocol import LONG_TIMEOUT
from ..parsers.base import SimpleValueParser, IntValueParser, CommaSeparatedParser
from ..parsers.ucs2 import trim_quotes
from ..exceptions import MalformedResponseError

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class DeviceManager:
    """
    Manages device information and terminal settings.

    Provides methods for querying device identity, capabilities, and for
    selecting the character set and service class.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize device manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core

        logger.debug("Initialized DeviceManager")

    def check(self) -> None:
        """
        Check that the modem is operational.

        Raises:
            ModemError: If the modem answers ERROR
            ATTimeoutError: If the modem does not answer
        """
        logger.info("Checking modem")
        self.modem.send_at("AT")

    def get_manufacturer(self) -> str:
        """Get the manufacturer identification (AT+CGMI)."""
        logger.info("Getting manufacturer")
        response = self.modem.send_at("AT+CGMI")
        return SimpleValueParser("+CGMI:").parse(response)

    def get_model(self) -> str:
        """Get the model identification (AT+CGMM)."""
        logger.info("Getting model")
        response = self.modem.send_at("AT+CGMM")
        return SimpleValueParser("+CGMM:").parse(response)

    def get_revision(self) -> str:
        """Get the software revision identification (AT+CGMR)."""
        logger.info("Getting revision")
        response = self.modem.send_at("AT+CGMR")
        return SimpleValueParser("+CGMR:").parse(response)

    def get_capabilities(self) -> list[str]:
        """
        Get the supported command set list (AT+GCAP).

        Returns:
            Command sets, e.g. ["+CGSM", "+FCLASS", "+DS"]

        Example:

        .. code-block:: python

            if "+CGSM" in modem.device.get_capabilities():
                print("GSM command set supported")
        """
        logger.info("Getting capabilities")
        response = self.modem.send_at("AT+GCAP")
        return CommaSeparatedParser("+GCAP:").parse(response)

    def get_serial_number(self) -> str:
        """Get the device serial number / IMEI (AT+CGSN)."""
        logger.info("Getting serial number")
        response = self.modem.send_at("AT+CGSN", timeout=LONG_TIMEOUT)
        return SimpleValueParser("+CGSN:").parse(response)

    def get_subscriber_id(self) -> str:
        """Get the IMSI stored in the SIM (AT+CIMI)."""
        logger.info("Getting subscriber id")
        response = self.modem.send_at("AT+CIMI", timeout=LONG_TIMEOUT)
        return SimpleValueParser("+CIMI:").parse(response)

    def get_subscriber_number(self) -> str:
        """Get the subscriber number entry stored in the SIM (AT+CNUM)."""
        logger.info("Getting subscriber number")
        response = self.modem.send_at("AT+CNUM")
        return SimpleValueParser("+CNUM:").parse(response)

    def get_identification(self) -> str:
        """Get product identification information (ATI)."""
        logger.info("Getting identification")
        return self.modem.send_at("ATI")

    def get_service_class(self) -> ServiceClass:
        """
        Get the active service class (data, fax or voice).

        Returns:
            ServiceClass enum value
        """
        logger.info("Getting service class")
        response = self.modem.send_at("AT+FCLASS?")
        value = IntValueParser("+FCLASS:").parse(response)

        try:
            return ServiceClass(value)
        except ValueError as e:
            raise MalformedResponseError(
                f"Unknown service class: {value}",
                command="AT+FCLASS?",
                response=response
            ) from e

    def set_service_class(self, service_class: ServiceClass) -> None:
        """
        Set the active service class.

        Calls placed afterwards are data, fax or voice calls accordingly.
        """
        logger.info(f"Setting service class to {service_class.name}")
        self.modem.send_at(f"AT+FCLASS={int(service_class)}")

    def get_character_set(self) -> str:
        """
        Get the character set currently used by the device.

        Returns:
            Character set name, e.g. "UCS2"
        """
        logger.info("Getting character set")
        response = self.modem.send_at("AT+CSCS?")
        return trim_quotes(SimpleValueParser("+CSCS:").parse(response))

    def set_character_set(self, character_set: CharacterSet) -> None:
        """Set the character set used for string parameters."""
        logger.info(f"Setting character set to {character_set.value}")
        self.modem.send_at(f'AT+CSCS="{character_set.value}"')

    def set_echo_mode(self, enabled: bool) -> None:
        """
        Set AT command echo mode on the device.

        Args:
            enabled: True to enable echo (ATE1), False to disable (ATE0)
        """
        cmd = "ATE1" if enabled else "ATE0"
        logger.info(f"Setting echo mode: {'ON' if enabled else 'OFF'} via {cmd}")
        self.modem.send_at(cmd)
