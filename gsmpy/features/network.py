"""
Network manager.

Handles signal quality and operator queries.
"""

import logging
from typing import TYPE_CHECKING

from ..types import SignalQuality
from ..parsers.network import SignalQualityParser, CurrentOperatorParser

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class NetworkManager:
    """
    Manages network operations.

    Provides methods for signal monitoring and operator lookup.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize network manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core

        # Parsers
        self._signal_parser = SignalQualityParser()
        self._operator_parser = CurrentOperatorParser()

        logger.debug("Initialized NetworkManager")

    def get_signal_quality(self) -> SignalQuality:
        """
        Get signal quality.

        Returns:
            SignalQuality with RSSI and BER values

        Example:

        .. code-block:: python

            signal = modem.network.get_signal_quality()
            if signal.is_valid:
                print(f"Signal: {signal.rssi_dbm} dBm")
            else:
                print("No signal")
        """
        logger.info("Getting signal quality")
        response = self.modem.send_at("AT+CSQ")
        signal = self._signal_parser.parse(response)
        logger.debug(f"Signal quality: RSSI={signal.rssi}, BER={signal.ber}")
        return signal

    def get_current_operator(self) -> str:
        """
        Get the current network operator.

        Returns:
            Operator name, or "Unknown" if none is selected
        """
        logger.info("Getting current operator")
        response = self.modem.send_at("AT+COPS?")
        operator = self._operator_parser.parse(response)
        logger.debug(f"Current operator: {operator}")
        return operator
