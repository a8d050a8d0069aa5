"""
Main GSMModem class.

User-facing API that coordinates all feature managers.
"""

import logging
from typing import Optional

from .core import (
    ModemCore,
    SerialTransport,
    Transport,
    DEFAULT_BAUDRATE,
    DEFAULT_TIMEOUT,
    RESPONSE_GRACE_PERIOD,
)
from .core.modem import DisconnectCallback
from .features import (
    CallManager,
    DeviceManager,
    GPSManager,
    NetworkManager,
    PhoneBookManager,
    SMSManager,
)

logger = logging.getLogger(__name__)


class GSMModem:
    """
    Main interface for GSM modem control.

    Provides a high-level API for modem operations through feature managers:

    - device: Identity, capabilities, character set, service class
    - call: Dial, answer, hang up
    - network: Signal quality, operator
    - phonebook: Phonebook entries
    - sms: SMS messaging and storage
    - gps: GNSS power and position

    Example usage with context manager:

    .. code-block:: python

        with GSMModem(port="/dev/ttyUSB0") as modem:
            print(modem.device.get_model())

            signal = modem.network.get_signal_quality()
            print(f"Signal: {signal.rssi_dbm} dBm")

    Example usage with manual lifecycle management:

    .. code-block:: python

        modem = GSMModem(port="/dev/ttyUSB0")
        modem.connect()
        # ... use modem ...
        modem.disconnect()
    """

    def __init__(
        self,
        port: Optional[str] = None,
        transport: Optional[Transport] = None,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
        grace_period: float = RESPONSE_GRACE_PERIOD,
        auto_connect: bool = False,
        on_disconnect: Optional[DisconnectCallback] = None
    ) -> None:
        """
        Initialize GSMModem.

        Args:
            port: Serial port path (e.g., "/dev/ttyUSB0"). Either port or transport required.
            transport: Custom transport instance (for testing). Overrides port if provided.
            baudrate: Serial port baud rate (default: 460800)
            timeout: Default AT command timeout in seconds (default: 5.0)
            grace_period: Delay before a resolved response is returned (default: 0.02)
            auto_connect: Connect immediately (default: False)
            on_disconnect: Optional callback function called when device disconnects.
                          Signature: callback(exception: Exception) -> None

        Raises:
            ValueError: If neither port nor transport is provided
            TransportError: If auto_connect is set and the port cannot be opened

        Example:

        .. code-block:: python

            # Using serial port
            modem = GSMModem(port="/dev/ttyUSB0", baudrate=115200)

            # Using custom transport (for testing)
            from gsmpy.core import MockTransport
            modem = GSMModem(transport=MockTransport())
        """
        if transport is None and port is None:
            raise ValueError("Either 'port' or 'transport' must be provided")

        if transport is None:
            transport = SerialTransport(port=port, baudrate=baudrate)
            logger.info(f"Created serial transport for {port}")

        self.port = port
        self._core = ModemCore(
            transport=transport,
            timeout=timeout,
            grace_period=grace_period,
            on_disconnect=on_disconnect
        )

        self.device = DeviceManager(self._core)
        self.call = CallManager(self._core)
        self.network = NetworkManager(self._core)
        self.phonebook = PhoneBookManager(self._core)
        self.sms = SMSManager(self._core)
        self.gps = GPSManager(self._core)

        logger.info("Initialized GSMModem")

        if auto_connect:
            self.connect()

    def connect(self) -> None:
        """
        Connect to the modem.

        Opens the transport and starts the reader thread.

        Raises:
            GSMError: If already connected
            TransportError: If the transport cannot be opened
        """
        self._core.connect()
        # The device may have been power-cycled while we were away
        self.gps.reset_state()

    def disconnect(self) -> None:
        """
        Disconnect from the modem.

        Stops the reader thread and closes the transport.
        """
        self._core.disconnect()

    def send_raw_at(self, cmd: str, timeout: Optional[float] = None) -> str:
        """
        Send a raw AT command.

        For advanced users who need to send commands not covered by feature managers.

        Args:
            cmd: AT command (e.g., "AT+CPAS")
            timeout: Command timeout in seconds (uses default if None)

        Returns:
            Response text without the final "OK"

        Raises:
            ATTimeoutError: If command times out
            ModemError: If command returns ERROR

        Example:

        .. code-block:: python

            status = modem.send_raw_at("AT+CPAS")
        """
        return self._core.send_at(cmd, timeout=timeout)

    def send_raw_payload(self, payload: str, timeout: Optional[float] = None) -> str:
        """
        Send data after a ">" prompt, terminated with Ctrl+Z.

        Example:

        .. code-block:: python

            modem.send_raw_at('AT+CMGS="+1234567890"')
            modem.send_raw_payload("Hello")
        """
        return self._core.send_payload(payload, timeout=timeout)

    @property
    def is_connected(self) -> bool:
        """
        Check if the modem is connected.

        Returns:
            True if connected, False otherwise
        """
        return self._core.is_connected()

    @property
    def is_busy(self) -> bool:
        """
        Check if a command is in flight.

        Returns:
            True while waiting for a response
        """
        return self._core.is_busy()

    @property
    def is_running(self) -> bool:
        """
        Check if the reader thread is running.

        Returns:
            True if running, False otherwise
        """
        return self._core.is_running()

    @property
    def is_disconnected(self) -> bool:
        """
        Check if the device was disconnected.

        Returns:
            True if device disconnected, False otherwise

        Example:

        .. code-block:: python

            if modem.is_disconnected:
                print("Device was disconnected!")
                # Reconnect or handle error
        """
        return self._core.is_disconnected()

    def __enter__(self):
        """
        Context manager entry.

        Automatically connects the modem if not already connected.
        """
        if not self.is_connected:
            self.connect()
        return self

    def __exit__(self, *exc):
        """
        Context manager exit.

        Automatically disconnects the modem.
        """
        self.disconnect()

    def __repr__(self) -> str:
        """String representation of modem."""
        status = "Connected" if self.is_connected else "Not Connected"
        return f"<GSMModem [{status}] {self.port or 'custom transport'}>"
