"""
Core modem class coordinating transport and protocol engine.

This is the foundation that feature managers build upon.
"""

import logging
import threading
import time
from typing import Callable, Optional

from .transport import Transport
from .protocol import ATProtocol, DEFAULT_TIMEOUT, RESPONSE_GRACE_PERIOD
from ..exceptions import GSMError, DeviceDisconnectedError

logger = logging.getLogger(__name__)

DisconnectCallback = Callable[[Exception], None]


class ModemCore:
    """
    Core modem functionality.

    Coordinates:
    - Transport layer (serial communication)
    - Protocol engine (AT command transactions)
    - Reader thread (delivers received bytes to the engine)

    This class provides the foundation for feature-specific managers.
    """

    def __init__(
        self,
        transport: Transport,
        timeout: float = DEFAULT_TIMEOUT,
        grace_period: float = RESPONSE_GRACE_PERIOD,
        read_timeout: float = 0.1,
        on_disconnect: Optional[DisconnectCallback] = None
    ) -> None:
        """
        Initialize modem core.

        Args:
            transport: Transport instance for communication
            timeout: Default timeout for AT commands
            grace_period: Delay before delivering a resolved response
            read_timeout: How long a single transport read may block
            on_disconnect: Optional callback for disconnection events
        """
        self.transport = transport
        self.protocol = ATProtocol(transport, default_timeout=timeout, grace_period=grace_period)

        # Reader thread management
        self._reader_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._running = False
        self._read_timeout = read_timeout
        self._on_disconnect = on_disconnect

        # Error handling
        self._consecutive_errors = 0
        self._max_consecutive_errors = 5
        self._disconnected = False

        logger.info("Initialized ModemCore")

    def connect(self) -> None:
        """
        Open the transport and start the reader thread.

        Raises:
            GSMError: If already connected
            TransportError: If the transport cannot be opened
        """
        if self.protocol.is_connected:
            raise GSMError("Already connected")

        self.transport.open()

        # Reset disconnected state on connect
        self._disconnected = False
        self._consecutive_errors = 0

        self.protocol.mark_connected()
        self._start_reader()
        logger.info("Modem connected")

    def disconnect(self) -> None:
        """
        Stop the reader thread and close the transport.

        A command still pending fails with NotConnectedError.
        """
        logger.info("Disconnecting modem")
        self._stop_reader()
        self.transport.close()
        self.protocol.mark_disconnected()
        logger.info("Modem disconnected")

    def _start_reader(self) -> None:
        if self._running:
            logger.warning("Reader thread already started")
            return

        self._stop_event.clear()
        self._reader_thread = threading.Thread(
            target=self._reader_loop,
            daemon=True,
            name="ModemReaderThread"
        )
        self._running = True
        self._reader_thread.start()
        logger.info("Started modem reader thread")

    def _stop_reader(self) -> None:
        if not self._running:
            return

        logger.info("Stopping modem reader thread...")
        self._stop_event.set()

        if self._reader_thread and self._reader_thread is not threading.current_thread():
            self._reader_thread.join(timeout=1.0)
            if self._reader_thread.is_alive():
                logger.warning("Reader thread did not terminate in time")

        self._running = False
        logger.info("Stopped modem reader thread")

    def _reader_loop(self) -> None:
        """
        Continuously read bytes from the modem and feed them to the engine.

        Stops on device disconnection or after too many consecutive errors.
        """
        logger.debug("Reader thread started")

        while not self._stop_event.is_set():
            try:
                data = self.transport.read(timeout=self._read_timeout)

                # Reset error counter on successful read
                self._consecutive_errors = 0

                if data:
                    self.protocol.feed(data)

            except DeviceDisconnectedError as e:
                if self._stop_event.is_set():
                    break

                logger.error("Device disconnected, stopping reader thread")
                self._running = False
                self._disconnected = True
                self.protocol.mark_disconnected()

                if self._on_disconnect:
                    self._on_disconnect(e)

                break
            except Exception as e:
                # Handle consecutive errors with backoff
                self._consecutive_errors += 1
                logger.error(f"Error in reader loop ({self._consecutive_errors}/{self._max_consecutive_errors}): {e}")

                if self._consecutive_errors >= self._max_consecutive_errors:
                    logger.error(f"Too many consecutive errors ({self._consecutive_errors}), stopping reader thread")
                    self._running = False
                    # Nothing feeds the engine any more, fail commands fast
                    self.protocol.mark_disconnected()
                    break

                # Exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s
                backoff_time = 0.1 * (2 ** (self._consecutive_errors - 1))
                time.sleep(backoff_time)

        logger.debug("Reader thread stopped")

    def send_at(self, cmd: str, timeout: Optional[float] = None) -> str:
        """
        Send an AT command.

        This is a convenience wrapper around protocol.send_command().

        Args:
            cmd: AT command (e.g., "AT+CSQ")
            timeout: Command timeout (uses default if None)

        Returns:
            Response text without the final "OK"

        Raises:
            NotConnectedError: If not connected
            BusyError: If another command is pending
            ATTimeoutError: If command times out
            ModemError: If command returns ERROR
        """
        return self.protocol.send_command(cmd, timeout=timeout)

    def send_payload(self, payload: str, timeout: Optional[float] = None) -> str:
        """
        Send data after a continuation prompt, terminated with Ctrl+Z.

        This is a convenience wrapper around protocol.send_payload().
        """
        return self.protocol.send_payload(payload, timeout=timeout)

    def is_connected(self) -> bool:
        """
        Check if the transport is connected.

        Returns:
            True if connected
        """
        return self.protocol.is_connected

    def is_busy(self) -> bool:
        """
        Check if a command is pending.

        Returns:
            True if a command is in flight
        """
        return self.protocol.is_busy

    def is_running(self) -> bool:
        """
        Check if the reader thread is running.

        Returns:
            True if running
        """
        return self._running

    def is_disconnected(self) -> bool:
        """
        Check if the device was disconnected during operation.

        This typically indicates a physical disconnection or USB port issue.

        Returns:
            True if device was disconnected, False otherwise
        """
        return self._disconnected

    def __enter__(self):
        """Context manager entry."""
        if not self.is_connected():
            self.connect()
        return self

    def __exit__(self, *exc):
        """Context manager exit."""
        self.disconnect()
