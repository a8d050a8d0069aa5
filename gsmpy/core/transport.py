"""
Transport layer abstraction for modem communication.

The engine only needs an opaque duplex byte channel: open it, write bytes,
and read whatever bytes have arrived. Implementations are injected, so tests
run against MockTransport without hardware.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional, Union

import serial
from serial import SerialException

from ..exceptions import TransportError, DeviceDisconnectedError

logger = logging.getLogger(__name__)

DEFAULT_BAUDRATE = 460800

# Substrings pyserial uses when the device vanished under us
_DISCONNECT_PHRASES = (
    "device disconnected",
    "device reports readiness to read but returned no data",
    "no such device",
    "device not configured",
    "input/output error",
)


class Transport(ABC):
    """Abstract base class for modem transport."""

    @abstractmethod
    def open(self) -> None:
        """
        Open the transport.

        Raises:
            TransportError: If the device cannot be opened
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write data to the transport.

        Args:
            data: Bytes to write

        Returns:
            Number of bytes written

        Raises:
            TransportError: If write fails
        """
        pass

    @abstractmethod
    def read(self, timeout: Optional[float] = None) -> bytes:
        """
        Read the bytes that have arrived.

        Blocks for at most ``timeout`` seconds waiting for the first byte.

        Args:
            timeout: Optional timeout in seconds

        Returns:
            Received bytes, or b"" if nothing arrived

        Raises:
            DeviceDisconnectedError: If the device went away
            TransportError: If read fails
        """
        pass

    @abstractmethod
    def is_open(self) -> bool:
        """Check if transport is open."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the transport."""
        pass


class SerialTransport(Transport):
    """Serial port transport implementation."""

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = 0.1
    ) -> None:
        """
        Initialize serial transport.

        The port is not opened until open() is called.

        Args:
            port: Serial port path (e.g., /dev/ttyUSB0)
            baudrate: Baud rate for serial communication
            timeout: Read timeout in seconds
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout

        self._serial = serial.Serial()
        self._serial.port = port
        self._serial.baudrate = baudrate
        self._serial.timeout = timeout

    def open(self) -> None:
        """Open the serial port."""
        try:
            self._serial.open()
            logger.info(f"Opened serial port {self.port} at {self.baudrate} baud")
        except SerialException as e:
            logger.error(f"Failed to open serial port {self.port}: {e}")
            raise TransportError(f"Failed to open serial port {self.port}: {e}") from e

    def write(self, data: bytes) -> int:
        """Write data to serial port."""
        try:
            written = self._serial.write(data)
            logger.debug(f"Wrote {written} bytes: {data}")
            return written
        except SerialException as e:
            logger.error(f"Serial write failed: {e}")
            raise self._translate(e, "write") from e

    def read(self, timeout: Optional[float] = None) -> bytes:
        """Read available bytes from the serial port."""
        try:
            if timeout is not None:
                self._serial.timeout = timeout

            # Block for the first byte, then drain what else is waiting
            data = self._serial.read(1)
            if data and self._serial.in_waiting:
                data += self._serial.read(self._serial.in_waiting)

            if data:
                logger.debug(f"Read {len(data)} bytes: {data}")

            return data
        except SerialException as e:
            raise self._translate(e, "read") from e
        finally:
            if timeout is not None:
                self._serial.timeout = self.timeout

    def _translate(self, error: SerialException, operation: str) -> TransportError:
        """Map a pyserial error onto the transport error taxonomy."""
        error_str = str(error).lower()

        if any(phrase in error_str for phrase in _DISCONNECT_PHRASES):
            logger.error(f"Device disconnected: {error}")
            return DeviceDisconnectedError(
                f"Serial device disconnected: {error}",
                response=str(error)
            )

        logger.error(f"Serial {operation} failed: {error}")
        return TransportError(f"Serial {operation} failed: {error}")

    def is_open(self) -> bool:
        """Check if serial port is open."""
        return bool(self._serial.is_open)

    def close(self) -> None:
        """Close the serial port."""
        if self._serial.is_open:
            self._serial.close()
            logger.info(f"Closed serial port {self.port}")


Chunk = Union[bytes, str]


class MockTransport(Transport):
    """
    Mock transport for testing.

    Simulates a modem: each write releases the next scripted reply, which is
    then handed to readers chunk by chunk, exactly as queued.
    """

    def __init__(self, fail_open: bool = False) -> None:
        """
        Initialize mock transport.

        Args:
            fail_open: Make open() fail, simulating a missing device
        """
        self._open = False
        self._fail_open = fail_open
        self._input: Deque[bytes] = deque()
        self._replies: Deque[list[bytes]] = deque()
        self._lock = threading.Lock()
        self._data_ready = threading.Condition(self._lock)
        self.written: list[bytes] = []
        logger.info("Initialized MockTransport")

    def add_response(self, lines: list[str]) -> None:
        """
        Queue the reply to the next write, one chunk per line.

        Args:
            lines: Response lines (e.g., ["+CSQ: 15,99", "OK"]); each is
                delivered with a CR/LF terminator
        """
        self.add_chunks([line + "\r\n" for line in lines])

    def add_chunks(self, chunks: list[Chunk]) -> None:
        """
        Queue the reply to the next write as raw chunks.

        Args:
            chunks: Byte chunks exactly as the modem would deliver them
                (e.g., ["AT+X", "\\r\\nER", "ROR\\r\\n"]); str is UTF-8 encoded.
                An empty list scripts a write that gets no reply.
        """
        encoded = [c.encode("utf-8") if isinstance(c, str) else c for c in chunks]
        with self._lock:
            self._replies.append(encoded)
            logger.debug(f"Added mock response: {encoded}")

    def inject(self, chunk: Chunk) -> None:
        """Deliver bytes to readers immediately, as if sent by the modem."""
        data = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        with self._data_ready:
            self._input.append(data)
            self._data_ready.notify_all()

    def open(self) -> None:
        """Simulate opening the device."""
        if self._fail_open:
            raise TransportError("MockTransport configured to fail on open")
        self._open = True
        logger.info("Opened MockTransport")

    def write(self, data: bytes) -> int:
        """Record the write and release the next scripted reply."""
        if not self._open:
            raise DeviceDisconnectedError(
                "MockTransport is closed (simulating device disconnection)",
                response="MockTransport closed"
            )

        logger.debug(f"Mock write: {data}")
        with self._data_ready:
            self.written.append(data)
            if self._replies:
                self._input.extend(self._replies.popleft())
                self._data_ready.notify_all()
        return len(data)

    def read(self, timeout: Optional[float] = None) -> bytes:
        """Return the next queued chunk, waiting up to ``timeout`` for one."""
        deadline = time.monotonic() + (timeout if timeout is not None else 0.05)

        with self._data_ready:
            while not self._input:
                if not self._open:
                    raise DeviceDisconnectedError(
                        "MockTransport is closed (simulating device disconnection)",
                        response="MockTransport closed"
                    )
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return b""
                self._data_ready.wait(remaining)

            chunk = self._input.popleft()
            logger.debug(f"Mock read: {chunk}")
            return chunk

    def is_open(self) -> bool:
        """Check if mock transport is open."""
        return self._open

    def close(self) -> None:
        """Close mock transport."""
        with self._data_ready:
            self._open = False
            self._data_ready.notify_all()
        logger.info("Closed MockTransport")

    def clear_responses(self) -> None:
        """Clear all queued replies and undelivered input."""
        with self._lock:
            self._replies.clear()
            self._input.clear()
            logger.debug("Cleared mock response queue")
