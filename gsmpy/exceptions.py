"""
Exceptions for gsmpy.

Provides detailed error information for debugging modem communication issues.
"""

from typing import Optional


class GSMError(Exception):
    """
    Base exception for GSM modem errors.

    All gsmpy exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        response: Optional[str] = None
    ) -> None:
        """
        Initialize exception with context.

        Args:
            message: Error description
            command: AT command that caused the error (if applicable)
            response: Raw modem response text (if applicable)
        """
        self.command = command
        self.response = response
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with context."""
        parts = [super().__str__()]

        if self.command:
            parts.append(f"Command: {self.command}")

        if self.response:
            parts.append(f"Response: {self.response!r}")

        return " | ".join(parts)


class NotConnectedError(GSMError):
    """
    Raised when a command is issued while the transport is not connected.

    Nothing is written to the transport in this case.
    """
    pass


class BusyError(GSMError):
    """
    Raised when a command is issued while another one is still pending.

    Commands are never queued; the caller decides when to retry.
    """
    pass


class ATTimeoutError(GSMError):
    """
    Raised when no terminator is seen before the command deadline.

    This typically indicates:
    - Modem is not responding
    - Serial connection issue
    - Command takes longer than timeout
    """
    pass


class ModemError(GSMError):
    """
    Raised when the modem answers with a failure marker.

    The ``detail`` attribute carries the modem's own diagnostic text,
    i.e. the response with the failure marker removed.
    """

    def __init__(
        self,
        detail: str,
        command: Optional[str] = None,
        response: Optional[str] = None
    ) -> None:
        self.detail = detail
        super().__init__(f"Error from modem: {detail}", command=command, response=response)


class MalformedResponseError(GSMError):
    """
    Raised when a completed response cannot be parsed.

    This indicates:
    - Unexpected response format
    - Missing expected fields
    - Invalid data in response
    """
    pass


class MalformedEncodingError(GSMError):
    """
    Raised when UCS2 hex text cannot be encoded or decoded.

    This indicates:
    - Hex length not a multiple of four
    - Non-hex characters in the input
    - Characters outside the 16-bit range when encoding
    """
    pass


class TransportError(GSMError):
    """
    Raised when transport layer fails.

    This indicates:
    - Serial port cannot be opened
    - Connection lost
    - Hardware communication failure
    """
    pass


class DeviceDisconnectedError(TransportError):
    """
    Raised when device is disconnected during operation.

    This is a fatal error that requires reconnecting.
    """
    pass
