"""
Core modem infrastructure.

Provides low-level building blocks for modem communication:
- Transport: Serial communication abstraction
- Protocol: AT command transaction engine
- ModemCore: Connection lifecycle and reader thread
"""

from .transport import Transport, SerialTransport, MockTransport, DEFAULT_BAUDRATE
from .protocol import (
    ATProtocol,
    TransactionState,
    CTRL_Z,
    DEFAULT_TIMEOUT,
    LONG_TIMEOUT,
    RESPONSE_GRACE_PERIOD,
)
from .modem import ModemCore

__all__ = [
    "Transport",
    "SerialTransport",
    "MockTransport",
    "DEFAULT_BAUDRATE",
    "ATProtocol",
    "TransactionState",
    "CTRL_Z",
    "DEFAULT_TIMEOUT",
    "LONG_TIMEOUT",
    "RESPONSE_GRACE_PERIOD",
    "ModemCore",
]
