"""
gsmpy - Python library for controlling GSM modems via AT commands.
"""

from .version import __version__
from .modem import GSMModem
from .core import MockTransport, SerialTransport, Transport

from .types import (
    UNKNOWN,
    CharacterSet,
    Contact,
    GPSFix,
    MessageDeleteFilter,
    MessageFilter,
    MessageFormat,
    MessageStorage,
    PhoneBookStorage,
    PhoneBookUsage,
    PhoneNumberType,
    ReturnCode,
    ServiceClass,
    SignalQuality,
    SMSMessage,
)

from .exceptions import (
    GSMError,
    NotConnectedError,
    BusyError,
    ATTimeoutError,
    ModemError,
    MalformedResponseError,
    MalformedEncodingError,
    TransportError,
    DeviceDisconnectedError,
)

__all__ = [
    "__version__",
    "GSMModem",
    "MockTransport",
    "SerialTransport",
    "Transport",
    "UNKNOWN",
    "CharacterSet",
    "Contact",
    "GPSFix",
    "MessageDeleteFilter",
    "MessageFilter",
    "MessageFormat",
    "MessageStorage",
    "PhoneBookStorage",
    "PhoneBookUsage",
    "PhoneNumberType",
    "ReturnCode",
    "ServiceClass",
    "SignalQuality",
    "SMSMessage",
    "GSMError",
    "NotConnectedError",
    "BusyError",
    "ATTimeoutError",
    "ModemError",
    "MalformedResponseError",
    "MalformedEncodingError",
    "TransportError",
    "DeviceDisconnectedError",
]
