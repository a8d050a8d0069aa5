"""
Data types and structures for gsmpy.

Provides type-safe representations of modem data and the constants of the
AT dialect spoken by the modem.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

# Tag used in place of vendor "not known or not detectable" sentinels
UNKNOWN = "unknown"


class ReturnCode(str, Enum):
    """Terminator markers closing a modem response."""
    OK = "OK"
    ERROR = "ERROR"
    PROMPT = ">"


class CharacterSet(str, Enum):
    """TE character sets (AT+CSCS)."""
    GSM = "GSM"
    UCS2 = "UCS2"
    IRA = "IRA"
    HEX = "HEX"
    PCCP437 = "PCCP437"
    ISO_8859_1 = "8859-1"


class ServiceClass(IntEnum):
    """Active service class (AT+FCLASS)."""
    DATA = 0
    FAX = 1
    VOICE = 8


class PhoneBookStorage(str, Enum):
    """Phonebook memory storages (AT+CPBS)."""
    SIM = "SM"
    PHONE = "ME"
    OWN_NUMBERS = "ON"
    FIXED_DIALING = "FD"
    LAST_DIALED = "LD"
    MISSED_CALLS = "MC"
    RECEIVED_CALLS = "RC"
    EMERGENCY = "EN"


class PhoneNumberType(IntEnum):
    """Type of address octet for phone numbers."""
    UNKNOWN = 129
    INTERNATIONAL = 145
    NATIONAL = 161


class MessageStorage(str, Enum):
    """SMS memory storages (AT+CPMS)."""
    SIM = "SM"
    PHONE = "ME"
    ANY = "MT"
    BROADCAST = "BM"
    STATUS_REPORT = "SR"


class MessageFormat(IntEnum):
    """SMS message format modes (AT+CMGF)."""
    PDU_MODE = 0
    TEXT_MODE = 1


class MessageFilter(str, Enum):
    """Text mode message status filters (AT+CMGL)."""
    REC_UNREAD = "REC UNREAD"
    REC_READ = "REC READ"
    STO_UNSENT = "STO UNSENT"
    STO_SENT = "STO SENT"
    ALL = "ALL"


class MessageDeleteFilter(IntEnum):
    """Delete flags for AT+CMGD=<index>,<delflag>."""
    READ = 1
    READ_AND_SENT = 2
    READ_SENT_AND_UNSENT = 3
    ALL = 4


SignalValue = Union[int, str]


@dataclass(frozen=True)
class SignalQuality:
    """
    Signal quality from AT+CSQ.

    RSSI (Received Signal Strength Indicator):
        0: -113 dBm or less
        1: -111 dBm
        2...30: -109 to -53 dBm
        31: -51 dBm or greater
        UNKNOWN: Not known or not detectable (reported as 99)

    BER (Bit Error Rate):
        0...7: As specified in 3GPP TS 45.008
        UNKNOWN: Not known or not detectable (reported as 99)
    """
    rssi: SignalValue
    ber: SignalValue

    @property
    def rssi_dbm(self) -> Optional[int]:
        """Convert RSSI to dBm value."""
        if self.rssi == UNKNOWN:
            return None
        if self.rssi == 0:
            return -113
        if self.rssi == 31:
            return -51
        return -113 + (self.rssi * 2)

    @property
    def is_valid(self) -> bool:
        """Check if signal quality reading is valid."""
        return self.rssi != UNKNOWN


@dataclass(frozen=True)
class Contact:
    """Phonebook entry from AT+CPBR."""
    index: int         # Position in the phonebook
    number: str        # Digits plus allowed dialing symbols
    number_type: int   # Type of address (see PhoneNumberType)
    name: str          # Display name, decoded from UCS2 when applicable


@dataclass(frozen=True)
class PhoneBookUsage:
    """Phonebook storage usage from AT+CPBS?"""
    used: int
    capacity: int


@dataclass(frozen=True)
class SMSMessage:
    """
    SMS message from a text mode message listing.

    Represents a stored message with its header metadata.
    """
    index: int                   # Message index in storage
    status: str                  # Message status (e.g., "REC READ")
    sender: str                  # Originating address
    timestamp: str               # Service centre timestamp (YY/MM/DD,HH:MM:SS+TZ)
    content: str                 # Decoded message body
    alpha: Optional[str] = None  # Phonebook name of the sender, if any


@dataclass(frozen=True)
class GPSFix:
    """
    GNSS navigation information from AT+CGNSINF.

    Fix validity semantics are vendor specific, so the untouched reply is
    kept in ``raw_reply`` for diagnostics.
    """
    run_status: Optional[int]
    fix_status: Optional[int]
    time: Optional[str]          # UTC time of day, HH:MM:SS
    latitude: Optional[float]
    longitude: Optional[float]
    altitude: Optional[float]
    raw_reply: str

    @property
    def has_fix(self) -> bool:
        """Check whether the receiver reported a position fix."""
        return self.fix_status == 1 and self.latitude is not None
