"""
Feature managers for modem functionality.

Provides high-level managers for different modem capabilities:
- DeviceManager: Identity, capabilities, character set, service class
- CallManager: Dial, answer, hang up, auto answer
- NetworkManager: Signal quality, operator
- PhoneBookManager: Phonebook entries
- SMSManager: SMS messaging and storage
- GPSManager: GNSS power and position
"""

from .device_info import DeviceManager
from .call import CallManager
from .network import NetworkManager
from .phonebook import PhoneBookManager
from .sms import SMSManager
from .gps import GPSManager

__all__ = [
    "DeviceManager",
    "CallManager",
    "NetworkManager",
    "PhoneBookManager",
    "SMSManager",
    "GPSManager",
]
