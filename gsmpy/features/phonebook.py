"""
Phonebook manager.

Handles reading and writing phonebook entries.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..types import CharacterSet, Contact, PhoneBookStorage, PhoneBookUsage, PhoneNumberType
from ..core.protocol import LONG_TIMEOUT
from ..parsers.phonebook import ContactListParser, PhoneBookUsageParser
from ..parsers.ucs2 import encode_ucs2_hex

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class PhoneBookManager:
    """
    Manages phonebook entries.

    Names are exchanged in UCS2 so that any contact name survives the trip,
    so operations that carry names switch the character set first.
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize phonebook manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core
        self._contact_parser = ContactListParser()
        self._usage_parser = PhoneBookUsageParser()

        logger.debug("Initialized PhoneBookManager")

    def set_storage(self, storage: PhoneBookStorage) -> None:
        """Select the phonebook memory storage."""
        logger.debug(f"Selecting phonebook storage {storage.value}")
        self.modem.send_at(f'AT+CPBS="{storage.value}"')

    def _use_ucs2(self) -> None:
        self.modem.send_at(f'AT+CSCS="{CharacterSet.UCS2.value}"')

    def get_usage(self, storage: PhoneBookStorage) -> PhoneBookUsage:
        """
        Get used slots and capacity of a phonebook.

        Example:

        .. code-block:: python

            usage = modem.phonebook.get_usage(PhoneBookStorage.SIM)
            print(f"{usage.used}/{usage.capacity} contacts")
        """
        logger.info(f"Getting phonebook usage for {storage.value}")
        self.set_storage(storage)
        response = self.modem.send_at("AT+CPBS?")
        return self._usage_parser.parse(response)

    def read_contacts(self, storage: PhoneBookStorage, start_index: int, end_index: int) -> list[Contact]:
        """
        Read a range of contacts.

        Args:
            storage: Phonebook to read
            start_index: Lower edge of the index range
            end_index: Upper edge of the index range

        Returns:
            Contacts found in the range (empty slots are not reported)
        """
        logger.info(f"Reading contacts {start_index}-{end_index} from {storage.value}")
        self.set_storage(storage)
        self._use_ucs2()
        response = self.modem.send_at(f"AT+CPBR={start_index},{end_index}", timeout=LONG_TIMEOUT)
        contacts = self._contact_parser.parse(response)
        logger.debug(f"Read {len(contacts)} contacts")
        return contacts

    def _write_contact(
        self,
        storage: PhoneBookStorage,
        index: Optional[int],
        number: str,
        number_type: PhoneNumberType,
        name: str
    ) -> None:
        self.set_storage(storage)
        self._use_ucs2()
        slot = "" if index is None else str(index)
        self.modem.send_at(
            f'AT+CPBW={slot},"{number}",{int(number_type)},"{encode_ucs2_hex(name)}"',
            timeout=LONG_TIMEOUT
        )

    def add_contact(
        self,
        storage: PhoneBookStorage,
        number: str,
        number_type: PhoneNumberType,
        name: str
    ) -> None:
        """Add a contact in the first free slot of a phonebook."""
        logger.info(f"Adding contact {name!r} to {storage.value}")
        self._write_contact(storage, None, number, number_type, name)

    def set_contact(
        self,
        storage: PhoneBookStorage,
        index: int,
        number: str,
        number_type: PhoneNumberType,
        name: str
    ) -> None:
        """Create or overwrite the contact at a given index."""
        logger.info(f"Setting contact {index} in {storage.value}")
        self._write_contact(storage, index, number, number_type, name)

    def delete_contact(self, storage: PhoneBookStorage, index: int) -> None:
        """Remove the contact at a given index."""
        logger.info(f"Deleting contact {index} from {storage.value}")
        self.set_storage(storage)
        self.modem.send_at(f"AT+CPBW={index}", timeout=LONG_TIMEOUT)
