"""
SMS manager.

Handles SMS messaging operations (send, list, delete, storage) in text mode
with the UCS2 character set, so any message text can be exchanged.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..types import (
    CharacterSet,
    MessageDeleteFilter,
    MessageFilter,
    MessageFormat,
    MessageStorage,
    ReturnCode,
    SMSMessage,
)
from ..core.protocol import LONG_TIMEOUT
from ..parsers.base import IntValueParser
from ..parsers.sms import SMSListParser, MessageReferenceParser
from ..parsers.ucs2 import encode_ucs2_hex
from ..exceptions import MalformedResponseError

if TYPE_CHECKING:
    from ..core import ModemCore

logger = logging.getLogger(__name__)


class SMSManager:
    """
    Manages SMS messaging operations.

    Features:
    - Send SMS (text mode, UCS2)
    - List messages by status
    - Delete messages
    - SMS storage selection
    """

    def __init__(self, modem_core: "ModemCore") -> None:
        """
        Initialize SMS manager.

        Args:
            modem_core: ModemCore instance for AT command execution
        """
        self.modem = modem_core
        self._list_parser = SMSListParser(ucs2=True)
        self._reference_parser = MessageReferenceParser()

        logger.debug("Initialized SMSManager")

    def _use_ucs2(self) -> None:
        self.modem.send_at(f'AT+CSCS="{CharacterSet.UCS2.value}"')

    def set_preferred_storage(self, read_storage: MessageStorage) -> None:
        """
        Select the storage messages are read from and deleted in.

        Writing and receiving stay on the SIM.
        """
        logger.debug(f"Selecting message storage {read_storage.value}")
        sim = MessageStorage.SIM.value
        self.modem.send_at(f'AT+CPMS="{read_storage.value}","{sim}","{sim}"')

    def get_message_format(self) -> MessageFormat:
        """
        Get current SMS message format mode.

        Returns:
            MessageFormat.PDU_MODE (0) or MessageFormat.TEXT_MODE (1)
        """
        logger.info("Getting message format")
        response = self.modem.send_at("AT+CMGF?")
        mode = IntValueParser("+CMGF:").parse(response)

        try:
            return MessageFormat(mode)
        except ValueError as e:
            raise MalformedResponseError(
                f"Unknown message format: {mode}",
                command="AT+CMGF?",
                response=response
            ) from e

    def set_message_format(self, mode: MessageFormat) -> None:
        """
        Set SMS message format mode.

        Args:
            mode: MessageFormat.PDU_MODE (0) or MessageFormat.TEXT_MODE (1)
        """
        logger.info(f"Setting message format to {mode.name}")
        self.modem.send_at(f"AT+CMGF={int(mode)}")

    def list_messages(
        self,
        storage: MessageStorage,
        message_filter: MessageFilter = MessageFilter.ALL
    ) -> list[SMSMessage]:
        """
        List stored messages.

        Args:
            storage: Message storage to read from
            message_filter: Status filter (default: all messages)

        Returns:
            List of SMSMessage objects, empty if none match

        Example:

        .. code-block:: python

            for sms in modem.sms.list_messages(MessageStorage.SIM, MessageFilter.REC_UNREAD):
                print(f"{sms.sender}: {sms.content}")
        """
        logger.info(f"Listing {message_filter.value} messages in {storage.value}")
        self.set_message_format(MessageFormat.TEXT_MODE)
        self.set_preferred_storage(storage)
        self._use_ucs2()
        self.modem.send_at("AT+CSDH=1")
        response = self.modem.send_at(f'AT+CMGL="{message_filter.value}"', timeout=LONG_TIMEOUT)

        messages = self._list_parser.parse(response)
        logger.debug(f"Listed {len(messages)} messages")
        return messages

    def send_sms(self, number: str, message: str, timeout: Optional[float] = None) -> int:
        """
        Send an SMS message.

        The destination and the body are both sent as UCS2 hex. The modem
        answers the AT+CMGS command with a ">" prompt, then takes the body
        terminated by Ctrl+Z.

        Args:
            number: Destination number
            message: Message text
            timeout: Timeout for the delivery step (default: long timeout)

        Returns:
            Message reference number

        Raises:
            MalformedResponseError: If the modem does not prompt for the body
        """
        logger.info(f"Sending SMS to {number}")
        self._use_ucs2()
        self.set_message_format(MessageFormat.TEXT_MODE)

        cmd = f'AT+CMGS="{encode_ucs2_hex(number)}"'
        prompt = self.modem.send_at(cmd)
        if not prompt.endswith(ReturnCode.PROMPT.value):
            raise MalformedResponseError(
                "Did not receive SMS prompt",
                command=cmd,
                response=prompt
            )

        response = self.modem.send_payload(
            encode_ucs2_hex(message),
            timeout=timeout if timeout is not None else LONG_TIMEOUT
        )
        reference = self._reference_parser.parse(response)
        logger.info(f"SMS sent successfully, reference: {reference}")
        return reference

    def delete_message(self, storage: MessageStorage, index: int) -> None:
        """Delete the message at a given index."""
        logger.info(f"Deleting message {index} from {storage.value}")
        self.set_preferred_storage(storage)
        self.modem.send_at(f"AT+CMGD={index}")

    def delete_all_messages(
        self,
        storage: MessageStorage,
        delete_filter: MessageDeleteFilter = MessageDeleteFilter.ALL
    ) -> None:
        """
        Delete several messages at once.

        Args:
            storage: Message storage to delete from
            delete_filter: Which messages to delete (default: all)
        """
        logger.info(f"Deleting messages from {storage.value} ({delete_filter.name})")
        self.set_preferred_storage(storage)
        self.modem.send_at(f"AT+CMGD=0,{int(delete_filter)}", timeout=LONG_TIMEOUT)
