"""
Tests for SMS manager.
"""

import pytest

from gsmpy.types import MessageDeleteFilter, MessageFilter, MessageFormat, MessageStorage
from gsmpy.exceptions import MalformedResponseError, ModemError


class TestMessageFormat:
    """Test message format operations."""

    def test_get_message_format_pdu(self, modem, mock_transport):
        """Test getting PDU message format."""
        mock_transport.add_response(["+CMGF: 0", "OK"])

        assert modem.sms.get_message_format() == MessageFormat.PDU_MODE

    def test_get_message_format_text(self, modem, mock_transport):
        """Test getting text message format."""
        mock_transport.add_response(["+CMGF: 1", "OK"])

        assert modem.sms.get_message_format() == MessageFormat.TEXT_MODE

    def test_get_message_format_unknown(self, modem, mock_transport):
        """Test an unknown format value is rejected."""
        mock_transport.add_response(["+CMGF: 7", "OK"])

        with pytest.raises(MalformedResponseError):
            modem.sms.get_message_format()

    def test_set_message_format(self, modem, mock_transport, written):
        """Test setting message format."""
        mock_transport.add_response(["OK"])

        modem.sms.set_message_format(MessageFormat.TEXT_MODE)

        assert written(mock_transport) == ["AT+CMGF=1\r\n"]


def test_set_preferred_storage(modem, mock_transport, written):
    """Test selecting the read storage."""
    mock_transport.add_response(['+CPMS: 3,30,3,30,3,30', "OK"])

    modem.sms.set_preferred_storage(MessageStorage.PHONE)

    assert written(mock_transport) == ['AT+CPMS="ME","SM","SM"\r\n']


class TestSendSMS:
    """Test sending messages."""

    def test_send_sms(self, modem, mock_transport, written):
        """Test the full prompt and payload exchange."""
        mock_transport.add_response(["OK"])  # AT+CSCS
        mock_transport.add_response(["OK"])  # AT+CMGF
        mock_transport.add_chunks(["\r\n> "])  # AT+CMGS prompt
        mock_transport.add_chunks(["\r\n+CMGS: 42\r\n", "\r\nOK\r\n"])

        reference = modem.sms.send_sms("+1", "Hi")

        assert reference == 42
        assert written(mock_transport) == [
            'AT+CSCS="UCS2"\r\n',
            "AT+CMGF=1\r\n",
            'AT+CMGS="002B0031"\r\n',
            "00480069\x1a",
        ]
        assert modem.is_busy is False

    def test_send_sms_without_prompt(self, modem, mock_transport, written):
        """Test that a missing prompt aborts before the body is sent."""
        mock_transport.add_response(["OK"])
        mock_transport.add_response(["OK"])
        mock_transport.add_response(["OK"])

        with pytest.raises(MalformedResponseError):
            modem.sms.send_sms("+1", "Hi")

        assert len(written(mock_transport)) == 3

    def test_send_sms_network_error(self, modem, mock_transport):
        """Test that a delivery failure raises ModemError."""
        mock_transport.add_response(["OK"])
        mock_transport.add_response(["OK"])
        mock_transport.add_chunks(["\r\n> "])
        mock_transport.add_response(["+CMS ERROR: 500"])

        with pytest.raises(ModemError) as exc_info:
            modem.sms.send_sms("+1", "Hi")

        assert exc_info.value.detail == "+CMS ERROR: 500"


class TestListMessages:
    """Test listing messages."""

    def test_list_messages(self, modem, mock_transport, written):
        for _ in range(4):
            mock_transport.add_response(["OK"])
        mock_transport.add_response([
            '+CMGL: 1,"REC UNREAD","002B0031",,"24/01/15,10:30:45+08",145,5',
            "00480065006C006C006F",
            "",
            "OK",
        ])

        messages = modem.sms.list_messages(MessageStorage.SIM, MessageFilter.REC_UNREAD)

        assert len(messages) == 1
        assert messages[0].index == 1
        assert messages[0].status == "REC UNREAD"
        assert messages[0].sender == "+1"
        assert messages[0].content == "Hello"
        assert written(mock_transport) == [
            "AT+CMGF=1\r\n",
            'AT+CPMS="SM","SM","SM"\r\n',
            'AT+CSCS="UCS2"\r\n',
            "AT+CSDH=1\r\n",
            'AT+CMGL="REC UNREAD"\r\n',
        ]

    def test_list_messages_empty(self, modem, mock_transport):
        for _ in range(5):
            mock_transport.add_response(["OK"])

        assert modem.sms.list_messages(MessageStorage.SIM) == []

    def test_list_messages_with_empty_sms(self, modem, mock_transport):
        """Test a storage holding an empty message can still be listed."""
        for _ in range(4):
            mock_transport.add_response(["OK"])
        mock_transport.add_response([
            '+CMGL: 1,"REC READ","002B0031",,"24/01/15,10:30:45+08",145,0',
            "",
            '+CMGL: 2,"REC READ","002B0032",,"24/01/15,11:00:00+08",145,2',
            "00480069",
            "",
            "OK",
        ])

        messages = modem.sms.list_messages(MessageStorage.SIM)

        assert [(m.index, m.content) for m in messages] == [(1, ""), (2, "Hi")]


class TestDeleteMessages:
    """Test deleting messages."""

    def test_delete_message(self, modem, mock_transport, written):
        mock_transport.add_response(["OK"])
        mock_transport.add_response(["OK"])

        modem.sms.delete_message(MessageStorage.SIM, 3)

        assert written(mock_transport)[-1] == "AT+CMGD=3\r\n"

    def test_delete_all_messages(self, modem, mock_transport, written):
        mock_transport.add_response(["OK"])
        mock_transport.add_response(["OK"])

        modem.sms.delete_all_messages(MessageStorage.SIM, MessageDeleteFilter.READ)

        assert written(mock_transport)[-1] == "AT+CMGD=0,1\r\n"
