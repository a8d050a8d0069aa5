"""
Tests for the GSMModem facade and ModemCore lifecycle.
"""

import threading
import time

import pytest

from gsmpy import GSMModem, MockTransport
from gsmpy.exceptions import (
    ATTimeoutError,
    BusyError,
    GSMError,
    ModemError,
    NotConnectedError,
    TransportError,
)


pytestmark = pytest.mark.timeout(10)


def test_requires_port_or_transport():
    """Test that a modem needs somewhere to talk to."""
    with pytest.raises(ValueError):
        GSMModem()


def test_send_before_connect():
    """Test that commands fail before connecting and nothing is written."""
    transport = MockTransport()
    modem = GSMModem(transport=transport)

    with pytest.raises(NotConnectedError):
        modem.send_raw_at("AT")

    assert transport.written == []


def test_connect_failure():
    """Test that open failures propagate and leave the modem disconnected."""
    modem = GSMModem(transport=MockTransport(fail_open=True))

    with pytest.raises(TransportError):
        modem.connect()

    assert modem.is_connected is False


def test_connect_twice(modem):
    """Test that connecting an open modem is rejected."""
    with pytest.raises(GSMError):
        modem.connect()


def test_context_manager():
    """Test context manager connects and disconnects."""
    transport = MockTransport()

    with GSMModem(transport=transport, grace_period=0) as modem:
        assert modem.is_connected is True
        assert modem.is_running is True

    assert modem.is_connected is False
    assert transport.is_open() is False


def test_auto_connect():
    """Test auto_connect opens the transport immediately."""
    modem = GSMModem(transport=MockTransport(), auto_connect=True)

    assert modem.is_connected is True
    modem.disconnect()


def test_repr(modem):
    """Test string representation."""
    assert repr(modem) == "<GSMModem [Connected] custom transport>"
    modem.disconnect()
    assert repr(modem) == "<GSMModem [Not Connected] custom transport>"


def test_send_raw_at(modem, mock_transport):
    """Test raw command passthrough."""
    mock_transport.add_response(["+CPAS: 0", "OK"])

    assert modem.send_raw_at("AT+CPAS") == "+CPAS: 0"


def test_send_raw_at_error_split_across_chunks(modem, mock_transport):
    """Test failure detection when ERROR arrives in pieces."""
    mock_transport.add_chunks(["AT+X", "\r\nER", "ROR\r\n"])

    with pytest.raises(ModemError) as exc_info:
        modem.send_raw_at("AT+X")

    assert exc_info.value.detail == "AT+X"


def test_timeout_then_next_command(modem, mock_transport):
    """Test that a timed out command does not block the next one."""
    mock_transport.add_chunks([])
    mock_transport.add_response(["OK"])

    with pytest.raises(ATTimeoutError):
        modem.send_raw_at("AT+CGNSINF", timeout=0.2)

    assert modem.is_busy is False
    assert modem.send_raw_at("AT") == ""


def test_busy_while_pending(modem, mock_transport):
    """Test that a second command is rejected while one is in flight."""
    mock_transport.add_chunks([])
    results = []

    def slow_command():
        results.append(modem.send_raw_at("AT+CPBR=1,250"))

    worker = threading.Thread(target=slow_command)
    worker.start()

    deadline = time.monotonic() + 1.0
    while not mock_transport.written and time.monotonic() < deadline:
        time.sleep(0.01)

    assert modem.is_busy is True
    with pytest.raises(BusyError):
        modem.send_raw_at("AT")

    mock_transport.inject(b'+CPBR: 1,"1",129,"0041"\r\n\r\nOK\r\n')
    worker.join(timeout=2.0)

    assert results == ['+CPBR: 1,"1",129,"0041"']
    assert len(mock_transport.written) == 1


def test_idle_bytes_are_discarded(modem, mock_transport):
    """Test that unsolicited bytes do not leak into the next response."""
    mock_transport.inject(b"\r\nRING\r\n")
    time.sleep(0.2)

    mock_transport.add_response(["+CSQ: 20,0", "OK"])

    assert modem.send_raw_at("AT+CSQ") == "+CSQ: 20,0"


def test_send_raw_payload(modem, mock_transport, written):
    """Test a raw prompt and payload exchange."""
    mock_transport.add_chunks(["\r\n> "])
    mock_transport.add_response(["+CMGS: 9", "OK"])

    assert modem.send_raw_at('AT+CMGS="0031"').endswith(">")
    assert modem.send_raw_payload("0041") == "+CMGS: 9"
    assert written(mock_transport)[-1] == "0041\x1a"


class TestModemCore:
    """Test ModemCore directly."""

    def test_send_at(self, modem_core, mock_transport):
        mock_transport.add_response(["+CSQ: 24,99", "OK"])

        assert modem_core.send_at("AT+CSQ") == "+CSQ: 24,99"
        assert modem_core.is_busy() is False

    def test_lifecycle(self, modem_core, mock_transport):
        assert modem_core.is_connected() is True
        assert modem_core.is_running() is True

        modem_core.disconnect()

        assert modem_core.is_connected() is False
        assert modem_core.is_running() is False
        assert mock_transport.is_open() is False
