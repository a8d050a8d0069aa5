"""
Tests for transport layer.
"""

import threading
import time

import pytest
import serial

from gsmpy.core import MockTransport, SerialTransport
from gsmpy.exceptions import TransportError, DeviceDisconnectedError


def test_mock_transport_starts_closed():
    """Test MockTransport must be opened before use."""
    transport = MockTransport()
    assert transport.is_open() is False

    with pytest.raises(DeviceDisconnectedError):
        transport.write(b"AT\r\n")


def test_mock_transport_write():
    """Test MockTransport write operation."""
    transport = MockTransport()
    transport.open()

    written = transport.write(b"AT\r\n")
    assert written == 4  # AT\r\n is 4 bytes
    assert transport.written == [b"AT\r\n"]

    transport.close()


def test_mock_transport_reply_released_by_write():
    """Test scripted replies are only readable after a write."""
    transport = MockTransport()
    transport.open()
    transport.add_response(["+CSQ: 24,99", "OK"])

    assert transport.read(timeout=0.01) == b""

    transport.write(b"AT+CSQ\r\n")
    assert transport.read() == b"+CSQ: 24,99\r\n"
    assert transport.read() == b"OK\r\n"
    assert transport.read(timeout=0.01) == b""

    transport.close()


def test_mock_transport_raw_chunks():
    """Test MockTransport delivers raw chunks exactly as queued."""
    transport = MockTransport()
    transport.open()
    transport.add_chunks(["AT+X", "\r\nER", b"ROR\r\n"])

    transport.write(b"AT+X\r\n")
    assert transport.read() == b"AT+X"
    assert transport.read() == b"\r\nER"
    assert transport.read() == b"ROR\r\n"

    transport.close()


def test_mock_transport_silent_reply():
    """Test an empty chunk list scripts a write that gets no reply."""
    transport = MockTransport()
    transport.open()
    transport.add_chunks([])
    transport.add_response(["OK"])

    transport.write(b"AT+CGNSINF\r\n")
    assert transport.read(timeout=0.01) == b""

    transport.write(b"AT\r\n")
    assert transport.read() == b"OK\r\n"

    transport.close()


def test_mock_transport_inject():
    """Test injected bytes are readable without a write."""
    transport = MockTransport()
    transport.open()

    transport.inject("RING\r\n")
    assert transport.read() == b"RING\r\n"

    transport.close()


def test_mock_transport_read_wakes_on_data():
    """Test a blocked read returns as soon as data arrives."""
    transport = MockTransport()
    transport.open()

    threading.Timer(0.05, transport.inject, args=(b"OK\r\n",)).start()

    start = time.monotonic()
    assert transport.read(timeout=2.0) == b"OK\r\n"
    assert time.monotonic() - start < 1.0

    transport.close()


def test_mock_transport_is_open():
    """Test MockTransport is_open status."""
    transport = MockTransport()
    transport.open()

    assert transport.is_open() is True

    transport.close()
    assert transport.is_open() is False


def test_mock_transport_read_when_closed():
    """Test MockTransport read raises once closed and drained."""
    transport = MockTransport()
    transport.open()
    transport.close()

    with pytest.raises(DeviceDisconnectedError):
        transport.read()


def test_mock_transport_fail_open():
    """Test MockTransport can simulate a missing device."""
    transport = MockTransport(fail_open=True)

    with pytest.raises(TransportError):
        transport.open()


def test_mock_transport_clear_responses():
    """Test MockTransport clear_responses drops pending replies."""
    transport = MockTransport()
    transport.open()
    transport.add_response(["OK"])
    transport.inject(b"junk")

    transport.clear_responses()
    transport.write(b"AT\r\n")
    assert transport.read(timeout=0.01) == b""

    transport.close()


def test_serial_transport_not_opened_on_init():
    """Test SerialTransport defers opening the port."""
    transport = SerialTransport("/dev/does-not-exist", baudrate=115200)

    assert transport.is_open() is False
    assert transport.baudrate == 115200


def test_serial_transport_open_failure(monkeypatch):
    """Test SerialTransport wraps open errors."""
    transport = SerialTransport("/dev/does-not-exist")

    def fail_open():
        raise serial.SerialException("could not open port /dev/does-not-exist")

    monkeypatch.setattr(transport._serial, "open", fail_open)

    with pytest.raises(TransportError):
        transport.open()


def test_serial_transport_translates_disconnect():
    """Test pyserial disconnect errors map to DeviceDisconnectedError."""
    transport = SerialTransport("/dev/does-not-exist")

    error = transport._translate(
        serial.SerialException("device reports readiness to read but returned no data"),
        "read"
    )
    assert isinstance(error, DeviceDisconnectedError)

    error = transport._translate(serial.SerialException("parity error"), "read")
    assert isinstance(error, TransportError)
    assert not isinstance(error, DeviceDisconnectedError)
