"""
Tests for device disconnection handling.
"""

import threading
import time

import pytest

from gsmpy import GSMModem, MockTransport, DeviceDisconnectedError, NotConnectedError


pytestmark = pytest.mark.timeout(15)


def test_disconnection_callback():
    """Test that disconnection callback is called when device disconnects."""
    callback_called = [False]
    callback_error = [None]

    def on_disconnect(error):
        callback_called[0] = True
        callback_error[0] = error

    # Create modem with disconnect callback
    transport = MockTransport()
    modem = GSMModem(transport=transport, grace_period=0, on_disconnect=on_disconnect)
    modem.connect()

    # Verify initial state
    assert modem.is_running is True
    assert modem.is_disconnected is False
    assert callback_called[0] is False

    # Simulate disconnection
    transport.close()

    # Wait for reader thread to detect disconnection
    time.sleep(0.5)

    # Verify callback was called
    assert callback_called[0] is True
    assert isinstance(callback_error[0], DeviceDisconnectedError)

    # Verify modem state
    assert modem.is_disconnected is True
    assert modem.is_running is False
    assert modem.is_connected is False

    modem.disconnect()


def test_commands_rejected_after_disconnection():
    """Test that commands fail fast once the device is gone."""
    transport = MockTransport()
    modem = GSMModem(transport=transport, grace_period=0)
    modem.connect()

    transport.close()
    time.sleep(0.5)

    with pytest.raises(NotConnectedError):
        modem.send_raw_at("AT")

    modem.disconnect()


def test_pending_command_fails_on_disconnection():
    """Test that a command waiting for a reply fails when the device vanishes."""
    transport = MockTransport()
    modem = GSMModem(transport=transport, timeout=5.0, grace_period=0)
    modem.connect()

    errors = []

    def send():
        try:
            modem.send_raw_at("AT+CGNSINF")
        except Exception as e:
            errors.append(e)

    sender = threading.Thread(target=send)
    sender.start()

    # Wait until the command is on the wire
    deadline = time.monotonic() + 1.0
    while not transport.written and time.monotonic() < deadline:
        time.sleep(0.01)

    start = time.monotonic()
    transport.close()
    sender.join(timeout=2.0)

    assert not sender.is_alive()
    assert time.monotonic() - start < 2.0
    assert len(errors) == 1
    assert isinstance(errors[0], NotConnectedError)

    modem.disconnect()


def test_no_infinite_loop_on_disconnection():
    """Test that disconnection doesn't cause infinite error loop."""
    error_count = [0]

    def on_disconnect(error):
        error_count[0] += 1

    transport = MockTransport()
    modem = GSMModem(transport=transport, on_disconnect=on_disconnect)
    modem.connect()

    # Simulate disconnection
    transport.close()

    # Wait a bit longer than normal
    time.sleep(1.0)

    # Callback should only be called once, not looping
    assert error_count[0] == 1

    # Thread should be stopped
    assert modem.is_running is False

    modem.disconnect()


def test_consecutive_error_limit():
    """Test that too many consecutive errors stops the reader thread."""
    # Transport whose reads fail with a regular (non-disconnection) error
    class ErrorTransport(MockTransport):
        def __init__(self):
            super().__init__()
            self.read_count = 0

        def read(self, timeout=None):
            self.read_count += 1
            raise Exception("Test error")

    transport = ErrorTransport()
    modem = GSMModem(transport=transport)
    modem.connect()

    # With exponential backoff: 0.1s, 0.2s, 0.4s, 0.8s = ~1.5s total
    time.sleep(3.0)

    # Should have stopped after max errors
    assert modem.is_running is False
    assert transport.read_count >= 5
    # Not a disconnection, so no disconnect state
    assert modem.is_disconnected is False

    # Nothing reads the device any more, so commands fail fast
    assert modem.is_connected is False
    start = time.monotonic()
    with pytest.raises(NotConnectedError):
        modem.send_raw_at("AT")
    assert time.monotonic() - start < 1.0

    modem.disconnect()


def test_reconnect_after_disconnection():
    """Test that the modem can be connected again after the device returns."""
    transport = MockTransport()
    modem = GSMModem(transport=transport, grace_period=0)
    modem.connect()

    transport.close()
    time.sleep(0.5)
    assert modem.is_disconnected is True

    modem.disconnect()
    modem.connect()

    assert modem.is_connected is True
    assert modem.is_disconnected is False

    transport.add_response(["OK"])
    assert modem.send_raw_at("AT") == ""

    modem.disconnect()


def test_disconnect_is_idempotent():
    """Test that disconnecting twice is harmless."""
    transport = MockTransport()
    modem = GSMModem(transport=transport)
    modem.connect()

    modem.disconnect()
    modem.disconnect()

    assert modem.is_connected is False
    assert modem.is_running is False
