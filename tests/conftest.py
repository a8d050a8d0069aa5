"""
Pytest configuration and fixtures.

Provides shared test fixtures for gsmpy tests.
"""

import pytest
import logging

from gsmpy.core import MockTransport, ModemCore
from gsmpy import GSMModem


# Enable logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def mock_transport():
    """
    Create a MockTransport instance for testing.

    Example:
        def test_something(mock_transport):
            mock_transport.add_response(["OK"])
            # ... test code ...
    """
    transport = MockTransport()
    yield transport
    transport.close()


@pytest.fixture
def modem_core(mock_transport):
    """
    Create a connected ModemCore instance with MockTransport.

    Example:
        def test_at_command(modem_core, mock_transport):
            mock_transport.add_response(["+CSQ: 24,99", "OK"])
            response = modem_core.send_at("AT+CSQ")
            assert response == "+CSQ: 24,99"
    """
    core = ModemCore(transport=mock_transport, timeout=1.0, grace_period=0, read_timeout=0.02)
    core.connect()
    yield core
    core.disconnect()


@pytest.fixture
def modem(mock_transport):
    """
    Create a connected GSMModem instance with MockTransport.

    Example:
        def test_device_info(modem, mock_transport):
            mock_transport.add_response(["SIMCOM_SIM7000E", "OK"])
            assert modem.device.get_model() == "SIMCOM_SIM7000E"
    """
    modem_instance = GSMModem(transport=mock_transport, timeout=1.0, grace_period=0)
    modem_instance.connect()
    yield modem_instance
    if modem_instance.is_connected:
        modem_instance.disconnect()


def written_commands(transport: MockTransport) -> list[str]:
    """Decode everything written to the transport, terminators included."""
    return [data.decode("utf-8") for data in transport.written]


@pytest.fixture
def written():
    """Helper returning the decoded writes of a MockTransport."""
    return written_commands
