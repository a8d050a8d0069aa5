"""
CLI REPL (Read-Eval-Print Loop) for gsmpy.

Provides an interactive AT command terminal similar to minicom.
"""

import sys
import logging
from typing import Optional

from .modem import GSMModem
from .version import __version__
from .core import DEFAULT_BAUDRATE, DEFAULT_TIMEOUT
from .types import ReturnCode
from .exceptions import GSMError


class GSMCLI:
    """Interactive AT command REPL."""

    def __init__(
        self,
        port: Optional[str] = None,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
        modem: Optional[GSMModem] = None
    ):
        """
        Initialize CLI.

        Args:
            port: Serial port path
            baudrate: Baud rate
            timeout: AT command timeout in seconds
            modem: Already constructed modem to use instead of opening port
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self.modem = modem

    def run(self):
        """Run the REPL."""
        print(f"gsmpy CLI v{__version__}")
        print(f"Connecting to {self.port} at {self.baudrate} baud...")
        print("Type 'help' for commands, 'quit' to exit\n")

        try:
            if self.modem is None:
                self.modem = GSMModem(
                    port=self.port,
                    baudrate=self.baudrate,
                    timeout=self.timeout
                )
            self.modem.connect()

            print("Connected! Ready for AT commands.\n")

            # REPL loop
            while True:
                try:
                    cmd = input("> ").strip()

                    if not cmd:
                        continue

                    # Handle special commands
                    if cmd.lower() in ("quit", "exit", "q"):
                        break
                    elif cmd.lower() == "help":
                        self._print_help()
                        continue
                    elif cmd.lower() == "clear":
                        print("\033[2J\033[H", end="")  # Clear screen
                        continue
                    elif cmd.lower() == "info":
                        self._show_modem_info()
                        continue

                    self._send_command(cmd)

                except KeyboardInterrupt:
                    print("\nUse 'quit' to exit")
                    continue
                except EOFError:
                    break

        except GSMError as e:
            print(f"\nError: {e}")
            return 1
        except Exception as e:
            print(f"\nUnexpected error: {e}")
            logging.exception("CLI error")
            return 1
        finally:
            if self.modem and self.modem.is_connected:
                print("\nClosing connection...")
                self.modem.disconnect()
                print("Goodbye!")

        return 0

    def _send_command(self, cmd: str):
        """Send AT command and display response."""
        try:
            response = self.modem.send_raw_at(cmd)

            # The modem waits for data terminated by Ctrl+Z
            if response.endswith(ReturnCode.PROMPT.value):
                payload = input("data> ")
                response = self.modem.send_raw_payload(payload)

            if response:
                print(response)
            print(ReturnCode.OK.value)

        except GSMError as e:
            print(f"Error: {e}")

    def _print_help(self):
        """Print help message."""
        print("""
Available commands:
  <AT command>  - Send AT command to modem (e.g., AT+CSQ)
  help          - Show this help message
  info          - Show modem information
  clear         - Clear screen
  quit/exit/q   - Exit CLI

Commands answered with a '>' prompt (e.g., AT+CMGS) ask for the data
to send; it is terminated with Ctrl+Z automatically.

Common AT commands:
  ATI           - Get identification information
  AT+CSQ        - Check signal quality
  AT+COPS?      - Get current operator
  AT+CSCS?      - Get character set
  AT+CPBR=1,10  - Read phonebook entries
  AT+CGNSINF    - Get GNSS information

For full AT command reference, consult your modem's documentation.
        """)

    def _show_modem_info(self):
        """Show modem information."""
        try:
            print("\nFetching modem information...")

            print(f"\nManufacturer: {self.modem.device.get_manufacturer()}")
            print(f"Model: {self.modem.device.get_model()}")
            print(f"Revision: {self.modem.device.get_revision()}")

            signal = self.modem.network.get_signal_quality()
            if signal.is_valid:
                print(f"\nSignal: RSSI={signal.rssi} ({signal.rssi_dbm} dBm), BER={signal.ber}")
            else:
                print("\nSignal: No signal detected")

            print(f"Operator: {self.modem.network.get_current_operator()}")

        except GSMError as e:
            print(f"Error fetching modem info: {e}")


def main():
    """Main entry point for CLI."""
    import argparse

    parser = argparse.ArgumentParser(
        description="gsmpy CLI - Interactive AT command terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gsm-cli /dev/ttyUSB0
  gsm-cli /dev/ttyUSB0 --baudrate 115200
  gsm-cli /dev/ttyUSB0 --timeout 10
        """
    )

    parser.add_argument(
        "port",
        help="Serial port (e.g., /dev/ttyUSB0, COM3)"
    )
    parser.add_argument(
        "-b", "--baudrate",
        type=int,
        default=DEFAULT_BAUDRATE,
        help=f"Baud rate (default: {DEFAULT_BAUDRATE})"
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"AT command timeout in seconds (default: {DEFAULT_TIMEOUT})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    # Setup logging
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        logging.basicConfig(
            level=logging.WARNING,
            format='%(levelname)s: %(message)s'
        )

    cli = GSMCLI(
        port=args.port,
        baudrate=args.baudrate,
        timeout=args.timeout
    )

    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
