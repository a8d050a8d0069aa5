"""
Signal quality monitoring example.

Demonstrates checking signal strength, operator and GNSS position.
"""

import time
from gsmpy import GSMModem

# Replace with your serial port
PORT = "/dev/ttyUSB0"


def main():
    """Main function."""
    print("gsmpy - Signal Quality Monitor\n")

    with GSMModem(port=PORT) as modem:
        print(f"Modem: {modem.device.get_manufacturer()} {modem.device.get_model()}")
        print("Monitoring signal quality (Ctrl+C to stop)...\n")

        try:
            while True:
                signal = modem.network.get_signal_quality()

                if signal.is_valid:
                    print(f"Signal: RSSI={signal.rssi} ({signal.rssi_dbm} dBm), BER={signal.ber}")
                else:
                    print("No signal detected")

                print(f"Operator: {modem.network.get_current_operator()}")

                fix = modem.gps.get_position()
                if fix.has_fix:
                    print(f"Position: {fix.latitude},{fix.longitude} at {fix.time} UTC")
                else:
                    print("Waiting for GNSS fix")

                print("-" * 40)
                time.sleep(5)

        except KeyboardInterrupt:
            print("\nStopping monitor...")
        finally:
            modem.gps.turn_off()


if __name__ == "__main__":
    main()
