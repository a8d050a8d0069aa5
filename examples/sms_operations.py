#!/usr/bin/env python3
"""
SMS and Phonebook Example

Demonstrates:
- Sending SMS (any text the UCS2 character set can carry)
- Listing messages by status
- Deleting read messages
- Reading and adding SIM contacts

Usage:
    python examples/sms_operations.py /dev/ttyUSB0
"""

import sys
from gsmpy import GSMModem, GSMError
from gsmpy.types import MessageDeleteFilter, MessageFilter, MessageStorage, PhoneBookStorage, PhoneNumberType


def send_sms_example(modem: GSMModem):
    """Demonstrate sending SMS."""
    print("\n" + "="*50)
    print("SENDING SMS")
    print("="*50)

    recipient = input("Enter recipient number (e.g., +1234567890): ").strip()
    message = input("Enter message text: ").strip()

    if not (recipient and message):
        print("Skipped - no input provided")
        return

    try:
        ref = modem.sms.send_sms(recipient, message)
        print(f"SMS sent successfully! Reference: {ref}")
    except GSMError as e:
        print(f"Failed to send SMS: {e}")


def list_sms_example(modem: GSMModem):
    """Demonstrate listing and deleting messages."""
    print("\n" + "="*50)
    print("LISTING SMS")
    print("="*50)

    messages = modem.sms.list_messages(MessageStorage.SIM, MessageFilter.ALL)
    print(f"\n{len(messages)} message(s) on SIM")

    for sms in messages:
        sender = f"{sms.alpha} <{sms.sender}>" if sms.alpha else sms.sender
        print(f"\n[{sms.index}] {sms.status} from {sender} at {sms.timestamp}")
        print(f"    {sms.content}")

    if messages and input("\nDelete read messages? (y/n): ").strip().lower() == "y":
        modem.sms.delete_all_messages(MessageStorage.SIM, MessageDeleteFilter.READ)
        print("Read messages deleted")


def phonebook_example(modem: GSMModem):
    """Demonstrate phonebook access."""
    print("\n" + "="*50)
    print("PHONEBOOK")
    print("="*50)

    usage = modem.phonebook.get_usage(PhoneBookStorage.SIM)
    print(f"\nSIM phonebook: {usage.used}/{usage.capacity} used")

    for contact in modem.phonebook.read_contacts(PhoneBookStorage.SIM, 1, 20):
        print(f"  {contact.index:3d}  {contact.name:<20} {contact.number}")

    name = input("\nAdd contact - name (blank to skip): ").strip()
    if name:
        number = input("Number: ").strip()
        number_type = PhoneNumberType.INTERNATIONAL if number.startswith("+") else PhoneNumberType.UNKNOWN
        modem.phonebook.add_contact(PhoneBookStorage.SIM, number, number_type, name)
        print("Contact added")


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    with GSMModem(port=sys.argv[1]) as modem:
        modem.device.check()
        print(f"Connected to {modem.device.get_model()}")

        list_sms_example(modem)
        send_sms_example(modem)
        phonebook_example(modem)


if __name__ == "__main__":
    main()
