"""
AT command protocol engine.

Turns the unframed modem byte stream into discrete command transactions.
Exactly one transaction may be outstanding at a time; bytes are accumulated
until the buffer ends in a terminator marker or the deadline passes.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .transport import Transport
from ..types import ReturnCode
from ..exceptions import (
    GSMError,
    ATTimeoutError,
    BusyError,
    ModemError,
    NotConnectedError,
)

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"
CTRL_Z = "\x1a"

DEFAULT_TIMEOUT = 5.0
LONG_TIMEOUT = 20.0

# Pause between seeing a terminator and returning to the caller, to let
# trailing modem noise drain before the next command. 0 disables it.
RESPONSE_GRACE_PERIOD = 0.02


class TransactionState(Enum):
    """Engine state machine."""
    IDLE = "idle"
    SENDING = "sending"
    ACCUMULATING = "accumulating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class Outcome(Enum):
    """Terminator classes."""
    SUCCESS = "success"
    FAILURE = "failure"
    PROMPT = "prompt"


# Checked in order: final status markers win over the continuation prompt
TERMINATORS = (
    (ReturnCode.OK.value, Outcome.SUCCESS),
    (ReturnCode.ERROR.value, Outcome.FAILURE),
    (ReturnCode.PROMPT.value, Outcome.PROMPT),
)

# Extended failure result lines, e.g. "+CME ERROR: 10"
EXTENDED_ERROR_PREFIXES = ("+CME ERROR", "+CMS ERROR")


def _ends_with_marker(text: str, marker: str) -> bool:
    """Check for a marker at the end of text, starting on its own line."""
    if not text.endswith(marker):
        return False
    head = text[:-len(marker)]
    return not head or head[-1] in "\r\n"


def classify(raw: str) -> Optional[Outcome]:
    """
    Classify an accumulated buffer.

    Args:
        raw: Buffer text as received so far

    Returns:
        The terminator class, or None if more data is needed
    """
    text = raw.strip()

    for marker, outcome in TERMINATORS:
        if _ends_with_marker(text, marker):
            return outcome

    # Extended errors carry a code, so only a completed line counts
    if raw.endswith("\n") and text:
        last_line = text.splitlines()[-1].strip()
        if last_line.startswith(EXTENDED_ERROR_PREFIXES):
            return Outcome.FAILURE

    return None


@dataclass
class Transaction:
    """One in-flight command."""
    command: str
    deadline: float
    buffer: bytearray = field(default_factory=bytearray)
    done: threading.Event = field(default_factory=threading.Event)
    result: str = ""
    error: Optional[GSMError] = None

    def text(self) -> str:
        return self.buffer.decode("utf-8", errors="ignore")


class ATProtocol:
    """
    AT command protocol engine.

    Owns the connection flag, the single pending transaction and its
    accumulation buffer. Commands are issued from caller threads; bytes are
    delivered through feed() by whoever reads the transport.
    """

    def __init__(
        self,
        transport: Transport,
        default_timeout: float = DEFAULT_TIMEOUT,
        grace_period: float = RESPONSE_GRACE_PERIOD
    ) -> None:
        """
        Initialize AT protocol engine.

        Args:
            transport: Transport instance for communication
            default_timeout: Default timeout for AT commands in seconds
            grace_period: Delay before delivering a resolved response
        """
        self.transport = transport
        self.default_timeout = default_timeout
        self.grace_period = grace_period

        self._lock = threading.Lock()
        self._connected = False
        self._transaction: Optional[Transaction] = None
        self._state = TransactionState.IDLE

        logger.info("Initialized AT protocol engine")

    @property
    def state(self) -> TransactionState:
        """Current state of the engine."""
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def is_busy(self) -> bool:
        """True while a transaction is pending."""
        return self._transaction is not None

    def mark_connected(self) -> None:
        """Record that the transport is open."""
        with self._lock:
            self._connected = True
        logger.debug("Engine connected")

    def mark_disconnected(self) -> None:
        """
        Record that the transport is gone.

        A pending transaction fails with NotConnectedError instead of waiting
        for its deadline.
        """
        with self._lock:
            self._connected = False
            transaction = self._transaction
            if transaction is not None:
                transaction.error = NotConnectedError(
                    "Connection lost while waiting for response",
                    command=transaction.command,
                    response=transaction.text()
                )
                self._finish(transaction, TransactionState.FAILED)
        logger.debug("Engine disconnected")

    def send_command(self, command: str, timeout: Optional[float] = None) -> str:
        """
        Send an AT command and wait for its response.

        Args:
            command: AT command to send (e.g., "AT+CSQ")
            timeout: Command timeout in seconds (uses default if None)

        Returns:
            Response text with the terminator removed. For a continuation
            prompt the text still ends in ">" and send_payload() must follow.

        Raises:
            NotConnectedError: If the transport is not connected
            BusyError: If another command is pending
            ATTimeoutError: If no terminator arrives in time
            ModemError: If the modem answers ERROR
        """
        command = command.strip()
        return self._execute(command, command + LINE_TERMINATOR, timeout)

    def send_payload(self, payload: str, timeout: Optional[float] = None) -> str:
        """
        Send the data that follows a continuation prompt.

        The payload is terminated with Ctrl+Z instead of CR/LF.

        Args:
            payload: Data to send (e.g., a UCS2 hex message body)
            timeout: Timeout in seconds (uses default if None)

        Returns:
            Response text with the terminator removed
        """
        return self._execute(payload, payload + CTRL_Z, timeout)

    def _execute(self, command: str, wire: str, timeout: Optional[float]) -> str:
        timeout_val = timeout if timeout is not None else self.default_timeout

        with self._lock:
            if not self._connected:
                raise NotConnectedError("Not connected", command=command)
            if self._transaction is not None:
                raise BusyError(
                    "Cannot run command while already waiting for another",
                    command=command
                )
            transaction = Transaction(command=command, deadline=time.monotonic() + timeout_val)
            self._transaction = transaction
            self._set_state(TransactionState.SENDING)

        logger.debug(f"Sending AT command: {command}")

        try:
            self.transport.write(wire.encode("utf-8"))
        except GSMError:
            with self._lock:
                if self._transaction is transaction:
                    self._transaction = None
                    self._set_state(TransactionState.IDLE)
            raise

        with self._lock:
            if self._transaction is transaction:
                self._set_state(TransactionState.ACCUMULATING)

        if not transaction.done.wait(max(0.0, transaction.deadline - time.monotonic())):
            with self._lock:
                if self._transaction is transaction:
                    partial = transaction.text()
                    self._finish(transaction, TransactionState.TIMED_OUT)
                    logger.error(f"AT command timed out: {command}")
                    raise ATTimeoutError(
                        f"Timeout waiting for command: {command}",
                        command=command,
                        response=partial
                    )

        if self.grace_period > 0:
            time.sleep(self.grace_period)

        if transaction.error is not None:
            raise transaction.error

        logger.debug(f"Received response: {transaction.result!r}")
        return transaction.result

    def feed(self, data: bytes) -> None:
        """
        Deliver bytes received from the transport.

        Bytes are appended in arrival order and the buffer is classified
        after every chunk. Bytes arriving with no pending command are
        discarded.

        Args:
            data: Received bytes
        """
        with self._lock:
            transaction = self._transaction
            if transaction is None:
                logger.warning(f"Discarding bytes with no pending command: {data!r}")
                return

            transaction.buffer.extend(data)
            raw = transaction.text()
            outcome = classify(raw)

            if outcome is None:
                return

            text = raw.strip()

            if outcome is Outcome.SUCCESS:
                body = text[:-len(ReturnCode.OK.value)].strip()
                transaction.result = self._strip_echo(body, transaction.command)
                self._finish(transaction, TransactionState.SUCCEEDED)

            elif outcome is Outcome.FAILURE:
                detail = text
                if _ends_with_marker(text, ReturnCode.ERROR.value):
                    detail = text[:-len(ReturnCode.ERROR.value)].strip()
                logger.error(f"AT command returned error: {transaction.command}: {detail!r}")
                transaction.error = ModemError(detail, command=transaction.command, response=text)
                self._finish(transaction, TransactionState.FAILED)

            else:
                transaction.result = text
                self._finish(transaction, TransactionState.SUCCEEDED)

    def _finish(self, transaction: Transaction, state: TransactionState) -> None:
        """Detach the transaction and wake its caller. Lock must be held."""
        self._set_state(state)
        self._transaction = None
        self._set_state(TransactionState.IDLE)
        transaction.done.set()

    def _set_state(self, state: TransactionState) -> None:
        if state is not self._state:
            logger.debug(f"Engine state: {self._state.value} -> {state.value}")
            self._state = state

    @staticmethod
    def _strip_echo(body: str, command: str) -> str:
        """Drop the first line if it is the modem echoing the command."""
        lines = body.splitlines()
        if lines and lines[0].strip() == command:
            logger.debug(f"Stripping echo line: {lines[0]}")
            return "\n".join(lines[1:]).strip()
        return body
