"""RFC 6238 TOTP (Time-based One-Time Password) implementation."""

import math
import time
from datetime import datetime
from typing import Callable, Iterator, Optional, Union

from basic_otp.errors import ConfigurationError, InvalidInputError
from basic_otp.keyed_hash import KeyedHash, hmac_digest
from basic_otp.otp import MAX_COUNTER, OtpParameters, codes_match, generate_code
from basic_otp.uri import totp_uri

DEFAULT_STEP_SECONDS = 30

Timestamp = Union[int, float, datetime]


class TOTP:
    """
    Time-based code generator and validator.

    The counter fed to the code generator is the number of whole
    ``step_seconds`` intervals since the Unix epoch. Nothing is mutated after
    construction, so one instance may be shared between threads.

    The wall clock is only read through ``clock`` (``time.time`` by default),
    which tests can replace.
    """

    def __init__(
        self,
        parameters: OtpParameters,
        step_seconds: int = DEFAULT_STEP_SECONDS,
        clock: Callable[[], float] = time.time,
        keyed_hash: KeyedHash = hmac_digest,
    ):
        step_seconds = step_seconds or DEFAULT_STEP_SECONDS
        if not isinstance(step_seconds, int) or isinstance(step_seconds, bool):
            raise ConfigurationError(f"Invalid time step: {step_seconds!r}")
        if step_seconds < 0:
            raise ConfigurationError(
                f"Time step must be positive, got {step_seconds}"
            )

        self.parameters = parameters
        self.step_seconds = step_seconds
        self.clock = clock
        self.keyed_hash = keyed_hash

    def __repr__(self) -> str:
        return f"TOTP(parameters={self.parameters!r}, step_seconds={self.step_seconds})"

    def time_step(self, timestamp: Timestamp) -> int:
        """
        Return the index of the time step containing ``timestamp``.

        Raises:
            InvalidInputError: If the timestamp is negative or not a number.
        """
        if isinstance(timestamp, datetime):
            timestamp = timestamp.timestamp()
        if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
            raise InvalidInputError(f"Timestamp must be a number, got {timestamp!r}")
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise InvalidInputError(f"Timestamp must be finite, got {timestamp}")
        if timestamp < 0:
            raise InvalidInputError(f"Timestamp must not be negative, got {timestamp}")
        return int(timestamp // self.step_seconds)

    def generate_at(self, timestamp: Timestamp) -> str:
        """Return the code for the time step containing ``timestamp``."""
        step = self.time_step(timestamp)
        return generate_code(self.parameters, step, self.keyed_hash)

    def generate(self) -> str:
        """Return the code for the current time."""
        return self.generate_at(self.clock())

    def validate_at(
        self, timestamp: Timestamp, candidate: str, window: int = 0
    ) -> bool:
        """
        Check ``candidate`` against the code for ``timestamp``.

        Args:
            timestamp: Unix timestamp the code is checked against.
            candidate: Code supplied by the user.
            window: Number of adjacent steps accepted on either side to
                tolerate clock skew. 0 (the default) means exact match only.

        Returns:
            True if the code matched.
        """
        step = self.time_step(timestamp)
        for value in _steps_around(step, max(window or 0, 0)):
            expected = generate_code(self.parameters, value, self.keyed_hash)
            if codes_match(expected, candidate):
                return True
        return False

    def validate(self, candidate: str, window: int = 0) -> bool:
        """Check ``candidate`` against the code for the current time."""
        return self.validate_at(self.clock(), candidate, window)

    def remaining_seconds(self, timestamp: Optional[Timestamp] = None) -> float:
        """Seconds left until the step containing ``timestamp`` (default: now) ends."""
        if timestamp is None:
            timestamp = self.clock()
        step = self.time_step(timestamp)
        if isinstance(timestamp, datetime):
            timestamp = timestamp.timestamp()
        return (step + 1) * self.step_seconds - timestamp

    def uri(self, label: str, issuer: str) -> str:
        """Return the otpauth:// provisioning URI."""
        return totp_uri(self, label, issuer)


def _steps_around(step: int, window: int) -> Iterator[int]:
    """Yield ``step``, then ``step-1, step+1, step-2, ...`` out to ``window``."""
    yield step
    for offset in range(1, window + 1):
        if step - offset >= 0:
            yield step - offset
        if step + offset <= MAX_COUNTER:
            yield step + offset
