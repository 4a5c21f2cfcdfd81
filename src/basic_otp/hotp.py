"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import logging
from typing import Optional, Union

from basic_otp.encoding import decode_secret
from basic_otp.keyed_hash import HashAlgorithm, KeyedHash, hmac_digest
from basic_otp.otp import MAX_COUNTER, OtpParameters, codes_match, generate_code
from basic_otp.uri import hotp_uri

log = logging.getLogger(__name__)


class HOTP:
    """
    Counter-based code generator and validator.

    The counter is advanced by every :meth:`generate` call and by every
    successful :meth:`validate` call. Instances are not thread-safe: callers
    must serialize access per credential (e.g. one lock per user and device)
    and persist ``counter`` themselves.
    """

    def __init__(
        self,
        parameters: OtpParameters,
        counter: int = 0,
        sync_window: int = 0,
        keyed_hash: KeyedHash = hmac_digest,
    ):
        """
        Initialize an HOTP instance.

        Args:
            parameters: Secret, code length and algorithm.
            counter: Current counter value.
            sync_window: How many counter values past ``counter`` validate()
                may look ahead. 0 or less means exact match only.
            keyed_hash: Provider computing the HMAC.
        """
        self.parameters = parameters
        self.counter = counter
        self.sync_window = max(sync_window or 0, 0)
        self.keyed_hash = keyed_hash

    def __repr__(self) -> str:
        return (
            f"HOTP(parameters={self.parameters!r}, counter={self.counter}, "
            f"sync_window={self.sync_window})"
        )

    def code_at(self, counter: int) -> str:
        """Return the code for an explicit counter value without touching state."""
        return generate_code(self.parameters, counter, self.keyed_hash)

    def generate(self) -> str:
        """
        Generate the code for the current counter and advance the counter.

        Raises:
            InvalidInputError: If the counter is negative.
        """
        code = self.code_at(self.counter)
        self.counter += 1
        return code

    def validate(self, candidate: str) -> bool:
        """
        Validate a code, looking ahead up to ``sync_window`` counter values.

        On a match at ``counter + i`` the counter is moved to ``counter + i + 1``.
        On failure the counter is left unchanged.

        Args:
            candidate: Code supplied by the user.

        Returns:
            True if the code matched.
        """
        for offset in range(self.sync_window + 1):
            value = self.counter + offset
            # No code exists outside the 64-bit counter range
            if value < 0 or value > MAX_COUNTER:
                continue
            if codes_match(self.code_at(value), candidate):
                if offset:
                    log.debug(
                        "HOTP resynchronized: counter %d -> %d",
                        self.counter,
                        value + 1,
                    )
                self.counter = value + 1
                return True
        return False

    def uri(self, label: str, issuer: str) -> str:
        """Return the otpauth:// provisioning URI at the current counter."""
        return hotp_uri(self, label, issuer)


def generate_hotp(
    secret: Union[str, bytes],
    counter: int,
    digits: int = 6,
    algorithm: Optional[Union[str, HashAlgorithm]] = HashAlgorithm.SHA1,
) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        secret: The HOTP secret as a string (Base32 or Base64 encoded) or bytes.
        counter: The moving counter value (incremented after each use).
        digits: Number of digits in the output code (default: 6).
        algorithm: Hash algorithm name or member (default: SHA1).

    Returns:
        A zero-padded HOTP code string.

    Raises:
        InvalidInputError: If the secret cannot be decoded or the counter is
            negative.
        ConfigurationError: If the secret is empty.
    """
    # Decode secret if it's a string
    if isinstance(secret, str):
        raw_secret = decode_secret(secret)
    else:
        raw_secret = secret

    parameters = OtpParameters(raw_secret, digits, algorithm)
    return generate_code(parameters, counter)
