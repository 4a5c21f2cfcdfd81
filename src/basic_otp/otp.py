"""RFC 4226 code generation shared by HOTP and TOTP."""

import hmac
from dataclasses import dataclass, field
from typing import Any

from basic_otp.errors import ConfigurationError, InvalidInputError
from basic_otp.keyed_hash import HashAlgorithm, KeyedHash, hmac_digest


DEFAULT_CODE_LENGTH = 6
MAX_COUNTER = 2**64 - 1


@dataclass(frozen=True)
class OtpParameters:
    """
    Shared-secret configuration for a generator.

    Args:
        secret: Raw shared secret. Must not be empty.
        code_length: Number of digits per code. 0 or None selects the
            RFC 4226 default of 6.
        algorithm: Hash algorithm, as a member or a name. Unknown names fall
            back to SHA1.

    Raises:
        ConfigurationError: If the secret is empty or not bytes, or the code
            length is negative.
    """

    secret: bytes = field(repr=False)
    code_length: int = DEFAULT_CODE_LENGTH
    algorithm: HashAlgorithm = HashAlgorithm.SHA1

    def __post_init__(self) -> None:
        secret = self.secret
        if isinstance(secret, (bytearray, memoryview)):
            secret = bytes(secret)
        if not isinstance(secret, bytes):
            raise ConfigurationError(
                f"OTP secret must be bytes, not {type(secret).__name__}"
            )
        if len(secret) == 0:
            raise ConfigurationError("OTP requires a non-empty secret")

        code_length = self.code_length or DEFAULT_CODE_LENGTH
        if not isinstance(code_length, int) or isinstance(code_length, bool):
            raise ConfigurationError(f"Invalid code length: {self.code_length!r}")
        if code_length < 0:
            raise ConfigurationError(
                f"Code length must be positive, got {code_length}"
            )

        object.__setattr__(self, "secret", secret)
        object.__setattr__(self, "code_length", code_length)
        object.__setattr__(self, "algorithm", HashAlgorithm.parse(self.algorithm))


def truncate(digest: bytes) -> int:
    """
    Extract a 31-bit integer from an HMAC digest (RFC 4226, Section 5.3).

    The low nibble of the last byte selects the offset of four bytes; the top
    bit of the first of them is masked off.
    """
    offset = digest[-1] & 0x0F
    return (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )


def generate_code(
    parameters: OtpParameters,
    counter: int,
    keyed_hash: KeyedHash = hmac_digest,
) -> str:
    """
    Generate the code for a single counter value.

    Args:
        parameters: Secret, code length and algorithm.
        counter: Moving factor (HOTP counter or TOTP time step).
        keyed_hash: Provider computing HMAC(secret, counter).

    Returns:
        A zero-padded code of exactly ``parameters.code_length`` digits.

    Raises:
        InvalidInputError: If the counter is not an integer in [0, 2**64).
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise InvalidInputError(f"Counter must be an integer, got {counter!r}")
    if counter < 0:
        raise InvalidInputError(f"Counter must not be negative, got {counter}")
    if counter > MAX_COUNTER:
        raise InvalidInputError(f"Counter does not fit in 64 bits: {counter}")

    # Convert counter to 8-byte big-endian integer
    counter_bytes = counter.to_bytes(8, byteorder="big")
    digest = keyed_hash(parameters.algorithm, parameters.secret, counter_bytes)

    digits = parameters.code_length
    code = truncate(digest) % (10**digits)
    return f"{code:0{digits}d}"


def codes_match(expected: str, candidate: Any) -> bool:
    """
    Compare a generated code with a caller-supplied candidate.

    Runs in constant time for equal-length input. Anything that is not a
    string simply does not match.
    """
    if not isinstance(candidate, str):
        return False
    return hmac.compare_digest(
        expected.encode("utf-8"), candidate.encode("utf-8", "surrogatepass")
    )
