"""Text encodings for shared secrets."""

import base64
import binascii

from basic_otp.errors import InvalidInputError


def decode_secret(secret: str) -> bytes:
    """
    Decode an OTP secret from Base32 (preferred) or Base64.

    Base32 input may omit its ``=`` padding and may contain spaces, as
    authenticator apps usually display it in groups of four.

    Args:
        secret: The encoded secret string.

    Returns:
        Decoded secret as bytes.

    Raises:
        InvalidInputError: If the secret cannot be decoded from either format.
    """
    secret = secret.strip()
    compact = secret.replace(" ", "")
    # Try Base32 first (common for OTP secrets)
    try:
        return base64.b32decode(compact + "=" * (-len(compact) % 8), casefold=True)
    except binascii.Error:
        pass

    # Fall back to Base64
    try:
        return base64.b64decode(secret, validate=True)
    except binascii.Error as e:
        raise InvalidInputError(
            f"Unable to decode OTP secret from Base32 or Base64: {e}"
        ) from e


def encode_secret(secret: bytes) -> str:
    """Encode a secret as Base32 without padding, as used in otpauth URIs."""
    return base64.b32encode(secret).decode("ascii").rstrip("=")
