"""Google Authenticator ``otpauth://`` provisioning URIs.

See https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

from typing import TYPE_CHECKING, Optional
from urllib.parse import quote

from basic_otp.encoding import encode_secret
from basic_otp.errors import InvalidInputError
from basic_otp.otp import OtpParameters

if TYPE_CHECKING:
    from basic_otp.hotp import HOTP
    from basic_otp.totp import TOTP

DEFAULT_PERIOD = 30

# Characters a URL path segment may carry unescaped besides the unreserved set
PATH_SEGMENT_SAFE = "$&+:=@"


def escape_path_segment(value: str) -> str:
    """Percent-escape ``value`` with URL path-segment rules."""
    return quote(value, safe=PATH_SEGMENT_SAFE)


def build_uri(
    otp_type: str,
    parameters: OtpParameters,
    label: str,
    issuer: str,
    counter: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Build a provisioning URI.

    Args:
        otp_type: ``"hotp"`` or ``"totp"``.
        parameters: Secret, code length and algorithm of the credential.
        label: Account label, e.g. ``"Example:alice@example.com"``.
        issuer: Issuer name.
        counter: Current counter, emitted for HOTP only.
        period: Step length in seconds; emitted only when it differs from 30.

    Returns:
        The ``otpauth://`` URI.

    Raises:
        InvalidInputError: If ``otp_type`` is not hotp or totp.
    """
    if otp_type not in ("hotp", "totp"):
        raise InvalidInputError(f"Unknown OTP type: {otp_type}")

    uri = (
        f"otpauth://{otp_type}/{escape_path_segment(label)}"
        f"?secret={encode_secret(parameters.secret)}"
        f"&issuer={escape_path_segment(issuer)}"
        f"&algorithm={parameters.algorithm.value}"
        f"&digits={parameters.code_length}"
    )
    if otp_type == "hotp" and counter is not None:
        uri += f"&counter={counter}"
    if otp_type == "totp" and period is not None and period != DEFAULT_PERIOD:
        uri += f"&period={period}"
    return uri


def hotp_uri(hotp: "HOTP", label: str, issuer: str) -> str:
    """Provisioning URI for a counter-based generator at its current counter."""
    return build_uri("hotp", hotp.parameters, label, issuer, counter=hotp.counter)


def totp_uri(totp: "TOTP", label: str, issuer: str) -> str:
    """Provisioning URI for a time-based generator."""
    return build_uri("totp", totp.parameters, label, issuer, period=totp.step_seconds)
