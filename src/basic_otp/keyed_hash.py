"""Keyed-hash providers used to compute the HMAC behind each code.

A provider is any callable ``(algorithm, key, message) -> bytes``. The default
uses the standard library ``hmac`` module; :func:`cryptography_digest` computes
the same MAC through the ``cryptography`` package.
"""

import hashlib
import hmac
import logging
from enum import Enum
from typing import Callable, Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

log = logging.getLogger(__name__)


class HashAlgorithm(str, Enum):
    """Hash function used for the HMAC."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[Union[str, "HashAlgorithm"]]) -> "HashAlgorithm":
        """
        Resolve an algorithm name to a HashAlgorithm.

        Names are matched case-insensitively with ``-`` and ``_`` ignored, so
        ``"sha-256"`` resolves to SHA256. ``None`` or an empty name gives SHA1.
        Any other unrecognised value also falls back to SHA1 (with a warning)
        instead of raising, to stay compatible with callers that pass
        arbitrary names.

        Args:
            value: Algorithm member or name.

        Returns:
            The matching HashAlgorithm, or SHA1.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.SHA1

        if isinstance(value, str):
            name = value.strip().upper().replace("-", "").replace("_", "")
            try:
                return cls(name)
            except ValueError:
                pass

        log.warning("Unknown hash algorithm %r, falling back to SHA1", value)
        return cls.SHA1


KeyedHash = Callable[[HashAlgorithm, bytes, bytes], bytes]

_HASHLIB_CONSTRUCTORS = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}

_CRYPTOGRAPHY_HASHES = {
    HashAlgorithm.SHA1: hashes.SHA1,
    HashAlgorithm.SHA256: hashes.SHA256,
    HashAlgorithm.SHA512: hashes.SHA512,
}


def hmac_digest(algorithm: HashAlgorithm, key: bytes, message: bytes) -> bytes:
    """Compute HMAC(key, message) with the standard library."""
    return hmac.new(key, message, _HASHLIB_CONSTRUCTORS[algorithm]).digest()


def cryptography_digest(algorithm: HashAlgorithm, key: bytes, message: bytes) -> bytes:
    """Compute HMAC(key, message) with the ``cryptography`` backend."""
    mac = crypto_hmac.HMAC(key, _CRYPTOGRAPHY_HASHES[algorithm]())
    mac.update(message)
    return mac.finalize()
