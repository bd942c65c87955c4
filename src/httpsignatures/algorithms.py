"""
Signature algorithm registry

Maps each SignatureAlgorithm token to the function computing its raw signature
bytes. New algorithms are added here without touching the parser.
"""

from typing import Callable, Dict, Union

from cryptography.hazmat.primitives import hashes, hmac

from .types import SignatureAlgorithm
from .exceptions import InvalidKeyError, UnsupportedAlgorithmError

SignFunction = Callable[[bytes, bytes], bytes]


def _hmac_sha256(key: bytes, message: bytes) -> bytes:
    h = hmac.HMAC(key, hashes.SHA256())
    h.update(message)
    return h.finalize()


ALGORITHMS: Dict[SignatureAlgorithm, SignFunction] = {
    SignatureAlgorithm.HMAC_SHA256: _hmac_sha256,
}


def get_algorithm(algorithm: SignatureAlgorithm) -> SignFunction:
    """
    Look up the signing function for an algorithm.

    Raises:
        UnsupportedAlgorithmError: If no function is registered
    """
    try:
        return ALGORITHMS[algorithm]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(algorithm) from None


def normalize_key(key: Union[bytes, str]) -> bytes:
    """
    Convert caller supplied key material to bytes.

    Args:
        key: Raw secret as bytes or text (UTF-8 encoded)

    Returns:
        bytes: Key bytes

    Raises:
        InvalidKeyError: If the key is empty or of an unsupported type
    """
    if isinstance(key, str):
        key = key.encode("utf-8")
    elif isinstance(key, (bytearray, memoryview)):
        key = bytes(key)
    elif not isinstance(key, bytes):
        raise InvalidKeyError(
            "Key must be bytes or str",
            {"key_type": type(key).__name__}
        )

    if not key:
        raise InvalidKeyError("Key cannot be empty")

    return key


def compute_signature(algorithm: SignatureAlgorithm, key: Union[bytes, str], message: bytes) -> bytes:
    """Compute the raw signature of a message with the given algorithm and key."""
    sign = get_algorithm(algorithm)
    return sign(normalize_key(key), message)
