"""
HMAC signing of JWT signing input.
"""
from typing import Union

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from .algorithms import Algorithm

_HASHES = {
    Algorithm.HS256: hashes.SHA256,
    Algorithm.HS384: hashes.SHA384,
    Algorithm.HS512: hashes.SHA512,
}


def hash_for(algorithm: Algorithm) -> hashes.HashAlgorithm:
    """Return the hash primitive backing an HMAC algorithm."""
    if not isinstance(algorithm, Algorithm):
        raise TypeError(f"Expected Algorithm, got {type(algorithm).__name__}")
    return _HASHES[algorithm]()


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def sign(algorithm: Algorithm, key: Union[str, bytes], message: Union[str, bytes]) -> bytes:
    """
    Compute the HMAC of a message.

    Args:
        algorithm: HMAC algorithm selecting the hash function
        key: Shared secret; str keys are UTF-8 encoded
        message: Signing input, normally "<header64>.<payload64>"

    Returns:
        Raw signature bytes
    """
    h = hmac.HMAC(_to_bytes(key), hash_for(algorithm))
    h.update(_to_bytes(message))
    return h.finalize()


def verify(
    algorithm: Algorithm,
    key: Union[str, bytes],
    message: Union[str, bytes],
    signature: bytes,
) -> bool:
    """Check a raw signature in constant time."""
    return constant_time.bytes_eq(sign(algorithm, key, message), bytes(signature))
