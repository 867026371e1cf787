"""
Supported HMAC signing algorithms.
"""
from enum import Enum
from typing import Any

from .exceptions import UnsupportedAlgorithmError


class Algorithm(str, Enum):
    """HMAC algorithms accepted in the ``alg`` header."""
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"

    @classmethod
    def from_header(cls, value: Any) -> "Algorithm":
        """
        Resolve the ``alg`` header value to an Algorithm.

        Only the exact names HS256, HS384 and HS512 are recognized.

        Raises:
            UnsupportedAlgorithmError: If the value is missing or unknown
        """
        if not isinstance(value, str) or value not in _BY_NAME:
            raise UnsupportedAlgorithmError(f"Unsupported algorithm: {value!r}")
        return _BY_NAME[value]


_BY_NAME = {algorithm.value: algorithm for algorithm in Algorithm}
