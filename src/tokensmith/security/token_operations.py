"""
JWT token operations for generation, verification, and decoding.

Tokens are signed with HMAC (HS256, HS384 or HS512). Verification re-serializes
the decoded header and payload in canonical JSON form and re-signs them, so the
signature is always checked against the canonical representation.
"""
import json
import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Tuple, Union

from cryptography.hazmat.primitives import constant_time

if TYPE_CHECKING:
    from tokensmith.config.jwt_config import JWTConfig

from .algorithms import Algorithm
from .clock import current_unix_seconds
from .codec import base64url_decode, base64url_encode
from .exceptions import (
    InvalidEncodingError,
    JWTError,
    MalformedTokenError,
    SerializationError,
    SignatureMismatchError,
    TokenExpiredError,
)
from .signer import sign

logger = logging.getLogger(__name__)

Key = Union[str, bytes]
Clock = Callable[[], int]

TOKEN_TYPE = "JWT"


def _check_keys(value: Any) -> None:
    if isinstance(value, Mapping):
        for name, item in value.items():
            if not isinstance(name, str):
                raise TypeError(f"Keys must be str, not {type(name).__name__}")
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def _to_json(value: Mapping[str, Any]) -> bytes:
    """Serialize to canonical JSON: sorted keys, no whitespace."""
    try:
        # json.dumps would coerce int/float/bool/None keys to strings
        _check_keys(value)
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=True,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Error encoding map to JSON: {e}") from e
    except RecursionError as e:
        raise SerializationError("Value is nested too deeply") from e
    return text.encode("utf-8")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"{text} is out of range")
    return value


def _from_json_segment(segment: str, name: str) -> Dict[str, Any]:
    try:
        data = json.loads(
            base64url_decode(segment).decode("utf-8"),
            parse_constant=_reject_constant,
            parse_float=_parse_float,
        )
    except InvalidEncodingError as e:
        raise MalformedTokenError(f"Invalid base64url in {name} segment") from e
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedTokenError(f"Invalid JSON in {name} segment") from e
    except RecursionError as e:
        raise MalformedTokenError(f"{name.capitalize()} segment is nested too deeply") from e

    if not isinstance(data, dict):
        raise MalformedTokenError(f"{name.capitalize()} segment is not a JSON object")
    return data


def _split(token: str) -> Tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedTokenError("Token must be a string")
    segments = token.split(".")
    if len(segments) != 3 or not all(segments):
        raise MalformedTokenError("Invalid JSON Web Token")
    return segments[0], segments[1], segments[2]


def build_header(algorithm: Algorithm, extra_headers: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Build a token header.

    The defaults ``alg`` and ``typ`` come first; extra headers are layered on
    top and replace the defaults when they share a key.
    """
    header = {"alg": Algorithm(algorithm).value, "typ": TOKEN_TYPE}
    if extra_headers:
        for name, value in extra_headers.items():
            header[name] = value
    return header


def _signing_segments(header: Mapping[str, Any], payload: Mapping[str, Any]) -> Tuple[str, str]:
    return base64url_encode(_to_json(header)), base64url_encode(_to_json(payload))


def encode(
    payload: Mapping[str, Any],
    key: Key,
    algorithm: Algorithm = Algorithm.HS256,
    extra_headers: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Encode and sign a payload as a JWT.

    Args:
        payload: Claims to encode
        key: Shared HMAC secret
        algorithm: Signing algorithm (default: HS256)
        extra_headers: Optional header fields; they override the defaults

    Returns:
        Token string "<header64>.<payload64>.<signature64>"

    Raises:
        SerializationError: If the header or payload is not JSON serializable
    """
    if not isinstance(payload, Mapping):
        raise SerializationError("Payload must be a JSON object")

    algorithm = Algorithm(algorithm)
    header = build_header(algorithm, extra_headers)
    header64, payload64 = _signing_segments(header, payload)

    signature = sign(algorithm, key, f"{header64}.{payload64}")
    token = f"{header64}.{payload64}.{base64url_encode(signature)}"
    logger.debug("Encoded %s token", algorithm.value)
    return token


def _check_expiration(payload: Mapping[str, Any], now: int, leeway: int = 0) -> None:
    if "exp" not in payload:
        return

    exp = payload["exp"]
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise MalformedTokenError("The 'exp' claim must be a number")
    if exp < now - leeway:
        raise TokenExpiredError()


def decode(token: str, key: Key, clock: Clock = current_unix_seconds, leeway: int = 0) -> Dict[str, Any]:
    """
    Verify a JWT and return its payload.

    Args:
        token: Token string to verify
        key: Shared HMAC secret used when the token was encoded
        clock: Returns the current Unix time in seconds
        leeway: Seconds of clock skew tolerated on the 'exp' claim

    Returns:
        Decoded payload as dictionary

    Raises:
        MalformedTokenError: If the token is not three valid JSON segments
        UnsupportedAlgorithmError: If the header algorithm is missing or unknown
        SignatureMismatchError: If the signature does not verify
        TokenExpiredError: If the 'exp' claim is in the past
    """
    try:
        header_segment, payload_segment, signature_segment = _split(token)
        header = _from_json_segment(header_segment, "header")
        payload = _from_json_segment(payload_segment, "payload")

        algorithm = Algorithm.from_header(header.get("alg"))

        try:
            header64, payload64 = _signing_segments(header, payload)
        except SerializationError as e:
            raise MalformedTokenError(e.message) from e
        expected = base64url_encode(sign(algorithm, key, f"{header64}.{payload64}"))
        supplied = signature_segment.encode("utf-8", "replace")
        if not constant_time.bytes_eq(expected.encode("ascii"), supplied):
            raise SignatureMismatchError()

        _check_expiration(payload, clock(), leeway)
    except JWTError as e:
        logger.info("Rejected token: %s (%s)", e.error_code, e.message)
        raise

    logger.debug("Verified %s token", algorithm.value)
    return payload


def get_unverified_header(token: str) -> Dict[str, Any]:
    """
    Decode the header of a token WITHOUT verifying it.

    Raises:
        MalformedTokenError: If the token cannot be decoded
    """
    header_segment, _, _ = _split(token)
    return _from_json_segment(header_segment, "header")


def decode_unverified(token: str) -> Dict[str, Any]:
    """
    Decode the payload of a token WITHOUT verifying signature or expiration.

    Use only for debugging and troubleshooting purposes.

    Raises:
        MalformedTokenError: If the token cannot be decoded
    """
    _, payload_segment, _ = _split(token)
    return _from_json_segment(payload_segment, "payload")


class TokenOperations:
    """
    Handles JWT token generation and verification with a configured secret.
    """

    def __init__(self, config: "JWTConfig", clock: Clock = current_unix_seconds):
        """
        Initialize token operations.

        Args:
            config: JWTConfig with secret, algorithm, lifetime and leeway
            clock: Returns the current Unix time in seconds
        """
        self.config = config
        self.clock = clock

    def encode(
        self,
        payload: Mapping[str, Any],
        extra_headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Sign a payload as-is with the configured key and algorithm."""
        headers = dict(self.config.extra_headers)
        if extra_headers:
            headers.update(extra_headers)
        return encode(payload, self.config.key_bytes, self.config.algorithm, headers)

    def generate_token(
        self,
        claims: Optional[Mapping[str, Any]] = None,
        expires_in: Optional[int] = None,
        extra_headers: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Generate a token carrying 'iat' and 'exp' claims.

        Args:
            claims: Optional claims to include; 'iat' and 'exp' are overwritten
            expires_in: Token lifetime in seconds (default: config.expires_in)
            extra_headers: Optional additional header fields

        Returns:
            Signed JWT token string
        """
        if expires_in is None:
            expires_in = self.config.expires_in

        now = self.clock()
        payload = dict(claims or {})
        payload["iat"] = now
        payload["exp"] = now + expires_in

        return self.encode(payload, extra_headers)

    def verify_and_decode_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a token with the configured key and return its payload.

        Raises:
            MalformedTokenError: If token is malformed
            UnsupportedAlgorithmError: If token uses an unsupported algorithm
            SignatureMismatchError: If token signature is invalid
            TokenExpiredError: If token has expired
        """
        return decode(token, self.config.key_bytes, clock=self.clock, leeway=self.config.leeway)

    def decode_token_unsafe(self, token: str) -> Dict[str, Any]:
        """
        Decode a JWT token WITHOUT verification.

        WARNING: This method does NOT verify the token signature or claims.
        """
        return decode_unverified(token)
