"""
URL-safe base64 encoding without padding, as used in JWT segments.
"""
import base64
import binascii
import re

from .exceptions import InvalidEncodingError

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """
    Encode bytes as unpadded base64url text.

    Args:
        data: Raw bytes to encode

    Returns:
        Base64url string with '=' padding and whitespace removed
    """
    encoded = base64.b64encode(data).decode("ascii")
    encoded = re.sub(r"[\s=]", "", encoded)
    return encoded.replace("+", "-").replace("/", "_")


def base64url_decode(data: str) -> bytes:
    """
    Decode unpadded base64url text back to bytes.

    Args:
        data: Base64url string without padding

    Returns:
        Decoded bytes

    Raises:
        InvalidEncodingError: If the input has characters outside the
            base64url alphabet or an impossible length
    """
    if not isinstance(data, str) or not _BASE64URL_RE.fullmatch(data):
        raise InvalidEncodingError("Input contains characters outside the base64url alphabet")

    remainder = len(data) % 4
    if remainder == 1:
        raise InvalidEncodingError("Invalid base64url length")

    padded = data.replace("-", "+").replace("_", "/")
    if remainder == 2:
        padded += "=="
    elif remainder == 3:
        padded += "="

    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise InvalidEncodingError() from e
