"""
Custom exceptions for JWT encoding and verification.
"""


class JWTError(Exception):
    """Base exception for JWT-related errors."""
    def __init__(self, message: str, error_code: str):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class SerializationError(JWTError):
    """Header or payload is not representable as JSON."""
    def __init__(self, message: str = "Header or payload is not JSON serializable."):
        super().__init__(message, "SERIALIZATION_ERROR")


class MalformedTokenError(JWTError):
    """Token is not three valid base64url JSON segments."""
    def __init__(self, message: str = "Invalid JSON Web Token."):
        super().__init__(message, "MALFORMED_TOKEN")


class UnsupportedAlgorithmError(JWTError):
    """Token header names an algorithm outside HS256/HS384/HS512."""
    def __init__(self, message: str = "Unsupported algorithm."):
        super().__init__(message, "UNSUPPORTED_ALGORITHM")


class SignatureMismatchError(JWTError):
    """Recomputed signature does not match the token's signature."""
    def __init__(self, message: str = "Verification failed."):
        super().__init__(message, "SIGNATURE_MISMATCH")


class TokenExpiredError(JWTError):
    """Token has expired."""
    def __init__(self, message: str = "Token is expired."):
        super().__init__(message, "TOKEN_EXPIRED")


class InvalidEncodingError(JWTError):
    """Input is not valid base64url."""
    def __init__(self, message: str = "Invalid base64url encoding."):
        super().__init__(message, "INVALID_ENCODING")
