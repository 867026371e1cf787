"""HMAC-signed JSON Web Tokens."""
