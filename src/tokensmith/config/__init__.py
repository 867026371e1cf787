"""Configuration loading."""
from .jwt_config import JWTConfig, get_jwt_config

__all__ = ["JWTConfig", "get_jwt_config"]
