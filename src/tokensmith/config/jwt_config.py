"""JWT configuration from environment variables or a YAML file."""
import json
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from tokensmith.security.algorithms import Algorithm


class JWTConfig(BaseModel):
    """
    Settings for issuing and verifying HMAC-signed tokens.
    """
    model_config = ConfigDict(frozen=True)

    secret_key: str = Field(..., min_length=1, description="Shared HMAC secret")
    algorithm: Algorithm = Field(default=Algorithm.HS256, description="Signing algorithm")
    expires_in: int = Field(default=3600, gt=0, description="Token lifetime in seconds")
    leeway: int = Field(default=0, ge=0, description="Allowed clock skew in seconds")
    extra_headers: Dict[str, Any] = Field(
        default_factory=dict,
        description="Header fields added to every issued token",
    )

    @property
    def key_bytes(self) -> bytes:
        return self.secret_key.encode("utf-8")

    @classmethod
    def from_env(cls) -> "JWTConfig":
        """
        Load JWT configuration from environment variables.

        Environment variables:
            JWT_SECRET_KEY: Shared HMAC secret (required)
            JWT_ALGORITHM: HS256, HS384 or HS512
            JWT_EXPIRES_IN: Token lifetime in seconds
            JWT_LEEWAY: Allowed clock skew in seconds
            JWT_EXTRA_HEADERS: Extra header fields, JSON object

        Returns:
            JWTConfig instance
        """
        secret_key = os.getenv("JWT_SECRET_KEY", "")
        if not secret_key:
            raise ValueError("JWT_SECRET_KEY environment variable is required")

        extra_headers = json.loads(os.getenv("JWT_EXTRA_HEADERS", "{}"))

        return cls(
            secret_key=secret_key,
            algorithm=os.getenv("JWT_ALGORITHM", Algorithm.HS256.value),
            expires_in=int(os.getenv("JWT_EXPIRES_IN", "3600")),
            leeway=int(os.getenv("JWT_LEEWAY", "0")),
            extra_headers=extra_headers,
        )

    @classmethod
    def from_yaml(cls, config_path: Optional[str] = None) -> "JWTConfig":
        """
        Load JWT configuration from a YAML file.

        Args:
            config_path: Path to config.yaml file. If None, uses CONFIG_PATH env var
                        or defaults to ./config.yaml

        Returns:
            JWTConfig instance. Falls back to from_env() when the file does not exist.
        """
        if config_path is None:
            config_path = os.getenv("CONFIG_PATH", "config.yaml")

        if not os.path.exists(config_path):
            return cls.from_env()

        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}

        # Secret may be kept out of the file
        secret_key = config_data.get("JWT_SECRET_KEY") or os.getenv("JWT_SECRET_KEY", "")
        if not secret_key:
            raise ValueError("JWT_SECRET_KEY is required in config file or environment")

        return cls(
            secret_key=secret_key,
            algorithm=config_data.get("JWT_ALGORITHM", Algorithm.HS256.value),
            expires_in=config_data.get("JWT_EXPIRES_IN", 3600),
            leeway=config_data.get("JWT_LEEWAY", 0),
            extra_headers=config_data.get("JWT_EXTRA_HEADERS") or {},
        )


@lru_cache()
def get_jwt_config() -> JWTConfig:
    """
    Get cached JWT configuration.

    Returns:
        JWTConfig instance
    """
    load_dotenv()
    return JWTConfig.from_yaml()
