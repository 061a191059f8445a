"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Optional

from dotenv import load_dotenv

root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


# Signed access URLs for matched clips live for one hour
DEFAULT_SIGNED_URL_EXPIRY_SECONDS = 3600
DEFAULT_STORAGE_ENDPOINT = "https://s3.wasabisys.com"


def _parse_api_tokens(raw: Optional[str]) -> Dict[str, str]:
    """Parse API_TOKENS ("token:user,token2:user2") into token -> user id."""
    tokens: Dict[str, str] = {}
    for pair in (raw or "").split(","):
        pair = pair.strip()
        if not pair or ":" not in pair:
            continue
        token, user_id = pair.split(":", 1)
        if token.strip() and user_id.strip():
            tokens[token.strip()] = user_id.strip()
    return tokens


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Inference model endpoint
    inference_url: Optional[str] = None
    inference_api_key: Optional[str] = None
    inference_timeout_seconds: float = 60.0

    # S3-compatible storage for clip assets
    storage_endpoint: Optional[str] = DEFAULT_STORAGE_ENDPOINT
    storage_region: str = "us-east-1"
    storage_access_key: Optional[str] = None
    storage_secret_key: Optional[str] = None
    signed_url_expiry_seconds: int = DEFAULT_SIGNED_URL_EXPIRY_SECONDS

    # Identity: "firebase" verifies Firebase ID tokens, "static" uses api_tokens
    auth_mode: str = "static"
    api_tokens: Dict[str, str] = field(default_factory=dict)

    # Firestore analytics store (in-memory when no credentials are configured)
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        auth_mode = os.getenv("AUTH_MODE", "").strip().lower() or "static"
        if auth_mode not in ("firebase", "static"):
            auth_mode = "static"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            inference_url=os.getenv("INFERENCE_URL") or None,
            inference_api_key=os.getenv("INFERENCE_API_KEY") or None,
            inference_timeout_seconds=float(os.getenv("INFERENCE_TIMEOUT_SECONDS", "60")),
            storage_endpoint=os.getenv("STORAGE_ENDPOINT", DEFAULT_STORAGE_ENDPOINT) or None,
            storage_region=os.getenv("STORAGE_REGION", "us-east-1"),
            storage_access_key=os.getenv("STORAGE_ACCESS_KEY") or None,
            storage_secret_key=os.getenv("STORAGE_SECRET_KEY") or None,
            signed_url_expiry_seconds=int(
                os.getenv("SIGNED_URL_EXPIRY_SECONDS", str(DEFAULT_SIGNED_URL_EXPIRY_SECONDS))
            ),
            auth_mode=auth_mode,
            api_tokens=_parse_api_tokens(os.getenv("API_TOKENS")),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.inference_url:
            errors.append("INFERENCE_URL is not set")
        if not self.storage_access_key or not self.storage_secret_key:
            errors.append("STORAGE_ACCESS_KEY / STORAGE_SECRET_KEY are not set")
        if self.signed_url_expiry_seconds <= 0:
            errors.append("SIGNED_URL_EXPIRY_SECONDS must be positive")
        if self.auth_mode == "static" and not self.api_tokens:
            errors.append("AUTH_MODE=static but API_TOKENS is empty; every request will be rejected")
        if self.auth_mode == "firebase" and not self.firebase_credentials_path:
            errors.append("AUTH_MODE=firebase requires FIREBASE_CREDENTIALS_PATH")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
