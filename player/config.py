"""
Player Configuration

Loads client settings from environment variables (optionally from the
project-root .env via python-dotenv) and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class PlayerConfig:
    """Client configuration for the search player."""

    # Gateway
    api_base: str = "http://localhost:8000"
    api_token: Optional[str] = None
    http_timeout_seconds: float = 30.0

    # Search defaults sent with every query
    similarity_threshold: float = 0.1
    match_count: int = 20

    # Auto-advance
    auto_advance_seconds: int = 5
    interval_debounce_seconds: float = 2.0

    @classmethod
    def from_env(cls) -> "PlayerConfig":
        """Load configuration from environment variables."""
        return cls(
            api_base=os.getenv("PLAYER_API_BASE", "http://localhost:8000").rstrip("/"),
            api_token=os.getenv("PLAYER_API_TOKEN") or None,
            http_timeout_seconds=float(os.getenv("PLAYER_HTTP_TIMEOUT_SECONDS", "30")),
            similarity_threshold=float(os.getenv("PLAYER_SIMILARITY_THRESHOLD", "0.1")),
            match_count=int(os.getenv("PLAYER_MATCH_COUNT", "20")),
            auto_advance_seconds=int(os.getenv("PLAYER_AUTO_ADVANCE_SECONDS", "5")),
            interval_debounce_seconds=float(os.getenv("PLAYER_INTERVAL_DEBOUNCE_SECONDS", "2.0")),
        )
