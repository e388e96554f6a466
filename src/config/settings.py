"""
Poker Arena Sync - Application Settings

Loads configuration from environment variables using Pydantic Settings.
On Streamlit Cloud, bridges st.secrets into env vars so Pydantic can read them.
"""

import os
from functools import lru_cache

from pydantic_settings import BaseSettings

_SECRET_KEYS = (
    "ARENA_URL",
    "SOCKETIO_PATH",
    "RECONNECTION_DELAY",
    "AUTH_TIMEOUT",
    "REQUEST_TIMEOUT",
    "DEBUG",
    "LOG_LEVEL",
)


def _load_streamlit_secrets() -> None:
    """Bridge Streamlit Cloud secrets into environment variables."""
    try:
        import streamlit as st

        for key in _SECRET_KEYS:
            if key not in os.environ and key in st.secrets:
                os.environ[key] = str(st.secrets[key])
    except Exception:
        pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Arena server
    arena_url: str = "http://localhost:3001"
    socketio_path: str = "socket.io"
    transports: list[str] = ["websocket", "polling"]
    reconnection_delay: float = 1.0
    connect_timeout: float = 10.0
    auth_timeout: float = 10.0
    request_timeout: float = 10.0

    # Transient overlays
    result_clear_seconds: float = 3.0
    flash_clear_seconds: float = 2.0

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    _load_streamlit_secrets()
    return Settings()
