"""Runtime settings for the tool server, read from the environment or ``.env``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .protocol.framing import MAX_PAYLOAD_SIZE

ENV_CHUNK_SIZE = "PACKETIZE_CHUNK_SIZE"
ENV_LOG_LEVEL = "PACKETIZE_LOG_LEVEL"


@dataclass
class Settings:
    """Server defaults."""

    default_chunk_size: int = 4
    log_level: str = "INFO"


def load_settings(env_path: str = ".env") -> Settings:
    """Build settings from ``.env`` (when present) and the environment.

    Raises:
        ValueError: If the configured chunk size is not an integer 1-255.
    """
    if Path(env_path).exists():
        load_dotenv(env_path)

    settings = Settings()
    raw_chunk_size = os.getenv(ENV_CHUNK_SIZE)
    if raw_chunk_size is not None:
        try:
            chunk_size = int(raw_chunk_size)
        except ValueError:
            raise ValueError(
                f"{ENV_CHUNK_SIZE} must be an integer, got {raw_chunk_size!r}"
            ) from None
        if not 1 <= chunk_size <= MAX_PAYLOAD_SIZE:
            raise ValueError(
                f"{ENV_CHUNK_SIZE} must be 1-{MAX_PAYLOAD_SIZE}, got {chunk_size}"
            )
        settings.default_chunk_size = chunk_size

    settings.log_level = os.getenv(ENV_LOG_LEVEL, settings.log_level).upper()
    return settings
