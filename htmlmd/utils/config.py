"""Configuration management -- reads ambient settings from environment with sensible defaults."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars.

    Only logging is configured here.  Conversion output never depends on the
    environment; callers pass a ``ConvertOptions`` record instead.
    """

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))


# Module-level singleton -- import this everywhere.
settings = Settings()
