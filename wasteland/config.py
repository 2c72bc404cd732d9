"""Application configuration loaded from environment variables and .env file."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTENT_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Player storage backend: "memory" | "database"
    PLAYER_STORE: str = "memory"

    # Claim rules
    COOLDOWN_MS: int = 3_600_000
    CLAIM_RADIUS_M: float = 150.0
    EVENT_CHECK_INTERVAL_MS: int = 600_000

    # "last_equipped" | "sum_equipped"
    EQUIP_DEFENSE_MODE: str = "last_equipped"

    # Static content (locations, recipes, events)
    CONTENT_DIR: Path = DEFAULT_CONTENT_DIR

    # Settlement (mint service) settings
    SIMULATE_MINT: bool = True
    MINT_API_URL: Optional[str] = None
    MINT_API_KEY: Optional[str] = None
    MINT_TIMEOUT_SECONDS: float = 5.0
    MINT_RETRIES: int = 1
    CAPS_DECIMALS: int = 9


settings = Settings()
