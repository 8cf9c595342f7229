"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'journal.db'}"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    # Re-derive position sizes and P&L for every trade when the app starts
    resync_positions_on_startup: bool = True

    model_config = {"env_prefix": "JOURNAL_", "env_file": ".env"}


settings = Settings()
