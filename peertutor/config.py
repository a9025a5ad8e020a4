# peertutor/config.py

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv, find_dotenv

# Load .env if present
load_dotenv(find_dotenv(usecwd=True), override=False)


def _get_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(key)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    database_url: str = os.getenv("PEERTUTOR_DATABASE_URL", "sqlite:///./peertutor.db")
    sql_echo: bool = _get_bool("PEERTUTOR_SQL_ECHO", False)

    # Auth
    secret_key: str = os.getenv("PEERTUTOR_SECRET_KEY", "change-me-later")
    algorithm: str = "HS256"
    token_expire_minutes: int = int(os.getenv("PEERTUTOR_TOKEN_EXPIRE_MINUTES", "30"))

    # Compare-and-swap retry budgets
    booking_max_attempts: int = int(os.getenv("PEERTUTOR_BOOKING_MAX_ATTEMPTS", "3"))
    sweep_max_attempts: int = int(os.getenv("PEERTUTOR_SWEEP_MAX_ATTEMPTS", "3"))

    log_level: str = os.getenv("PEERTUTOR_LOG_LEVEL", "INFO")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
