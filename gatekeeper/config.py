# gatekeeper/config.py

import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel


DEFAULT_PORT = 3000
DEFAULT_STATIC_DIR = Path(__file__).parent / "static"

REQUIRED_VARS = ("SESSION_SECRET", "DATABASE_URL")


class ConfigError(RuntimeError):
    pass


class Settings(BaseModel):
    session_secret: str
    database_url: str
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    static_dir: Path = DEFAULT_STATIC_DIR


def load_settings() -> Settings:
    """
    Reads settings from the environment, after loading a local .env file if present.
    Raises ConfigError listing every required variable that is missing.
    """
    load_dotenv()

    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    raw_port = os.getenv("PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw_port!r}") from None

    return Settings(
        session_secret=os.getenv("SESSION_SECRET"),
        database_url=os.getenv("DATABASE_URL"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        static_dir=Path(os.getenv("STATIC_DIR", DEFAULT_STATIC_DIR)),
    )
