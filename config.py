"""
Settings

Values are read once from the process environment at startup. A local .env
file is honoured because the entrypoint calls load_dotenv() first.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGIN = "https://asalah03.github.io"
DEFAULT_IMAGES_DIR = Path(__file__).resolve().parent / "images"


class ConfigurationError(RuntimeError):
    """Raised when the environment cannot produce usable settings."""


@dataclass(frozen=True)
class Settings:
    mongo_uri: str
    db_name: str
    port: int = DEFAULT_PORT
    cors_origin: str = DEFAULT_CORS_ORIGIN
    images_dir: Path = DEFAULT_IMAGES_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        mongo_uri = env.get("MONGO_URI")
        db_name = env.get("DB_NAME")
        missing = [name for name, value in (("MONGO_URI", mongo_uri), ("DB_NAME", db_name)) if not value]
        if missing:
            raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

        raw_port = env.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigurationError(f"PORT must be an integer, got {raw_port!r}")

        log_level = (env.get("LOG_LEVEL") or "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"LOG_LEVEL is not a logging level, got {log_level!r}")

        images_dir = env.get("IMAGES_DIR")
        return cls(
            mongo_uri=mongo_uri,
            db_name=db_name,
            port=port,
            cors_origin=env.get("CORS_ORIGIN") or DEFAULT_CORS_ORIGIN,
            images_dir=Path(images_dir) if images_dir else DEFAULT_IMAGES_DIR,
            log_level=log_level,
        )
