import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_TIMER_ID = "default-timer"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from the environment (and ``.env``)."""
    timer_id: str = DEFAULT_TIMER_ID
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)
    api_url: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = ".env") -> "Settings":
        if dotenv_path is not None:
            load_dotenv(dotenv_path=dotenv_path)

        raw_port = os.getenv("TIMER_PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"TIMER_PORT must be an integer, got {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"TIMER_PORT must be between 1 and 65535, got {port}")

        origins = os.getenv("TIMER_CORS_ORIGINS", "*")
        return cls(
            timer_id=os.getenv("TIMER_ID", DEFAULT_TIMER_ID),
            host=os.getenv("TIMER_HOST", DEFAULT_HOST),
            port=port,
            log_level=os.getenv("TIMER_LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            api_url=os.getenv("TIMER_API_URL", f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        force=True
    )
