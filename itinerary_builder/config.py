"""Application configuration helpers."""

from dataclasses import dataclass, field
import logging
import os
import sys
from functools import lru_cache
from typing import List

from dotenv import load_dotenv


load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://localhost:3000",
    "https://127.0.0.1:3000",
]


@dataclass
class Settings:
    """Holds runtime configuration loaded from the environment."""

    price_locale: str = "en-IN"
    price_suffix: str = "/-"
    image_max_width: int = 1280
    image_max_height: int = 720
    image_target_bytes: int = 70_000
    image_initial_quality: int = 80
    image_quality_step: int = 10
    image_min_quality: int = 10
    remote_image_timeout: float = 10.0
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings so every module shares the same values."""

    origins = os.getenv("CORS_ORIGINS")
    settings = Settings(
        price_locale=os.getenv("PRICE_LOCALE", "en-IN"),
        price_suffix=os.getenv("PRICE_SUFFIX", "/-"),
        image_max_width=_env_int("IMAGE_MAX_WIDTH", 1280),
        image_max_height=_env_int("IMAGE_MAX_HEIGHT", 720),
        image_target_bytes=_env_int("IMAGE_TARGET_BYTES", 70_000),
        image_initial_quality=_env_int("IMAGE_INITIAL_QUALITY", 80),
        image_quality_step=_env_int("IMAGE_QUALITY_STEP", 10),
        image_min_quality=_env_int("IMAGE_MIN_QUALITY", 10),
        remote_image_timeout=_env_float("REMOTE_IMAGE_TIMEOUT", 10.0),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
    if origins:
        settings.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
    if settings.image_quality_step <= 0:
        raise ValueError("IMAGE_QUALITY_STEP must be positive.")
    return settings


def configure_logging() -> None:
    """Send application logs to stdout at the configured level."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
