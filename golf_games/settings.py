import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Settings:
    database_url: str
    golf_api_key: str
    history_timeout: int
    log_level: str
    host: str = "0.0.0.0"
    port: int = 8000
    ssl_cert_file: Optional[str] = None
    ssl_key_file: Optional[str] = None
    ssl_ca_file: Optional[str] = None


def _normalize_database_url(value: Optional[str]) -> str:
    if not value:
        return "postgresql://localhost/golf_games"
    normalized = value.strip()
    if normalized.startswith("postgres://"):
        return "postgresql://" + normalized[len("postgres://"):]
    return normalized


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def load_settings() -> Settings:
    return Settings(
        database_url=_normalize_database_url(os.getenv("DATABASE_URL")),
        golf_api_key=os.getenv("GOLF_API_KEY", ""),
        history_timeout=_int_from_env("HISTORY_TIMEOUT", 5),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=_int_from_env("APP_PORT", _int_from_env("PORT", 8000)),
        ssl_cert_file=os.getenv("SSL_CERT_FILE") or None,
        ssl_key_file=os.getenv("SSL_KEY_FILE") or None,
        ssl_ca_file=os.getenv("SSL_CA_FILE") or None,
    )
