import os

from dotenv import load_dotenv

load_dotenv(override=True)

DEFAULT_API_BASE_URL = "http://localhost:4000"
SEVEN_DAYS = 7 * 24 * 60 * 60


def get_api_base_url() -> str:
    return (os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL).strip()


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS") or "*"
    return [o.strip() for o in raw.split(",") if o.strip()]


def cookie_secure() -> bool:
    return (os.getenv("COOKIE_SECURE") or "").strip().lower() in ("1", "true", "yes")


def refresh_cookie_max_age() -> int:
    return int(os.getenv("REFRESH_COOKIE_MAX_AGE") or SEVEN_DAYS)


def get_http_timeout() -> float | None:
    raw = (os.getenv("HTTP_TIMEOUT") or "").strip()
    return float(raw) if raw else None


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
