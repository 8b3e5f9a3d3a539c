"""Environment-driven settings for the Speed Sourcing API."""
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./speed_sourcing.db")

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if o.strip()
]

# Base URL of the portal; invite links point here
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5173").rstrip("/")

SMTP_HOST = os.getenv("SMTP_HOST", "").strip()
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME", "").strip()
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM_EMAIL = os.getenv("SMTP_FROM_EMAIL", "").strip()
SMTP_FROM_NAME = os.getenv("SMTP_FROM_NAME", "Procurement Team")
SMTP_USE_TLS = _env_bool("SMTP_USE_TLS", True)

SEED_PRESET_ACCOUNTS = _env_bool("SEED_PRESET_ACCOUNTS", True)
SEED_DEMO_AUCTION = _env_bool("SEED_DEMO_AUCTION", False)
PRESET_ACCOUNT_PASSWORD = os.getenv("PRESET_ACCOUNT_PASSWORD", "ChangeMe!")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
