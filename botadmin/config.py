"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
DATA_DIR = Path(os.getenv("ADMIN_DATA_DIR", "").strip() or PROJECT_ROOT / "data")
PRODUCTS_DIR = DATA_DIR / "produk"
OUTPUT_DIR = PROJECT_ROOT / "output"

# Data files (one JSON array each)
FAQ_FILE = "faq.json"
SOP_FILE = "sop.json"
PROMO_FILE = "promo.json"
BLACKLIST_FILE = "blacklist.json"
CLAIM_LOG_FILE = "log_claim.json"
CLAIMS_REPLACE_FILE = "claimsReplace.json"
CLAIMS_RESET_FILE = "claimsReset.json"
BUYERS_FILE = "buyers.json"
PRODUCT_SUFFIX = ".txt"

JSON_FILES = (
    FAQ_FILE,
    SOP_FILE,
    PROMO_FILE,
    BLACKLIST_FILE,
    CLAIM_LOG_FILE,
    CLAIMS_REPLACE_FILE,
    CLAIMS_RESET_FILE,
    BUYERS_FILE,
)

# Logging
LOG_DIR = Path(os.getenv("ADMIN_LOG_DIR", "").strip() or OUTPUT_DIR / "logs")
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Ensure log directory exists
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Server
APP_ENV = os.getenv("APP_ENV", "development").strip().lower()
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "9011"))

# Auth. Fallbacks are for local development only; check_config() refuses them in production.
DEV_ADMIN_PASS = "Konfirmasi"
DEV_SESSION_SECRET = "dev-session-secret-change-in-production"
ADMIN_PASS = os.getenv("ADMIN_PASS", "")
SESSION_SECRET = os.getenv("SESSION_SECRET", "")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "botadmin_session")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", str(8 * 60 * 60)))
SESSION_HTTPS_ONLY = os.getenv("SESSION_HTTPS_ONLY", "false").lower() == "true"


def is_production() -> bool:
    return APP_ENV in ("production", "prod")


def check_config(
    admin_pass: str | None = None,
    session_secret: str | None = None,
    app_env: str | None = None,
) -> tuple[str, str]:
    """
    Return the effective (admin_pass, session_secret) pair.
    In production both must be set explicitly; otherwise the development fallbacks are used with a warning.
    """
    from botadmin.errors import ConfigError
    from botadmin.utils.logger import get_logger

    logger = get_logger("botadmin.config")
    password = ADMIN_PASS if admin_pass is None else admin_pass
    secret = SESSION_SECRET if session_secret is None else session_secret
    env = (APP_ENV if app_env is None else app_env).strip().lower()

    missing = [name for name, value in (("ADMIN_PASS", password), ("SESSION_SECRET", secret)) if not value]
    if not missing:
        return password, secret
    if env in ("production", "prod"):
        raise ConfigError(f"Missing required configuration in production: {', '.join(missing)}")
    logger.warning("config.insecure_fallback", missing=missing, app_env=env)
    return password or DEV_ADMIN_PASS, secret or DEV_SESSION_SECRET
