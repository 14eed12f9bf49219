# server/core/config.py

import os
from dotenv import load_dotenv


load_dotenv()


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# -------------------------------
# Session Tokens
# -------------------------------

SECRET_KEY = os.getenv("JWT_SECRET_KEY")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
SESSION_MAX_AGE_MINUTES = int(os.getenv("SESSION_MAX_AGE_MINUTES", str(60 * 24 * 30)))

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "nexio_session")
SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "false").lower() in ("1", "true", "yes")


# -------------------------------
# Credential Store
# -------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./nexio.db")

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


# -------------------------------
# Locales
# -------------------------------

SUPPORTED_LOCALES = _csv(os.getenv("SUPPORTED_LOCALES", "en,es"))
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "en")
LOCALE_COOKIE_NAME = os.getenv("LOCALE_COOKIE_NAME", "NEXT_LOCALE")


# -------------------------------
# Server
# -------------------------------

CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "*"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
