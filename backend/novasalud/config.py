# backend/novasalud/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # In-memory SQLite by default; point DATABASE_URL at a file or server for durable storage.
    # The in-memory connection is shared, so the app serializes every use of it.
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///:memory:",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Insert the fixed categories and products when the catalog is empty
    SEED_ON_STARTUP = _env_flag("NOVASALUD_SEED", True)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Comma separated; "*" allows any origin
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    PORT = int(os.environ.get("PORT", "4000"))
