"""
Application configuration read from environment variables (and a local .env file).
"""
import logging
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = "https://crud-front-delta.vercel.app"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# An empty PORT falls back to the default as well
PORT = int(os.getenv("PORT") or "8080")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ITEMS_COLLECTION = os.getenv("ITEMS_COLLECTION", "items")


def get_allowed_origins() -> List[str]:
    """Return the CORS allow-list from ALLOWED_ORIGINS (comma separated)."""
    raw = os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once for the whole process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
