"""
Centralized runtime configuration for the backend.

This module uses `python-dotenv` to read a local `.env` file during
development and exposes a Pydantic `Settings` model named `settings`.

Environment variables used:
- `APP_TITLE`: title reported in the OpenAPI docs.
- `HOST` / `PORT`: address `uvicorn` binds when running `main.py`.
- `LOG_LEVEL`: root logger level (`DEBUG`, `INFO`, ...).
- `LOG_FILE`: optional path; when set, logs are also written there.

Example `.env`:
PORT=8080
LOG_LEVEL=DEBUG

"""

from typing import Optional

from pydantic import BaseModel
import os
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    """Typed settings container.

    Import `settings` from this module instead of calling os.getenv so
    tests can monkeypatch it.
    """

    app_title: str = os.getenv("APP_TITLE", "Pain Tracker Backend")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None


settings = Settings()
