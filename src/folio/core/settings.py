# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Process-wide configuration, read from FOLIO_* environment variables once."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    uploads_dir: Path
    uploads_url: str
    secret_key: str
    token_salt: str = "folio.token.v1"
    token_max_age: int = 3600
    host: str = "0.0.0.0"
    port: int = 3001
    reload: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


_SETTINGS: Optional[Settings] = None


def load_settings() -> Settings:
    """Build a Settings object from the current environment.

    The signing secret has no default: a deployment without one fails at
    startup instead of issuing tokens signed with a well-known key.
    """
    secret = os.getenv("FOLIO_SECRET_KEY") or os.getenv("SECRET_KEY")
    if not secret:
        raise RuntimeError("Missing FOLIO_SECRET_KEY (or SECRET_KEY) in environment")

    data_dir = Path(os.getenv("FOLIO_DATA_DIR", "data")).resolve()
    db_path = Path(os.getenv("FOLIO_DB_PATH", str(data_dir / "db.json"))).resolve()
    uploads_dir = Path(os.getenv("FOLIO_UPLOADS_DIR", str(data_dir / "uploads"))).resolve()
    uploads_url = "/" + os.getenv("FOLIO_UPLOADS_URL", "/uploads").strip().strip("/")

    origins = [o.strip() for o in os.getenv("FOLIO_CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        data_dir=data_dir,
        db_path=db_path,
        uploads_dir=uploads_dir,
        uploads_url=uploads_url,
        secret_key=secret,
        token_salt=os.getenv("FOLIO_TOKEN_SALT", "folio.token.v1"),
        token_max_age=int(os.getenv("FOLIO_TOKEN_MAX_AGE", "3600")),
        host=os.getenv("FOLIO_HOST", "0.0.0.0"),
        port=int(os.getenv("FOLIO_PORT", "3001")),
        reload=_truthy(os.getenv("FOLIO_RELOAD", "false")),
        log_level=os.getenv("FOLIO_LOG_LEVEL", "INFO").upper(),
        cors_origins=origins or ["*"],
    )


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _SETTINGS
    _SETTINGS = None
