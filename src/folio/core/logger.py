# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Return a named logger with a single stdout handler attached."""
    logger = logging.getLogger(name)

    # avoid stacking handlers when a module is reloaded
    if not logger.handlers:
        if level is None:
            level = logging.getLevelName(os.getenv("FOLIO_LOG_LEVEL", "INFO").upper())
            if not isinstance(level, int):
                level = logging.INFO
        logger.setLevel(level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger


store_logger = setup_logger("folio.store")
files_logger = setup_logger("folio.files")
auth_logger = setup_logger("folio.auth")
content_logger = setup_logger("folio.content")
app_logger = setup_logger("folio.app")
