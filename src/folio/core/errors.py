# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed failures raised by the stores and services.

The HTTP layer maps each class to a status code through ``status_code``; the
services themselves never import FastAPI.
"""

from __future__ import annotations

from typing import Any, Dict


class FolioError(Exception):
    code = "ERROR"
    status_code = 500
    default_message = "Internal error."

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(FolioError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found."


class ValidationError(FolioError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid input."


class Unauthorized(FolioError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Access denied. No token provided."


class Forbidden(FolioError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Invalid or expired token."


class StorageError(FolioError):
    code = "STORAGE_ERROR"
    status_code = 500
    default_message = "Storage failure."


def error_payload(exc: FolioError) -> Dict[str, Any]:
    # top-level "message" is what the admin UI shows on failure
    return {
        "success": False,
        "message": exc.message,
        "error": {"code": exc.code, "message": exc.message},
    }
