# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Callable

from fastapi import Request

from folio.auth.tokens import Identity, TokenSigner
from folio.core.errors import Forbidden
from folio.core.logger import auth_logger as logger


def bearer_token(request: Request) -> str:
    """Token from ``Authorization: Bearer <token>``; "" when no header was sent.

    A header with any other scheme is a credential we cannot accept, so it is
    rejected like a bad token rather than treated as missing.
    """
    header = request.headers.get("Authorization", "").strip()
    if not header:
        return ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        logger.info("Rejected Authorization header with scheme %r", scheme)
        raise Forbidden()
    return token.strip()


def require_admin(signer: TokenSigner) -> Callable[[Request], Identity]:
    """Build a dependency that yields the token identity or raises Unauthorized/Forbidden."""

    def _dep(request: Request) -> Identity:
        identity = signer.verify(bearer_token(request))
        request.state.user = identity
        return identity

    return _dep
