# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from folio.core.errors import Forbidden, Unauthorized
from folio.core.logger import auth_logger as logger
from folio.core.settings import Settings


@dataclass(frozen=True)
class Identity:
    id: int
    username: str


class TokenSigner:
    """Issues and checks signed, time-limited bearer tokens.

    Tokens are self-contained (no server-side session store); the expiry window
    is enforced on verification from the timestamp embedded at signing time.
    """

    def __init__(self, secret: str, *, salt: str = "folio.token.v1", max_age: int = 3600):
        if not secret:
            raise RuntimeError("Token signing secret is empty")
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key=secret, salt=salt)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSigner":
        return cls(settings.secret_key, salt=settings.token_salt, max_age=settings.token_max_age)

    def issue(self, identity: Identity) -> str:
        return self._serializer.dumps({"id": identity.id, "u": identity.username})

    def verify(self, token: Optional[str]) -> Identity:
        if not token:
            raise Unauthorized()
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            logger.info("Rejected expired token")
            raise Forbidden()
        except BadSignature:
            logger.info("Rejected token with bad signature")
            raise Forbidden()

        if not isinstance(data, dict):
            raise Forbidden()
        username = str(data.get("u") or "").strip()
        if not username:
            raise Forbidden()
        try:
            uid = int(data.get("id") or 0)
        except (TypeError, ValueError):
            raise Forbidden()
        return Identity(id=uid, username=username)
