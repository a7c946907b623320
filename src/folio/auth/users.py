# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from folio.auth.passwords import hash_password, verify_password
from folio.auth.tokens import Identity
from folio.core.logger import auth_logger as logger
from folio.core.models import Credential
from folio.infra.document_store import DocumentStore

# single stored identity
ADMIN_ID = 1


def authenticate(store: DocumentStore, username: str, password: str) -> Optional[Identity]:
    """Return the identity for a matching username/password pair, else None.

    Every failure returns the same None so callers cannot tell which half of
    the pair was wrong.
    """
    cred = store.read().user
    u = (username or "").strip()
    if not cred or not u or u != cred.username:
        logger.warning("Failed login attempt")
        return None
    if not verify_password(cred.password_hash, password):
        logger.warning("Failed login attempt")
        return None
    return Identity(id=ADMIN_ID, username=cred.username)


def set_credential(store: DocumentStore, username: str, password: str) -> Credential:
    u = (username or "").strip()
    if not u:
        raise ValueError("Empty username")
    cred = Credential(username=u, password_hash=hash_password(password))
    doc = store.read()
    doc.user = cred
    store.write(doc)
    logger.info("Stored credential for %s", u)
    return cred
