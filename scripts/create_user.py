#!/usr/bin/env python3
from __future__ import annotations

from getpass import getpass

from folio.auth.users import set_credential
from folio.core.settings import get_settings
from folio.infra.document_store import JsonDocumentStore
from folio.infra.file_store import FileStore
from folio.services.content_service import ContentService


def main() -> None:
    settings = get_settings()
    store = JsonDocumentStore(settings.db_path)
    ContentService(store, FileStore(settings.uploads_dir, settings.uploads_url)).initialize()

    username = input("Username [admin]: ").strip() or "admin"
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")
    if not pw1:
        raise SystemExit("Password cannot be empty")

    backup = store.backup()
    set_credential(store, username, pw1)
    print(f"OK -> {store.path} (backup: {backup})")


if __name__ == "__main__":
    main()
