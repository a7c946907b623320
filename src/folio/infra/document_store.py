# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from folio.core.errors import StorageError
from folio.core.logger import store_logger as logger
from folio.core.models import Document


class DocumentStore(Protocol):
    """Whole-document persistence: every write replaces the full state."""

    def read(self) -> Document: ...

    def write(self, document: Document) -> None: ...

    def ensure_initialized(self, initial: Optional[Document] = None) -> None: ...


class JsonDocumentStore:
    """DocumentStore backed by a single JSON file.

    Reads fail soft: a missing, unreadable or malformed file yields the empty
    document so the public view stays available. Writes go through a temp file
    and ``os.replace`` so readers see either the old or the new document.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def ensure_initialized(self, initial: Optional[Document] = None) -> None:
        """Write ``initial`` (default: the empty document) when no file exists yet."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.write(initial or Document.empty())
        logger.info("Initialised document at %s", self.path)

    def read(self) -> Document:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            return Document.from_dict(raw)
        except (OSError, ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError; deep nesting raises RecursionError
            logger.warning("Could not read %s (%s); using empty document", self.path, e)
            return Document.empty()

    def write(self, document: Document) -> None:
        payload = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
        tmp_name = ""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write document: {e}") from e
        logger.debug("Wrote document to %s", self.path)

    def backup(self) -> str:
        """Create a timestamped .bak copy next to the document file."""
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        dst = self.path.with_suffix(self.path.suffix + f".bak_{ts}")
        try:
            shutil.copy2(self.path, dst)
        except OSError as e:
            raise StorageError(f"Could not back up document: {e}") from e
        return str(dst)
