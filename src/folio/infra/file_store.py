# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import base64
import random
import time
from pathlib import Path, PurePosixPath
from typing import Dict, Optional

from folio.core.errors import StorageError, ValidationError
from folio.core.logger import files_logger as logger

# category -> sub-directory of the uploads root
CATEGORIES: Dict[str, str] = {
    "profile_image": "profile",
    "resume": "resume",
    "certificate_pdf": "certificates",
    "certificate_thumb": "thumbs",
    "publication_file": "publications",
}

# 1x1 transparent PNG written as the placeholder profile picture
_PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)

DEFAULT_PROFILE_IMAGE_NAME = "default.png"


def _unique_name(category: str, filename: str) -> str:
    ext = PurePosixPath(str(filename or "").replace("\\", "/")).suffix.lower()
    suffix = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999):09d}"
    return f"{category}-{suffix}{ext}"


class FileStore:
    """Binary assets stored under ``root`` and addressed by URL-style references.

    A reference looks like ``/uploads/certificates/certificate_pdf-<ms>-<rand>.pdf``;
    it is both what the document stores and the public URL the app serves.
    """

    def __init__(self, root: str | Path, url_prefix: str = "/uploads"):
        self.root = Path(root).resolve()
        self.url_prefix = "/" + url_prefix.strip("/")

    @property
    def default_profile_image(self) -> str:
        return f"{self.url_prefix}/{CATEGORIES['profile_image']}/{DEFAULT_PROFILE_IMAGE_NAME}"

    def default_assets(self) -> frozenset:
        """References that must survive profile file replacement."""
        return frozenset({self.default_profile_image})

    def ensure_default_assets(self) -> None:
        """Write the placeholder profile picture if it is not on disk yet."""
        p = self.root / CATEGORIES["profile_image"] / DEFAULT_PROFILE_IMAGE_NAME
        if p.is_file():
            return
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(_PLACEHOLDER_PNG)
        except OSError as e:
            raise StorageError(f"Could not create default asset: {e}") from e
        logger.info("Created default asset %s", self.default_profile_image)

    def save(self, category: str, content: bytes, filename: str = "") -> str:
        subdir = CATEGORIES.get(category)
        if not subdir:
            raise ValidationError(f"Unknown file category '{category}'.")

        dest_dir = self.root / subdir
        name = _unique_name(category, filename)
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            (dest_dir / name).write_bytes(content)
        except OSError as e:
            raise StorageError(f"Could not store file: {e}") from e

        ref = f"{self.url_prefix}/{subdir}/{name}"
        logger.info("Stored %s (%d bytes)", ref, len(content))
        return ref

    def resolve(self, reference: str) -> Optional[Path]:
        """Map a reference to a path under the root, or None if it points elsewhere."""
        ref = str(reference or "").strip()
        if not ref.startswith(self.url_prefix + "/"):
            return None
        rel = ref[len(self.url_prefix) + 1:]
        if not rel:
            return None
        candidate = (self.root / rel).resolve()
        if candidate == self.root or self.root not in candidate.parents:
            return None
        return candidate

    def exists(self, reference: str) -> bool:
        p = self.resolve(reference)
        return bool(p and p.is_file())

    def delete(self, reference: str) -> bool:
        """Remove the referenced file. Returns True only when a file was unlinked."""
        if not reference:
            return False
        p = self.resolve(reference)
        if p is None:
            logger.warning("Refusing to delete reference outside uploads: %r", reference)
            return False
        if not p.is_file():
            return False
        try:
            p.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Could not delete %s: %s", p, e)
            return False
        logger.info("Deleted file %s", reference)
        return True
