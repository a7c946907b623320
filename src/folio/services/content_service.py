# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""CRUD over the portfolio document with the file lifecycle attached.

Every operation re-reads the document before mutating it, so no cached copy
outlives a call. Writes are whole-document read-modify-write cycles without
locking: two concurrent mutations may lose one of the updates.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from folio.core.errors import NotFound, StorageError, ValidationError
from folio.core.logger import content_logger as logger
from folio.core.models import (
    PUBLICATION_TYPES,
    Certificate,
    Document,
    Profile,
    Publication,
    normalize_publication_type,
)
from folio.infra.document_store import DocumentStore
from folio.infra.file_store import FileStore

Record = Union[Certificate, Publication]


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    content: bytes


@dataclass(frozen=True)
class CollectionInfo:
    name: str
    label: str
    record_cls: type
    # upload field -> (file category, record attribute)
    files: Dict[str, Tuple[str, str]]
    required: Tuple[str, ...]
    editable: Tuple[str, ...]
    missing_files_message: str = field(default="Required file missing.")


COLLECTIONS: Dict[str, CollectionInfo] = {
    "certificates": CollectionInfo(
        name="certificates",
        label="Certificate",
        record_cls=Certificate,
        files={
            "certificatePdf": ("certificate_pdf", "pdf_path"),
            "certificateThumb": ("certificate_thumb", "thumb_path"),
        },
        required=("name",),
        editable=("name", "platform", "date", "category"),
        missing_files_message="PDF and thumbnail are required.",
    ),
    "publications": CollectionInfo(
        name="publications",
        label="Publication",
        record_cls=Publication,
        files={"publicationFile": ("publication_file", "file_path")},
        required=("name", "type"),
        editable=("name", "type", "year", "summary"),
        missing_files_message="Publication file is required.",
    ),
}


def _clean_fields(coll: CollectionInfo, metadata: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Keep only editable keys; id, file references and unknown keys are dropped."""
    out: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        if key not in coll.editable:
            continue
        if key == "year":
            out[key] = value if isinstance(value, int) else ("" if value is None else str(value).strip())
        else:
            out[key] = "" if value is None else str(value).strip()
    if "type" in out:
        t = normalize_publication_type(out["type"])
        if t is None:
            allowed = ", ".join(PUBLICATION_TYPES)
            raise ValidationError(f"Invalid publication type '{out['type']}' (expected one of: {allowed}).")
        out["type"] = t
    return out


class ContentService:
    def __init__(self, store: DocumentStore, files: FileStore):
        self.store = store
        self.files = files

    def initialize(self) -> None:
        """First start: placeholder profile picture on disk, then a document pointing at it."""
        self.files.ensure_default_assets()
        self.store.ensure_initialized(
            Document(profile=Profile(profile_image_path=self.files.default_profile_image))
        )

    # ------------------ collections ------------------

    def _collection(self, collection: str) -> CollectionInfo:
        coll = COLLECTIONS.get(collection)
        if coll is None:
            raise NotFound(f"Unknown collection '{collection}'.")
        return coll

    @staticmethod
    def _items(doc: Document, coll: CollectionInfo) -> List[Record]:
        return getattr(doc, coll.name)

    def list(self, collection: str) -> List[Record]:
        coll = self._collection(collection)
        return list(self._items(self.store.read(), coll))

    def get(self, collection: str, item_id: str) -> Record:
        coll = self._collection(collection)
        for item in self._items(self.store.read(), coll):
            if item.id == item_id:
                return item
        raise NotFound(f"{coll.label} not found.")

    def create(
        self,
        collection: str,
        metadata: Optional[Mapping[str, Any]],
        files: Mapping[str, Optional[UploadedFile]],
    ) -> Record:
        coll = self._collection(collection)
        fields = _clean_fields(coll, metadata)

        missing = [k for k in coll.required if not fields.get(k)]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}.")
        if any(not files.get(f) or not files[f].content for f in coll.files):
            raise ValidationError(coll.missing_files_message)

        refs: Dict[str, str] = {}
        try:
            for upload_field, (category, attr) in coll.files.items():
                upload = files[upload_field]
                refs[attr] = self.files.save(category, upload.content, upload.filename)

            doc = self.store.read()
            items = self._items(doc, coll)
            taken = {i.id for i in items}
            new_id = str(uuid.uuid4())
            while new_id in taken:
                new_id = str(uuid.uuid4())

            record = coll.record_cls(id=new_id, **fields, **refs)
            items.append(record)
            self.store.write(doc)
        except StorageError:
            for ref in refs.values():
                self.files.delete(ref)
            raise

        logger.info("Created %s %s", coll.label.lower(), record.id)
        return record

    def update(self, collection: str, item_id: str, metadata: Optional[Mapping[str, Any]]) -> Record:
        coll = self._collection(collection)
        fields = _clean_fields(coll, metadata)
        blank = [k for k in coll.required if k in fields and not fields[k]]
        if blank:
            raise ValidationError(f"Required field(s) cannot be empty: {', '.join(blank)}.")

        doc = self.store.read()
        for item in self._items(doc, coll):
            if item.id == item_id:
                for key, value in fields.items():
                    setattr(item, key, value)
                self.store.write(doc)
                logger.info("Updated %s %s", coll.label.lower(), item_id)
                return item
        raise NotFound(f"{coll.label} not found.")

    def delete(self, collection: str, item_id: str) -> str:
        coll = self._collection(collection)
        doc = self.store.read()
        items = self._items(doc, coll)
        target = next((i for i in items if i.id == item_id), None)
        if target is None:
            raise NotFound(f"{coll.label} not found.")

        items.remove(target)
        # a failed write raises here, before any file is touched
        self.store.write(doc)

        for ref in target.file_refs():
            self.files.delete(ref)
        logger.info("Deleted %s %s", coll.label.lower(), item_id)
        return item_id

    # ------------------ profile ------------------

    def get_profile(self) -> Profile:
        return self.store.read().profile

    def update_profile(self, fields: Optional[Mapping[str, Any]]) -> Profile:
        fields = fields or {}
        changes: Dict[str, Any] = {}
        for key in ("name", "bio"):
            if key in fields:
                changes[key] = "" if fields[key] is None else str(fields[key])
        if "links" in fields:
            links = fields["links"]
            if not isinstance(links, Mapping):
                raise ValidationError("'links' must be a mapping of platform to URL.")
            changes["links"] = {str(k): "" if v is None else str(v) for k, v in links.items()}

        doc = self.store.read()
        for key, value in changes.items():
            setattr(doc.profile, key, value)
        self.store.write(doc)
        logger.info("Updated profile fields: %s", ", ".join(sorted(changes)) or "-")
        return doc.profile

    def _replace_profile_file(self, attr: str, category: str, upload: Optional[UploadedFile]) -> Profile:
        if not upload or not upload.content:
            raise ValidationError("No file uploaded.")

        new_ref = self.files.save(category, upload.content, upload.filename)
        doc = self.store.read()
        old_ref = getattr(doc.profile, attr)
        setattr(doc.profile, attr, new_ref)
        try:
            self.store.write(doc)
        except StorageError:
            self.files.delete(new_ref)
            raise

        # reference already points at the new file
        if old_ref and old_ref != new_ref and old_ref not in self.files.default_assets():
            self.files.delete(old_ref)
        return doc.profile

    def replace_profile_image(self, upload: Optional[UploadedFile]) -> Profile:
        return self._replace_profile_file("profile_image_path", "profile_image", upload)

    def replace_resume(self, upload: Optional[UploadedFile]) -> Profile:
        return self._replace_profile_file("resume_path", "resume", upload)

    # ------------------ public view ------------------

    def portfolio(self) -> Dict[str, Any]:
        doc = self.store.read()
        return {
            "profile": doc.profile.to_dict(),
            "certificates": [c.to_dict() for c in doc.certificates],
            "publications": [p.to_dict() for p in doc.publications],
        }
