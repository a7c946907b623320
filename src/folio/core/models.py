# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Records persisted in the portfolio document.

Field names are snake_case in Python and camelCase in the stored JSON; each
record owns its mapping in ``from_dict`` / ``to_dict``. Keys a record does not
know about are kept in ``extra`` so that a read/write cycle never drops data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

PUBLICATION_TYPES = ("article", "thesis", "book")

# Values sent by the original admin UI
PUBLICATION_TYPE_ALIASES = {"artigo": "article", "tese": "thesis", "livro": "book"}


def _s(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_publication_type(value: Any) -> Optional[str]:
    """Return the canonical publication type, or None if it is not one."""
    t = _s(value).strip().lower()
    t = PUBLICATION_TYPE_ALIASES.get(t, t)
    return t if t in PUBLICATION_TYPES else None


def _extra(raw: Dict[str, Any], known: tuple) -> Dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in known}


@dataclass
class Profile:
    name: str = ""
    bio: str = ""
    links: Dict[str, str] = field(default_factory=dict)
    profile_image_path: str = ""
    resume_path: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("name", "bio", "links", "profileImagePath", "resumePath")

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "Profile":
        raw = raw if isinstance(raw, dict) else {}
        links = raw.get("links") if isinstance(raw.get("links"), dict) else {}
        return cls(
            name=_s(raw.get("name")),
            bio=_s(raw.get("bio")),
            links={str(k): _s(v) for k, v in links.items()},
            profile_image_path=_s(raw.get("profileImagePath")),
            resume_path=_s(raw.get("resumePath")),
            extra=_extra(raw, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "name": self.name,
            "bio": self.bio,
            "links": dict(self.links),
            "profileImagePath": self.profile_image_path,
            "resumePath": self.resume_path,
        }


@dataclass
class Certificate:
    id: str
    name: str
    pdf_path: str
    thumb_path: str
    platform: str = ""
    date: str = ""
    category: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "name", "platform", "date", "category", "pdfPath", "thumbPath")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Certificate":
        return cls(
            id=_s(raw.get("id")),
            name=_s(raw.get("name")),
            pdf_path=_s(raw.get("pdfPath")),
            thumb_path=_s(raw.get("thumbPath")),
            platform=_s(raw.get("platform")),
            date=_s(raw.get("date")),
            category=_s(raw.get("category")),
            extra=_extra(raw, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "platform": self.platform,
            "date": self.date,
            "category": self.category,
            "pdfPath": self.pdf_path,
            "thumbPath": self.thumb_path,
        }

    def file_refs(self) -> List[str]:
        return [self.pdf_path, self.thumb_path]


@dataclass
class Publication:
    id: str
    name: str
    type: str
    file_path: str
    year: Any = ""
    summary: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("id", "name", "type", "year", "summary", "filePath")

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Publication":
        return cls(
            id=_s(raw.get("id")),
            name=_s(raw.get("name")),
            type=normalize_publication_type(raw.get("type")) or _s(raw.get("type")),
            file_path=_s(raw.get("filePath")),
            year=raw.get("year", ""),
            summary=_s(raw.get("summary")),
            extra=_extra(raw, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "year": self.year,
            "summary": self.summary,
            "filePath": self.file_path,
        }

    def file_refs(self) -> List[str]:
        return [self.file_path]


@dataclass(frozen=True)
class Credential:
    username: str
    password_hash: str

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Credential"]:
        if not isinstance(raw, dict):
            return None
        username = _s(raw.get("username")).strip()
        ph = _s(raw.get("passwordHash")).strip()
        if not username or not ph:
            return None
        return cls(username=username, password_hash=ph)

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "passwordHash": self.password_hash}


@dataclass
class Document:
    profile: Profile = field(default_factory=Profile)
    certificates: List[Certificate] = field(default_factory=list)
    publications: List[Publication] = field(default_factory=list)
    user: Optional[Credential] = None

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Document":
        if not isinstance(raw, dict):
            raise ValueError("Document root must be an object")
        certs = raw.get("certificates") or []
        pubs = raw.get("publications") or []
        if not isinstance(certs, list) or not isinstance(pubs, list):
            raise ValueError("Collections must be lists")
        return cls(
            profile=Profile.from_dict(raw.get("profile")),
            certificates=[Certificate.from_dict(c) for c in certs if isinstance(c, dict)],
            publications=[Publication.from_dict(p) for p in pubs if isinstance(p, dict)],
            user=Credential.from_dict(raw.get("user")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "certificates": [c.to_dict() for c in self.certificates],
            "publications": [p.to_dict() for p in self.publications],
            "user": self.user.to_dict() if self.user else {},
        }
