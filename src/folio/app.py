# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from folio.auth.tokens import Identity, TokenSigner
from folio.auth.users import authenticate
from folio.core.errors import FolioError, Unauthorized, ValidationError, error_payload
from folio.core.logger import app_logger as logger
from folio.core.settings import get_settings
from folio.infra.document_store import JsonDocumentStore
from folio.infra.file_store import FileStore
from folio.permissions import require_admin
from folio.services.content_service import ContentService, UploadedFile

SETTINGS = get_settings()

STORE = JsonDocumentStore(SETTINGS.db_path)
FILES = FileStore(SETTINGS.uploads_dir, SETTINGS.uploads_url)
CONTENT = ContentService(STORE, FILES)
CONTENT.initialize()

SIGNER = TokenSigner.from_settings(SETTINGS)

admin = require_admin(SIGNER)

app = FastAPI(title="Folio")

app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(SETTINGS.uploads_url, StaticFiles(directory=str(SETTINGS.uploads_dir)), name="uploads")


@app.exception_handler(FolioError)
async def _folio_error_handler(request: Request, exc: FolioError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc), headers=headers)


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError):
    first = (exc.errors() or [{}])[0]
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg") or "malformed request"
    err = ValidationError(f"Invalid request{' (' + where + ')' if where else ''}: {msg}.")
    return JSONResponse(status_code=err.status_code, content=error_payload(err))


async def _upload(file: Optional[UploadFile]) -> Optional[UploadedFile]:
    if file is None or not file.filename:
        return None
    return UploadedFile(filename=file.filename, content=await file.read())


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


# ------------------ Public routes ------------------


@app.post("/api/auth/login")
def login(body: LoginRequest):
    identity = authenticate(STORE, body.username, body.password)
    if not identity:
        raise Unauthorized("Invalid credentials.")
    token = SIGNER.issue(identity)
    return {"token": token, "user": {"username": identity.username}}


@app.get("/api/portfolio/data")
def portfolio_data():
    return CONTENT.portfolio()


# ------------------ Admin: profile ------------------


@app.get("/api/admin/profile")
def get_profile(user: Identity = Depends(admin)):
    return CONTENT.get_profile().to_dict()


@app.put("/api/admin/profile")
def put_profile(payload: Dict[str, Any] = Body(...), user: Identity = Depends(admin)):
    return CONTENT.update_profile(payload).to_dict()


@app.post("/api/admin/upload/profile-image")
async def upload_profile_image(
    profileImage: UploadFile | None = File(None),
    user: Identity = Depends(admin),
):
    profile = CONTENT.replace_profile_image(await _upload(profileImage))
    return {"message": "Profile picture updated.", "profile": profile.to_dict()}


@app.post("/api/admin/upload/resume")
async def upload_resume(
    resume: UploadFile | None = File(None),
    user: Identity = Depends(admin),
):
    profile = CONTENT.replace_resume(await _upload(resume))
    return {"message": "Resume updated.", "profile": profile.to_dict()}


# ------------------ Admin: certificates ------------------


@app.post("/api/admin/certificates", status_code=201)
async def create_certificate(
    name: str = Form(""),
    platform: str = Form(""),
    date: str = Form(""),
    category: str = Form(""),
    certificatePdf: UploadFile | None = File(None),
    certificateThumb: UploadFile | None = File(None),
    user: Identity = Depends(admin),
):
    record = CONTENT.create(
        "certificates",
        {"name": name, "platform": platform, "date": date, "category": category},
        {
            "certificatePdf": await _upload(certificatePdf),
            "certificateThumb": await _upload(certificateThumb),
        },
    )
    return record.to_dict()


@app.put("/api/admin/certificates/{item_id}")
def update_certificate(item_id: str, payload: Dict[str, Any] = Body(...), user: Identity = Depends(admin)):
    return CONTENT.update("certificates", item_id, payload).to_dict()


@app.delete("/api/admin/certificates/{item_id}")
def delete_certificate(item_id: str, user: Identity = Depends(admin)):
    deleted = CONTENT.delete("certificates", item_id)
    return {"message": "Certificate and its files deleted.", "id": deleted}


# ------------------ Admin: publications ------------------


@app.post("/api/admin/publications", status_code=201)
async def create_publication(
    name: str = Form(""),
    type: str = Form(""),
    year: str = Form(""),
    summary: str = Form(""),
    publicationFile: UploadFile | None = File(None),
    user: Identity = Depends(admin),
):
    record = CONTENT.create(
        "publications",
        {"name": name, "type": type, "year": year, "summary": summary},
        {"publicationFile": await _upload(publicationFile)},
    )
    return record.to_dict()


@app.put("/api/admin/publications/{item_id}")
def update_publication(item_id: str, payload: Dict[str, Any] = Body(...), user: Identity = Depends(admin)):
    return CONTENT.update("publications", item_id, payload).to_dict()


@app.delete("/api/admin/publications/{item_id}")
def delete_publication(item_id: str, user: Identity = Depends(admin)):
    deleted = CONTENT.delete("publications", item_id)
    return {"message": "Publication and its file deleted.", "id": deleted}
