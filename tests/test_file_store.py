import pytest

from folio.core.errors import ValidationError
from folio.infra.file_store import FileStore


def test_save_returns_reference_under_category(files):
    ref = files.save("certificate_pdf", b"%PDF", "My Cert.PDF")
    assert ref.startswith("/uploads/certificates/certificate_pdf-")
    assert ref.endswith(".pdf")
    assert files.exists(ref)
    assert files.resolve(ref).read_bytes() == b"%PDF"


def test_save_generates_distinct_names(files):
    refs = {files.save("publication_file", b"x", "paper.pdf") for _ in range(20)}
    assert len(refs) == 20


def test_save_without_extension(files):
    ref = files.save("resume", b"cv", "resume")
    assert ref.startswith("/uploads/resume/resume-")
    assert "." not in ref.rsplit("/", 1)[-1]


def test_save_unknown_category_is_rejected(files):
    with pytest.raises(ValidationError):
        files.save("avatars", b"x", "a.png")


def test_delete_removes_file_and_is_idempotent(files):
    ref = files.save("certificate_thumb", b"img", "t.png")
    assert files.delete(ref) is True
    assert not files.exists(ref)
    assert files.delete(ref) is False


@pytest.mark.parametrize(
    "ref",
    ["", "/etc/passwd", "uploads/thumbs/x.png", "/uploads/../db.json", "/uploads/thumbs/../../db.json", "/uploads/"],
)
def test_delete_ignores_references_outside_uploads(files, tmp_path, ref):
    outside = tmp_path / "data" / "db.json"
    outside.parent.mkdir(parents=True, exist_ok=True)
    outside.write_text("{}", encoding="utf-8")

    assert files.delete(ref) is False
    assert outside.exists()


def test_resolve_rejects_traversal(files):
    assert files.resolve("/uploads/../../etc/passwd") is None
    assert files.resolve("/uploads/thumbs/a.png") == files.root / "thumbs" / "a.png"


def test_ensure_default_assets_writes_placeholder_once(files):
    assert not files.exists(files.default_profile_image)
    files.ensure_default_assets()
    p = files.resolve(files.default_profile_image)
    assert p.read_bytes().startswith(b"\x89PNG")

    p.write_bytes(b"custom")
    files.ensure_default_assets()
    assert p.read_bytes() == b"custom"


def test_default_profile_image_follows_url_prefix(tmp_path):
    media = FileStore(tmp_path / "media", "/media/")
    media.ensure_default_assets()
    assert media.default_profile_image == "/media/profile/default.png"
    assert media.exists(media.default_profile_image)
    assert media.default_assets() == {"/media/profile/default.png"}
