import time

import pytest

from folio.auth.passwords import hash_password, verify_password
from folio.auth.tokens import Identity, TokenSigner
from folio.auth.users import authenticate, set_credential
from folio.core.errors import Forbidden, Unauthorized

from conftest import ADMIN_PASSWORD, ADMIN_USER


def test_hash_is_salted_and_verifiable():
    h1 = hash_password("s3cret")
    h2 = hash_password("s3cret")
    assert h1 != h2
    assert h1.startswith("$argon2")
    assert verify_password(h1, "s3cret")
    assert not verify_password(h1, "nope")


def test_verify_password_never_raises_on_garbage():
    assert verify_password("not-a-hash", "x") is False
    assert verify_password("", "x") is False


def test_hash_rejects_empty_password():
    with pytest.raises(ValueError):
        hash_password("")


def test_authenticate_success_returns_identity(admin_store):
    identity = authenticate(admin_store, ADMIN_USER, ADMIN_PASSWORD)
    assert identity == Identity(id=1, username=ADMIN_USER)


def test_authenticate_rejections_are_indistinguishable(admin_store):
    wrong_password = authenticate(admin_store, ADMIN_USER, "wrongpass")
    wrong_user = authenticate(admin_store, "root", ADMIN_PASSWORD)
    assert wrong_password is None
    assert wrong_user is None


def test_authenticate_without_stored_credential(store):
    assert authenticate(store, "admin", "anything") is None


def test_set_credential_replaces_previous(admin_store):
    set_credential(admin_store, "editor", "newpass")
    assert authenticate(admin_store, ADMIN_USER, ADMIN_PASSWORD) is None
    assert authenticate(admin_store, "editor", "newpass") is not None
    assert admin_store.read().user.password_hash != "newpass"


def test_token_roundtrip(signer):
    token = signer.issue(Identity(id=1, username="admin"))
    assert signer.verify(token) == Identity(id=1, username="admin")


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_unauthorized(signer, token):
    with pytest.raises(Unauthorized):
        signer.verify(token)


def test_tampered_or_foreign_token_is_forbidden(signer):
    token = signer.issue(Identity(id=1, username="admin"))
    with pytest.raises(Forbidden):
        signer.verify(("x" if token[0] != "x" else "y") + token[1:])
    with pytest.raises(Forbidden):
        signer.verify("garbage")
    other = TokenSigner("another-secret", salt="folio.test")
    with pytest.raises(Forbidden):
        signer.verify(other.issue(Identity(id=1, username="admin")))


def test_token_expires_after_window(signer, monkeypatch):
    token = signer.issue(Identity(id=1, username="admin"))

    now = int(time.time())
    monkeypatch.setattr("itsdangerous.timed.TimestampSigner.get_timestamp", lambda self: now + 1800)
    assert signer.verify(token).username == "admin"

    monkeypatch.setattr("itsdangerous.timed.TimestampSigner.get_timestamp", lambda self: now + 3600 + 60)
    with pytest.raises(Forbidden):
        signer.verify(token)


def test_signer_requires_secret():
    with pytest.raises(RuntimeError):
        TokenSigner("")
