from http import HTTPStatus
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from casedesk import auth
from casedesk.errors import HashingError, StoreError
from casedesk.stores.sql import SqlClientStore


def test_hashing_failure_is_an_internal_error(monkeypatch):
    broken = MagicMock()
    broken.hash.side_effect = ValueError("bcrypt backend unavailable")
    monkeypatch.setattr(auth, "pwd_context", broken)

    with pytest.raises(HashingError) as excinfo:
        auth.hash_password("secret123")
    assert "bcrypt backend unavailable" in excinfo.value.message


def test_malformed_digest_is_an_internal_error():
    with pytest.raises(HashingError):
        auth.verify_password("secret123", "not-a-bcrypt-digest")


@pytest.mark.usefixtures("client")
def test_register_hashing_failure_returns_500(client, monkeypatch):
    """A hashing failure surfaces as a 500 and no user is stored."""
    broken = MagicMock()
    broken.hash.side_effect = MemoryError("out of memory")
    monkeypatch.setattr(auth, "pwd_context", broken)

    response = client.post(
        "/api/auth/register",
        json={"name": "Fail", "email": "fail@example.com", "password": "Secret123!"},
    )

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert "out of memory" in response.json()["detail"]
    assert broken.hash.called
    emails = {u["email"] for u in client.get("/api/users").json()}
    assert "fail@example.com" not in emails


def test_store_commit_failure_returns_500_with_message(client, monkeypatch):
    def _fail_commit(self):
        raise OperationalError("INSERT INTO clients", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.orm.Session.commit", _fail_commit)

    response = client.post("/api/clients", json={"companyName": "Doomed AG"})
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert "disk I/O error" in response.json()["detail"]


def test_sql_store_wraps_sqlalchemy_errors():
    db = MagicMock()
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

    with pytest.raises(StoreError):
        SqlClientStore(db).add(company_name="Doomed AG")
    db.rollback.assert_called_once()
