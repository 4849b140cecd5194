# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Integration tests for the admin login endpoint.

Assumptions:
- Login accepts user_login or user_email
- Only administrators receive a token
- Error bodies are {"status": "error", "message": ...}
"""
import hashlib

import bcrypt
import pytest

from lppm.auth.token import is_well_formed_token

EDITOR_CAPABILITIES = 'a:1:{s:6:"editor";b:1;}'

PHPASS_HASH = "$P$9IQRaTwmfeRo7ud9Fh4E2PdI0S3r.L0"


@pytest.mark.integration
def test_login_success(client, wp):
    user = wp.user(login="admin", email="admin@unila.ac.id", user_pass=PHPASS_HASH,
                   display_name="Admin LPPM")

    response = client.post("/api/admin/login", json={"username": "admin", "password": "test12345"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["data"] == {
        "id": user.id,
        "username": "admin",
        "display_name": "Admin LPPM",
        "email": "admin@unila.ac.id",
    }
    assert is_well_formed_token(body["meta"]["token"])
    assert "login_at" in body["meta"]


@pytest.mark.integration
def test_login_with_email(client, wp):
    wp.user(login="admin", email="admin@unila.ac.id",
            user_pass=hashlib.md5(b"rahasia").hexdigest())

    response = client.post(
        "/api/admin/login",
        json={"username": "admin@unila.ac.id", "password": "rahasia"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["username"] == "admin"


@pytest.mark.integration
def test_login_tokens_differ_between_logins(client, wp):
    wp.user(login="admin", user_pass="rahasia")
    credentials = {"username": "admin", "password": "rahasia"}

    first = client.post("/api/admin/login", json=credentials).json()["meta"]["token"]
    second = client.post("/api/admin/login", json=credentials).json()["meta"]["token"]

    assert first != second


@pytest.mark.integration
@pytest.mark.parametrize("username,password", [
    ("admin", "salah"),
    ("ghost", "test12345"),
])
def test_login_invalid_credentials(client, wp, username, password):
    wp.user(login="admin", user_pass=PHPASS_HASH)

    response = client.post("/api/admin/login", json={"username": username, "password": password})

    assert response.status_code == 401
    assert response.json() == {
        "status": "error",
        "message": "Username atau password salah.",
    }


@pytest.mark.integration
def test_login_non_administrator_is_forbidden(client, wp):
    wp.user(login="editor", email="editor@unila.ac.id", user_pass="rahasia",
            capabilities=EDITOR_CAPABILITIES)

    response = client.post("/api/admin/login", json={"username": "editor", "password": "rahasia"})

    assert response.status_code == 403
    assert response.json() == {
        "status": "error",
        "message": "Akses ditolak. Akun ini bukan administrator.",
    }


@pytest.mark.integration
def test_login_without_capabilities_is_forbidden(client, wp):
    wp.user(login="orphan", email="orphan@unila.ac.id", user_pass="rahasia", capabilities=None)

    response = client.post("/api/admin/login", json={"username": "orphan", "password": "rahasia"})

    assert response.status_code == 403


@pytest.mark.integration
@pytest.mark.parametrize("payload", [
    {},
    {"username": "admin"},
    {"password": "rahasia"},
    {"username": "", "password": "rahasia"},
    {"username": "admin", "password": ""},
])
def test_login_requires_both_fields(client, wp, payload):
    wp.user(login="admin", user_pass="rahasia")

    response = client.post("/api/admin/login", json=payload)

    assert response.status_code == 422


@pytest.mark.integration
def test_login_with_plugin_bcrypt_hash(client, wp):
    hashed = bcrypt.hashpw(b"rahasia", bcrypt.gensalt(rounds=4)).decode("ascii")
    wp.user(login="admin", user_pass="$2y$" + hashed[4:])

    response = client.post("/api/admin/login", json={"username": "admin", "password": "rahasia"})

    assert response.status_code == 200
