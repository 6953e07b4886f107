import logging
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.middleware.jwt import JWTAuthVerifier, create_access_token
from app.services.errors import Unauthenticated


@pytest.fixture
def verifier(settings):
    return JWTAuthVerifier.from_settings(settings)


@pytest.mark.parametrize("header", [
    None,
    "",
    "Bearer",
    "Token abc.def.ghi",
    "bearer abc.def.ghi",
])
def test_malformed_header(verifier, header):
    """Заголовок без префикса Bearer"""
    with pytest.raises(Unauthenticated) as exc_info:
        verifier.verify(header)

    assert exc_info.value.message == "No token provided"
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize("header", [
    "Bearer ",
    "Bearer abc def",
    "Bearer  abc.def.ghi",
])
def test_bad_token_after_prefix(verifier, header):
    """Префикс есть, но токен пустой или с лишними пробелами"""
    with pytest.raises(Unauthenticated) as exc_info:
        verifier.verify(header)

    assert exc_info.value.message == "Invalid or expired token"


def test_valid_token(verifier, settings):
    token = create_access_token(settings, "user-1")

    claims = verifier.verify(f"Bearer {token}")

    assert claims["sub"] == "user-1"
    assert {"iat", "exp"} <= claims.keys()


def test_wrong_signature(verifier, caplog):
    """Токен подписан другим ключом; причина только в логе"""
    token = jwt.encode(
        {"sub": "user-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "another_secret",
        algorithm="HS256",
    )

    with caplog.at_level(logging.ERROR, logger="app.middleware.jwt"):
        with pytest.raises(Unauthenticated) as exc_info:
            verifier.verify(f"Bearer {token}")

    assert exc_info.value.message == "Invalid or expired token"
    assert "JWT decode error" in caplog.text


def test_expired_token(verifier, settings):
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = jwt.encode(
        {"sub": "user-1", "iat": past - timedelta(hours=24), "exp": past},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(Unauthenticated) as exc_info:
        verifier.verify(f"Bearer {token}")

    assert exc_info.value.message == "Invalid or expired token"


def test_token_without_subject(verifier, settings):
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(Unauthenticated):
        verifier.verify(f"Bearer {token}")


def test_garbage_token(verifier):
    with pytest.raises(Unauthenticated) as exc_info:
        verifier.verify("Bearer not-a-jwt")

    assert exc_info.value.message == "Invalid or expired token"
