import os
import pytest
from unittest.mock import AsyncMock
from datetime import datetime, timezone

# === Настройка переменных окружения ===
os.environ.setdefault("JWT_SECRET", "test_secret_key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi.testclient import TestClient

from app.config.config import Settings
from app.main import get_application
from app.services import auth
from app.services.password import hash_password


# === Settings & Logger ===

@pytest.fixture
def settings():
    return Settings.for_testing()


@pytest.fixture
def fake_logger(monkeypatch):
    """
    Подмена логгера:
    - ничего не пишет «наружу»
    - можно проверять, какие сообщения залогировались.
    """
    class FakeLogger:
        def __init__(self):
            self.infos = []
            self.warnings = []
            self.errors = []

        def info(self, msg, *args, **kwargs):
            self.infos.append(msg)

        def warning(self, msg, *args, **kwargs):
            self.warnings.append(msg)

        def error(self, msg, *args, **kwargs):
            self.errors.append(msg)

    logger = FakeLogger()
    monkeypatch.setattr(auth, "logger", logger)
    return logger


# === Database & Models ===

@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def user_password():
    return "correct-horse"


@pytest.fixture
def mock_user(user_password):
    user = AsyncMock()
    user.id = "5f0c6d2e-1b1a-4c3e-9a57-3d6f1b2a9c10"
    user.email = "alice@example.com"
    user.password_hash = hash_password(user_password, rounds=4)
    user.created_at = datetime.now(timezone.utc)
    user.version = 1
    return user


# === Application ===

@pytest.fixture
def app_settings(tmp_path):
    return Settings.for_testing(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'auth.db'}")


@pytest.fixture
def client(app_settings):
    """Клиент к приложению с временной SQLite базой"""
    application = get_application(app_settings)
    with TestClient(application) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """POST /api/auth/register от имени тестового клиента"""
    def _register(email="alice@example.com", password="correct-horse"):
        return client.post("/api/auth/register", json={"email": email, "password": password})
    return _register


@pytest.fixture
def login(client):
    """POST /api/auth/login от имени тестового клиента"""
    def _login(email="alice@example.com", password="correct-horse"):
        return client.post("/api/auth/login", json={"email": email, "password": password})
    return _login
