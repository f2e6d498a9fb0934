from __future__ import annotations

import io
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from PIL import Image

# Make the alumni_api package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from alumni_api.core import config as core_config  # noqa: E402
from alumni_api.db import reset_engine  # noqa: E402
from alumni_api.db.create_tables import create_all, drop_all  # noqa: E402
from alumni_api.repositories.sql_repository import SQLRepository  # noqa: E402
from alumni_api.services.registry import build_services  # noqa: E402
from alumni_api.services.token_service import TokenService  # noqa: E402

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"


class FakeMailer:
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self) -> None:
        self.activations: list[tuple[str, str]] = []
        self.otps: list[tuple[str, int]] = []

    def send_activation_mail(self, to_email: str, link: str) -> None:
        self.activations.append((to_email, link))

    def send_otp_code(self, to_email: str, code: int) -> None:
        self.otps.append((to_email, code))

    def activation_link_for(self, email: str) -> str:
        url = [link for to, link in self.activations if to == email][-1]
        return url.rsplit("/", 1)[-1]

    def last_code_for(self, email: str) -> int:
        return [code for to, code in self.otps if to == email][-1]


class FakeClock:
    """Strictly increasing clock in the recent past, so every signature gets a distinct iat."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(timezone.utc) - timedelta(minutes=5)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point the app at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_ACCESS_SECRET", ACCESS_SECRET)
    monkeypatch.setenv("JWT_REFRESH_SECRET", REFRESH_SECRET)
    monkeypatch.setenv("API_URL", "http://testserver")
    monkeypatch.setenv("IMAGES_DIR", str(tmp_path / "images"))
    monkeypatch.setenv("PASSWORD_HASH_TIME_COST", "1")
    core_config.get_settings.cache_clear()
    reset_engine()
    drop_all()
    create_all()

    yield core_config.get_settings()

    drop_all()
    reset_engine()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def repo(db_env):
    return SQLRepository()


@pytest.fixture()
def mailer():
    return FakeMailer()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def tokens(repo, clock):
    return TokenService(repo, access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET, clock=clock)


@pytest.fixture()
def services(db_env, repo, mailer, tokens):
    return build_services(db_env, repository=repo, mailer=mailer, tokens=tokens)


@pytest.fixture()
def auth(services):
    return services.auth


@pytest.fixture()
def client(db_env, services):
    from fastapi.testclient import TestClient

    from alumni_api.app import create_app

    with TestClient(create_app(db_env, services)) as tc:
        yield tc


@pytest.fixture()
def make_tokens(repo):
    """Build a TokenService over the test repository with an arbitrary clock."""

    def _make(clock=None, access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET):
        return TokenService(repo, access_secret=access_secret, refresh_secret=refresh_secret, clock=clock or FakeClock())

    return _make


@pytest.fixture()
def stale_clock():
    return FakeClock(datetime.now(timezone.utc) - timedelta(hours=2))


@pytest.fixture()
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
