# type: ignore
import os

os.environ["DATABASE_URL"] = "sqlite://"
for _var in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_PHONE_NUMBER"):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_family_repo, get_family_service
from app.core.errors import NotificationError
from app.repositories.family_repository import FamilyRepository
from app.services.family_service import FamilyService
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


class FakeSmsClient:
    """Records every send; numbers in ``failing`` raise like a rejected SMS."""

    def __init__(self):
        self.sent = []
        self.failing = set()

    def send(self, to: str, body: str) -> str:
        if to in self.failing:
            raise NotificationError(to, "carrier rejected message")
        self.sent.append((to, body))
        return "sent"


@pytest.fixture
def repo():
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS families"))
    repository = FamilyRepository(engine)
    repository.ensure_schema()
    return repository


@pytest.fixture
def sms():
    return FakeSmsClient()


@pytest.fixture
def service(repo, sms):
    return FamilyService(repo, sms)


@pytest.fixture
def client(repo, service):
    app.dependency_overrides[get_family_service] = lambda: service
    app.dependency_overrides[get_family_repo] = lambda: repo
    yield TestClient(app)
    app.dependency_overrides.clear()
