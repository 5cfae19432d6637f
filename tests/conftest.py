import json

import httpx
import pytest
from fastapi.testclient import TestClient

from src.app_reviews.config import settings
from src.app_reviews.credentials.resolver import CredentialResolver
from src.app_reviews.engine.admin_client import AdminApiClient
from src.app_reviews.engine.pipeline import ReviewPipeline
from src.app_reviews.main import app
from src.app_reviews.schemas.credential import Credential

SHOP = "shop.example"
TOKEN = "shpat_test_token"
CREATED_ID = "gid://x/Metaobject/1"


class FakeStore:
    def __init__(self, credentials: dict[str, Credential] | None = None):
        self.credentials = credentials or {}
        self.lookups: list[str] = []

    def find_offline(self, shop: str) -> Credential | None:
        self.lookups.append(shop)
        return self.credentials.get(shop)


class FakeAdminApi:
    """Records outbound requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, body: str | dict | None = None, exc: Exception | None = None):
        self.status_code = status_code
        self.body = body if body is not None else created_body(CREATED_ID)
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        text = self.body if isinstance(self.body, str) else json.dumps(self.body)
        return httpx.Response(self.status_code, text=text)

    def client(self) -> AdminApiClient:
        return AdminApiClient(httpx.AsyncClient(transport=httpx.MockTransport(self.handler)))


def created_body(metaobject_id: str) -> dict:
    return {"data": {"metaobjectCreate": {"metaobject": {"id": metaobject_id}, "userErrors": []}}}


def user_errors_body(*errors: dict) -> dict:
    return {"data": {"metaobjectCreate": {"metaobject": None, "userErrors": list(errors)}}}


@pytest.fixture
def credential() -> Credential:
    return Credential(shop=SHOP, access_token=TOKEN, is_online=False)


@pytest.fixture
def store(credential) -> FakeStore:
    return FakeStore({SHOP: credential})


@pytest.fixture
def admin_api() -> FakeAdminApi:
    return FakeAdminApi()


@pytest.fixture
def pipeline(store, admin_api) -> ReviewPipeline:
    return ReviewPipeline(CredentialResolver(store), admin_api.client())


@pytest.fixture
def form_fields() -> dict:
    return {
        "product_id": "42",
        "rating": "5",
        "title": "Great",
        "body": "Works as advertised.",
        "author": "Sam",
        "email": "sam@example.com",
        "return_to": "/products/widget",
    }


@pytest.fixture
def client(monkeypatch, pipeline):
    monkeypatch.setattr(settings, "verify_proxy_signature", False)
    app.state.pipeline = pipeline
    return TestClient(app)
