"""
Shared fixtures.

The API runs against an in-memory SQLite database with the Clerk bearer check
replaced by a fixed test token. Client tests drive the real ApiClient
(requests) through an adapter that hands each request to the FastAPI
TestClient, so no network is involved.
"""
import pytest
import requests
from fastapi import HTTPException, Request
from fastapi.testclient import TestClient
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth import require_auth
from app.client import ApiClient, ClientSettings, Navigator, QueryClient, SessionContext
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Deal  # noqa: F401  registers every model on Base.metadata

TEST_TOKEN = "test-token"
BASE_URL = "http://testserver"


def fake_require_auth(request: Request):
    if request.headers.get("Authorization") != f"Bearer {TEST_TOKEN}":
        raise HTTPException(status_code=401, detail="Invalid or missing token")


class TestClientAdapter(BaseAdapter):
    """Transport adapter that serves requests from a FastAPI TestClient"""

    def __init__(self, test_client: TestClient):
        super().__init__()
        self.test_client = test_client
        self.sent: list[tuple[str, str]] = []

    def send(self, request, **kwargs):
        self.sent.append((request.method, request.path_url))
        headers = {k: v for k, v in request.headers.items() if k.lower() != "content-length"}
        upstream = self.test_client.request(
            request.method,
            request.url,
            content=request.body,
            headers=headers,
        )

        response = requests.Response()
        response.status_code = upstream.status_code
        response._content = upstream.content
        response.headers = CaseInsensitiveDict(upstream.headers)
        response.reason = upstream.reason_phrase
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session_factory):
    def override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_auth] = fake_require_auth
    with TestClient(app, headers={"Authorization": f"Bearer {TEST_TOKEN}"}) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def adapter(client):
    return TestClientAdapter(client)


@pytest.fixture
def session():
    session = SessionContext()
    session.save(TEST_TOKEN, "user-1", "broker@example.com")
    return session


@pytest.fixture
def navigator():
    return Navigator("/deals")


@pytest.fixture
def api(adapter, session, navigator):
    http = requests.Session()
    http.mount(BASE_URL, adapter)
    return ApiClient(
        session,
        settings=ClientSettings(api_base_url=BASE_URL),
        navigator=navigator,
        http=http,
    )


@pytest.fixture
def query_client(api):
    return QueryClient(api)


@pytest.fixture
def make_deal(client):
    def _make_deal(**overrides):
        payload = {
            "company_name": "Acme Plumbing",
            "revenue": "1200000.00",
            "sde": "310000.00",
            "stage": "buyer_matching",
            "owner_id": "user-1",
            "owner": "broker@example.com",
        }
        payload.update(overrides)
        response = client.post("/api/deals", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_deal


@pytest.fixture
def make_party(client):
    def _make_party(name="Summit Capital", **overrides):
        payload = {"name": name, "budget_min": "500000", "budget_max": "2000000"}
        payload.update(overrides)
        response = client.post("/api/buying-parties", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_party


@pytest.fixture
def make_match(client):
    def _make_match(deal_id, party_id, **overrides):
        payload = {"deal_id": deal_id, "buying_party_id": party_id}
        payload.update(overrides)
        response = client.post("/api/deal-buyer-matches", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_match
