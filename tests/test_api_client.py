import json

import pytest
import requests

from app.client import (
    ApiClient,
    ApiError,
    ClientSettings,
    FileSessionStore,
    Navigator,
    SessionContext,
    UnauthorizedError,
    error_message,
)


def make_response(status_code, body=None, reason="OK"):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = b"" if body is None else json.dumps(body).encode()
    response.encoding = "utf-8"
    return response


class FakeHttp:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.exc:
            raise self.exc
        return self.response


@pytest.fixture
def logged_in():
    session = SessionContext()
    session.save("tok-123", "user-9", "broker@example.com")
    return session


def make_api(session, http, path="/deals"):
    navigator = Navigator(path)
    api = ApiClient(session, settings=ClientSettings(api_base_url="http://crm.test/"), navigator=navigator, http=http)
    return api, navigator


def test_attaches_bearer_token_and_parses_json(logged_in):
    http = FakeHttp(make_response(200, [{"id": "d1"}]))
    api, _ = make_api(logged_in, http)

    assert api.get("/api/deals", params={"stage": "sold"}) == [{"id": "d1"}]

    method, url, kwargs = http.requests[0]
    assert (method, url) == ("GET", "http://crm.test/api/deals")
    assert kwargs["headers"] == {"Authorization": "Bearer tok-123"}
    assert kwargs["params"] == {"stage": "sold"}
    assert kwargs["timeout"] == 10.0


def test_no_token_sends_no_auth_header():
    http = FakeHttp(make_response(200, {}))
    api, _ = make_api(SessionContext(), http)
    api.get("/api/deals")
    assert http.requests[0][2]["headers"] == {}


def test_empty_body_returns_none(logged_in):
    api, _ = make_api(logged_in, FakeHttp(make_response(204, reason="No Content")))
    assert api.delete("/api/deal-buyer-matches/m1") is None


def test_401_clears_session_and_redirects_to_login(logged_in):
    cleared = []
    logged_in.on_clear = lambda: cleared.append(True)
    api, navigator = make_api(logged_in, FakeHttp(make_response(401, {"detail": "expired"}, "Unauthorized")))

    with pytest.raises(UnauthorizedError) as excinfo:
        api.get("/api/deals")

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Unauthorized: Please login again"
    assert not logged_in.is_authenticated
    assert logged_in.store.get("access_token") is None
    assert cleared == [True]
    assert navigator.current_path == "/login"


def test_401_on_login_page_does_not_redirect_again(logged_in):
    api, navigator = make_api(logged_in, FakeHttp(make_response(401, None, "Unauthorized")), path="/login")

    with pytest.raises(UnauthorizedError):
        api.post("/api/auth/login", json={})
    assert navigator.history == ["/login"]


def test_error_status_raises_api_error_with_body(logged_in):
    api, navigator = make_api(logged_in, FakeHttp(make_response(409, {"detail": "already matched"}, "Conflict")))

    with pytest.raises(ApiError) as excinfo:
        api.post("/api/deal-buyer-matches", json={})

    error = excinfo.value
    assert error.status_code == 409
    assert error.message.startswith("409: ")
    assert error_message(error) == "already matched"
    # non-401 errors leave the session alone
    assert logged_in.is_authenticated
    assert navigator.current_path == "/deals"


def test_non_json_error_body_is_kept_as_text(logged_in):
    response = requests.Response()
    response.status_code = 500
    response.reason = "Internal Server Error"
    response._content = b"upstream exploded"
    response.encoding = "utf-8"
    api, _ = make_api(logged_in, FakeHttp(response))

    with pytest.raises(ApiError) as excinfo:
        api.get("/api/deals")
    assert excinfo.value.data == "upstream exploded"
    assert excinfo.value.message == "500: upstream exploded"


def test_network_failure_becomes_api_error(logged_in):
    api, _ = make_api(logged_in, FakeHttp(exc=requests.ConnectionError("refused")))

    with pytest.raises(ApiError) as excinfo:
        api.get("/api/deals")
    assert excinfo.value.status_code is None
    assert "Network error" in excinfo.value.message
    assert logged_in.is_authenticated


def test_error_message_flattens_validation_errors():
    error = ApiError(422, "422: ...", {"detail": [{"loc": ["body", "name"], "msg": "Field required"},
                                                  {"loc": ["body", "x"], "msg": "Input should be a valid integer"}]})
    assert error_message(error) == "Field required, Input should be a valid integer"
    assert error_message(ApiError(500, "500: boom")) == "500: boom"
    assert error_message(ValueError("x"), "Failed to save") == "Failed to save"


def test_file_session_store_round_trip(tmp_path):
    path = tmp_path / "session.json"
    session = SessionContext(FileSessionStore(path))
    session.save("tok", "u1", "a@example.com")

    restored = SessionContext(FileSessionStore(path)).load()
    assert restored.access_token == "tok"
    assert restored.user_email == "a@example.com"

    restored.clear()
    assert SessionContext(FileSessionStore(path)).load().access_token is None


def test_non_json_success_body_raises_api_error(logged_in):
    response = requests.Response()
    response.status_code = 200
    response.reason = "OK"
    response._content = b"<html>maintenance</html>"
    response.encoding = "utf-8"
    api, _ = make_api(logged_in, FakeHttp(response))

    with pytest.raises(ApiError) as excinfo:
        api.get("/api/deals")
    assert excinfo.value.status_code == 200
    assert excinfo.value.data == "<html>maintenance</html>"
    assert logged_in.is_authenticated
