import logging
import threading
from typing import Any

import requests

from app.client.config import ClientSettings
from app.client.errors import ApiError, UnauthorizedError
from app.client.session import Navigator, SessionContext

logger = logging.getLogger(__name__)


def _parse_body(response: requests.Response) -> Any:
    """Best-effort body of an error response: JSON when possible, else text"""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ApiClient:
    """
    Thin JSON-over-HTTP client for the CRM API.

    Attaches the session's bearer token to every request. A 401 from any call
    clears the session and sends the navigator to the login view before
    raising UnauthorizedError. Requests are never retried.
    """

    def __init__(
        self,
        session: SessionContext,
        settings: ClientSettings | None = None,
        navigator: Navigator | None = None,
        http: requests.Session | None = None,
    ):
        self.settings = settings or ClientSettings()
        self.session = session
        self.navigator = navigator or Navigator()
        self.http = http or requests.Session()
        self.base_url = self.settings.api_base_url.rstrip("/")
        # requests.Session is not thread-safe; the autosave timer shares it
        self._http_lock = threading.Lock()

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self.session.auth_headers()

        try:
            with self._http_lock:
                response = self.http.request(
                    method,
                    url,
                    json=json,
                    params=params,
                    headers=headers,
                    timeout=self.settings.request_timeout,
                )
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(None, f"Network error: {e}") from e

        if response.status_code == 401:
            logger.warning(f"{method} {path} returned 401, clearing session")
            self.session.clear()
            self.navigator.redirect_to_login()
            raise UnauthorizedError()

        if not 200 <= response.status_code < 300:
            data = _parse_body(response)
            text = response.text or response.reason
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise ApiError(response.status_code, f"{response.status_code}: {text}", data)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise ApiError(
                response.status_code,
                f"{response.status_code}: invalid JSON in response",
                response.text,
            ) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
