"""
Explicit session state for an authenticated user.

The session is created once and injected into the API client and anything
else that needs the bearer token; nothing reads it from a global.
"""
import json
import logging
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
AUTH_PATHS = ("/login", "/register", "/reset-password")


class SessionStore:
    """In-memory key/value store, the equivalent of browser session storage"""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileSessionStore(SessionStore):
    """Session store persisted as a JSON file, for CLI and script use"""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        initial = {}
        if self.path.exists():
            initial = json.loads(self.path.read_text())
        super().__init__(initial)

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data))

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._flush()

    def remove(self, key: str) -> None:
        super().remove(key)
        self._flush()


class Navigator:
    """Tracks the current view; the API client sends users to the login view on 401"""

    def __init__(self, current_path: str = "/"):
        self.current_path = current_path
        self.history: list[str] = [current_path]

    def go(self, path: str) -> None:
        self.current_path = path
        self.history.append(path)

    def redirect_to_login(self) -> None:
        if self.current_path not in AUTH_PATHS:
            self.go(LOGIN_PATH)


class SessionContext:
    """Bearer token plus user id and email, with an explicit load/save/clear lifecycle"""

    KEYS = ("access_token", "user_id", "user_email")

    def __init__(self, store: SessionStore | None = None, on_clear: Callable[[], None] | None = None):
        self.store = store if store is not None else SessionStore()
        self.on_clear = on_clear
        self.access_token: str | None = None
        self.user_id: str | None = None
        self.user_email: str | None = None

    def load(self) -> "SessionContext":
        for key in self.KEYS:
            setattr(self, key, self.store.get(key))
        return self

    def save(self, access_token: str, user_id: str, user_email: str) -> None:
        self.access_token = access_token
        self.user_id = user_id
        self.user_email = user_email
        for key in self.KEYS:
            self.store.set(key, getattr(self, key))
        logger.info(f"Session started for {user_email}")

    def clear(self) -> None:
        for key in self.KEYS:
            self.store.remove(key)
            setattr(self, key, None)
        logger.info("Session cleared")
        if self.on_clear:
            self.on_clear()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    def auth_headers(self) -> dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}
