import logging
from typing import Any

from app.client.api import ApiClient
from app.client.errors import FormValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LEN = 8


class AuthClient:
    """
    Login, registration and password reset against the identity provider's
    endpoints. A successful login is stored in the injected session.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    @property
    def session(self):
        return self.api.session

    def login(self, email: str, password: str) -> dict[str, Any]:
        if not email or not password:
            raise FormValidationError("Please fill in all fields")

        data = self.api.post("/api/auth/login", json={"email": email, "password": password})
        self.session.save(data["access_token"], str(data["user_id"]), data["email"])
        return data

    def logout(self) -> None:
        self.session.clear()

    def register(self, email: str, password: str, confirm_password: str) -> dict[str, Any]:
        if not email or not password or not confirm_password:
            raise FormValidationError("Please fill in all fields")
        if password != confirm_password:
            raise FormValidationError("Passwords do not match")
        if len(password) < MIN_PASSWORD_LEN:
            raise FormValidationError(f"Password must be at least {MIN_PASSWORD_LEN} characters")

        data = self.api.post("/api/auth/register", json={"email": email, "password": password})
        logger.info(f"Registered {email}")
        return data

    def request_password_reset(self, email: str) -> Any:
        if not email:
            raise FormValidationError("Please enter your email")
        return self.api.post("/api/auth/password-reset-request", json={"email": email})

    def confirm_password_reset(self, token: str, new_password: str, confirm_password: str) -> Any:
        if not token:
            raise FormValidationError("Invalid reset token")
        if not new_password or not confirm_password:
            raise FormValidationError("Please fill in all fields")
        if new_password != confirm_password:
            raise FormValidationError("Passwords do not match")
        if len(new_password) < MIN_PASSWORD_LEN:
            raise FormValidationError(f"Password must be at least {MIN_PASSWORD_LEN} characters")

        return self.api.post(
            "/api/auth/password-reset-confirm",
            json={"token": token, "new_password": new_password},
        )
