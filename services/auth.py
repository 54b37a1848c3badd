"""
Supabase authentication client.
Email/password sign-in against the GoTrue REST API.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from services.utils import get_logger, get_secret

logger = get_logger(__name__)


class AuthError(Exception):
    """Raised when sign-in, sign-up or sign-out fails."""
    pass


@dataclass(frozen=True)
class Session:
    """Signed-in user as seen by the storage layer."""

    user_id: str
    email: str
    access_token: str
    refresh_token: str = ""


class SupabaseAuth:
    """Handles Supabase Auth API operations."""

    def __init__(
        self,
        url: Optional[str] = None,
        anon_key: Optional[str] = None,
        timeout: float = 15,
    ):
        self.url = (url or get_secret("SUPABASE_URL") or "").rstrip("/")
        self.anon_key = anon_key or get_secret("SUPABASE_ANON_KEY")
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if auth is configured."""
        return bool(self.url and self.anon_key)

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.anon_key or "",
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _post(
        self,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not self.is_available():
            raise AuthError("Authentication is not configured")

        try:
            response = requests.post(
                f"{self.url}/auth/v1/{path}",
                headers=self._headers(access_token),
                params=params,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Auth service unreachable: {e}") from e

        if response.status_code >= 400:
            raise AuthError(self._error_message(response))

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Pick the most readable message GoTrue returned."""
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if isinstance(payload, dict):
            for key in ("error_description", "msg", "message", "error"):
                if payload.get(key):
                    return str(payload[key])
        return f"Auth request failed (HTTP {response.status_code})"

    @staticmethod
    def _session_from_payload(payload: Dict[str, Any]) -> Session:
        user = payload.get("user") or {}
        token = payload.get("access_token")
        if not token or not user.get("id"):
            raise AuthError("Auth response did not contain a session")
        return Session(
            user_id=str(user["id"]),
            email=str(user.get("email") or ""),
            access_token=str(token),
            refresh_token=str(payload.get("refresh_token") or ""),
        )

    def sign_in(self, email: str, password: str) -> Session:
        """
        Sign in with email and password.

        Raises:
            AuthError: On wrong credentials or transport failure
        """
        payload = self._post(
            "token",
            params={"grant_type": "password"},
            body={"email": email.strip(), "password": password},
        )
        session = self._session_from_payload(payload)
        logger.info("Signed in %s", session.email)
        return session

    def sign_up(self, email: str, password: str) -> Optional[Session]:
        """
        Register a new user.

        Returns:
            Session if the project auto-confirms e-mails, otherwise None
            (the user has to confirm by e-mail first)
        """
        payload = self._post("signup", body={"email": email.strip(), "password": password})
        if payload.get("access_token"):
            return self._session_from_payload(payload)
        logger.info("Sign-up pending e-mail confirmation for %s", email.strip())
        return None

    def sign_out(self, session: Session) -> None:
        """Revoke the session's tokens."""
        self._post("logout", access_token=session.access_token)
        logger.info("Signed out %s", session.email)
