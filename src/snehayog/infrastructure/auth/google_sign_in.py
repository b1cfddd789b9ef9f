"""Google sign-in exchanged for a Snehayog backend session."""

from __future__ import annotations

import asyncio
import logging
import platform
import uuid
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlencode

from google.auth.transport.requests import Request
from google.oauth2 import id_token as google_id_token
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from snehayog.domain.exceptions import APIError, AuthenticationError, ConfigurationError
from snehayog.domain.models.user import CachedUser
from snehayog.domain.services.sign_in_service import SignInService
from snehayog.infrastructure.config.models import GoogleAuthConfig
from snehayog.infrastructure.http.client import ApiClient

logger = logging.getLogger(__name__)

GOOGLE_REVOKE_URI = "https://oauth2.googleapis.com/revoke"


def _device_info() -> dict[str, str]:
    return {
        "deviceId": uuid.UUID(int=uuid.getnode()).hex,
        "deviceName": platform.node() or "unknown",
        "platform": platform.system().lower() or "unknown",
    }


class GoogleSignInService(SignInService):
    """
    Signs in with Google and trades the ID token for a backend JWT.

    The Google consent screen is shown with the installed-app OAuth flow. The
    resulting ID token is posted to ``/api/auth``; the backend answers with an
    access token and its user record.
    """

    def __init__(self, client: ApiClient, config: GoogleAuthConfig) -> None:
        """
        Initialize the sign-in service.

        Args:
            client: API client bound to the active environment
            config: Google OAuth settings (client secrets file, scopes)
        """
        self.client = client
        self.config = config
        self._credentials: Credentials | None = None

    def _run_oauth_flow(self) -> tuple[Credentials, str]:
        secrets = self.config.client_secrets_file
        if not secrets or not Path(secrets).expanduser().exists():
            raise ConfigurationError(
                f"OAuth2 client secrets file not found: {secrets}\n"
                "Please download the client secrets JSON file from Google Cloud Console."
            )

        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(Path(secrets).expanduser()), self.config.scopes
            )
            credentials = flow.run_local_server(port=0, open_browser=self.config.open_browser)
        except Exception as e:
            raise AuthenticationError(f"Google sign-in failed: {e}", e) from e

        client_id = flow.client_config.get("client_id")
        return credentials, client_id

    def _verify_id_token(self, token: str, client_id: str | None) -> dict[str, Any]:
        try:
            return google_id_token.verify_oauth2_token(token, Request(), client_id)
        except ValueError as e:
            raise AuthenticationError(f"Invalid Google ID token: {e}", e) from e

    async def sign_in(self) -> Optional[CachedUser]:
        credentials, client_id = await asyncio.to_thread(self._run_oauth_flow)
        if credentials is None:
            logger.info("Google sign-in cancelled")
            return None

        raw_id_token = getattr(credentials, "id_token", None)
        if not raw_id_token:
            raise AuthenticationError("Failed to get authentication token from Google")

        claims = await asyncio.to_thread(self._verify_id_token, raw_id_token, client_id)
        self._credentials = credentials

        try:
            data = await self.client.post_json(
                self.client.environment.auth_endpoint,
                {"idToken": raw_id_token, **_device_info()},
                timeout=self.client.environment.auth_timeout,
                retry=False,
            )
        except APIError as e:
            raise AuthenticationError(f"Backend authentication failed: {e.message}", e) from e

        data = data or {}
        token = data.get("accessToken") or data.get("token")
        if not token:
            raise AuthenticationError("Backend authentication returned no token")

        backend_user = data.get("user") or {}
        user = CachedUser(
            id=str(claims.get("sub") or backend_user.get("googleId") or ""),
            name=backend_user.get("name") or claims.get("name") or "User",
            email=claims.get("email") or backend_user.get("email"),
            profile_pic=(
                backend_user.get("profilePic")
                or backend_user.get("profilePicture")
                or claims.get("picture")
            ),
            token=token,
        )
        logger.info("Signed in as %s", user.id)
        return user

    def _revoke(self, token: str) -> None:
        request = Request()
        response = request(
            url=GOOGLE_REVOKE_URI,
            method="POST",
            body=urlencode({"token": token}),
            headers={"content-type": "application/x-www-form-urlencoded"},
        )
        if response.status != 200:
            raise AuthenticationError(f"Failed to revoke Google credentials (status {response.status})")

    async def sign_out(self) -> None:
        credentials, self._credentials = self._credentials, None
        if credentials is None or not credentials.token:
            return

        try:
            await asyncio.to_thread(self._revoke, credentials.token)
        except AuthenticationError:
            raise
        except Exception as e:
            raise AuthenticationError(f"Google sign-out failed: {e}", e) from e
        logger.info("Revoked Google credentials")

    async def fetch_current_user(self, token: Optional[str]) -> Optional[CachedUser]:
        if not token:
            return None

        try:
            data = await self.client.get_json(
                f"{self.client.environment.users_endpoint}/profile",
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.client.environment.short_timeout,
                retry=False,
            )
        except AuthenticationError:
            logger.info("Stored session is no longer valid")
            return None

        if not isinstance(data, dict):
            return None
        user_data = data.get("user", data)
        try:
            return CachedUser.from_dict(user_data, token=token)
        except ValueError:
            logger.warning("Profile response has no user id")
            return None
