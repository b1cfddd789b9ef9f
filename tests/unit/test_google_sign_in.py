"""Tests for the Google sign-in service."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import pytest

from snehayog.domain.exceptions import APIError, AuthenticationError, ConfigurationError
from snehayog.infrastructure.auth.google_sign_in import GoogleSignInService
from snehayog.infrastructure.config.environment import EnvironmentConfig
from snehayog.infrastructure.config.models import GoogleAuthConfig
from snehayog.infrastructure.http.client import ApiClient

MODULE = "snehayog.infrastructure.auth.google_sign_in"


@pytest.fixture
def client(environment: EnvironmentConfig) -> Mock:
    mock = Mock(spec=ApiClient)
    mock.environment = environment
    mock.get_json = AsyncMock()
    mock.post_json = AsyncMock()
    return mock


@pytest.fixture
def secrets_file(tmp_path):
    path = tmp_path / "client_secrets.json"
    path.write_text("{}", encoding="utf-8")
    return path


@pytest.fixture
def service(client: Mock, secrets_file) -> GoogleSignInService:
    return GoogleSignInService(client, GoogleAuthConfig(client_secrets_file=str(secrets_file), open_browser=False))


def _mock_flow(id_token: str | None = "google-id-token") -> Mock:
    credentials = Mock()
    credentials.id_token = id_token
    credentials.token = "google-access-token"
    flow = Mock()
    flow.run_local_server.return_value = credentials
    flow.client_config = {"client_id": "client-123"}
    return flow


class TestGoogleSignInService:
    """Tests for GoogleSignInService."""

    @pytest.mark.asyncio
    async def test_sign_in_exchanges_id_token(self, service: GoogleSignInService, client: Mock) -> None:
        client.post_json.return_value = {
            "accessToken": "backend-jwt",
            "user": {"name": "Asha", "profilePic": "p.jpg"},
        }
        claims = {"sub": "g1", "email": "asha@example.com", "name": "A"}

        with patch(f"{MODULE}.InstalledAppFlow") as flow_cls, patch(
            f"{MODULE}.google_id_token.verify_oauth2_token", return_value=claims
        ) as verify:
            flow_cls.from_client_secrets_file.return_value = _mock_flow()
            user = await service.sign_in()

        assert user is not None
        assert user.id == "g1"
        assert user.name == "Asha"
        assert user.email == "asha@example.com"
        assert user.token == "backend-jwt"
        verify.assert_called_once()
        url, payload = client.post_json.call_args[0]
        assert url == "http://localhost:5000/api/auth"
        assert payload["idToken"] == "google-id-token"
        assert {"deviceId", "deviceName", "platform"} <= set(payload)

    @pytest.mark.asyncio
    async def test_sign_in_without_secrets_file(self, client: Mock) -> None:
        service = GoogleSignInService(client, GoogleAuthConfig())
        with pytest.raises(ConfigurationError, match="client secrets file not found"):
            await service.sign_in()

    @pytest.mark.asyncio
    async def test_sign_in_without_id_token(self, service: GoogleSignInService) -> None:
        with patch(f"{MODULE}.InstalledAppFlow") as flow_cls:
            flow_cls.from_client_secrets_file.return_value = _mock_flow(id_token=None)
            with pytest.raises(AuthenticationError, match="Failed to get authentication token"):
                await service.sign_in()

    @pytest.mark.asyncio
    async def test_sign_in_backend_rejects(self, service: GoogleSignInService, client: Mock) -> None:
        client.post_json.side_effect = APIError("Invalid Google token", 400)

        with patch(f"{MODULE}.InstalledAppFlow") as flow_cls, patch(
            f"{MODULE}.google_id_token.verify_oauth2_token", return_value={"sub": "g1"}
        ):
            flow_cls.from_client_secrets_file.return_value = _mock_flow()
            with pytest.raises(AuthenticationError, match="Backend authentication failed"):
                await service.sign_in()

    @pytest.mark.asyncio
    async def test_fetch_current_user(self, service: GoogleSignInService, client: Mock) -> None:
        client.get_json.return_value = {"googleId": "g1", "name": "Asha", "email": "a@example.com"}

        user = await service.fetch_current_user("backend-jwt")

        assert user is not None
        assert user.id == "g1"
        assert user.token == "backend-jwt"
        url = client.get_json.call_args[0][0]
        assert url == "http://localhost:5000/api/users/profile"
        assert client.get_json.call_args[1]["headers"] == {"Authorization": "Bearer backend-jwt"}

    @pytest.mark.asyncio
    async def test_fetch_current_user_without_token(self, service: GoogleSignInService, client: Mock) -> None:
        assert await service.fetch_current_user(None) is None
        client.get_json.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_current_user_expired_session(self, service: GoogleSignInService, client: Mock) -> None:
        client.get_json.side_effect = AuthenticationError("Token expired")
        assert await service.fetch_current_user("old") is None

    @pytest.mark.asyncio
    async def test_fetch_current_user_network_error_propagates(
        self, service: GoogleSignInService, client: Mock
    ) -> None:
        client.get_json.side_effect = APIError("Network error")
        with pytest.raises(APIError):
            await service.fetch_current_user("jwt")

    @pytest.mark.asyncio
    async def test_sign_out_without_session_is_noop(self, service: GoogleSignInService) -> None:
        with patch(f"{MODULE}.Request") as request_cls:
            await service.sign_out()
        request_cls.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_out_revokes_credentials(self, service: GoogleSignInService) -> None:
        service._credentials = _mock_flow().run_local_server.return_value

        with patch(f"{MODULE}.Request") as request_cls:
            request_cls.return_value.return_value = Mock(status=200)
            await service.sign_out()

        call_kwargs = request_cls.return_value.call_args[1]
        assert call_kwargs["method"] == "POST"
        assert "google-access-token" in call_kwargs["body"]
        assert service._credentials is None

    @pytest.mark.asyncio
    async def test_sign_out_revoke_failure(self, service: GoogleSignInService) -> None:
        service._credentials = _mock_flow().run_local_server.return_value

        with patch(f"{MODULE}.Request") as request_cls:
            request_cls.return_value.return_value = Mock(status=400)
            with pytest.raises(AuthenticationError):
                await service.sign_out()
