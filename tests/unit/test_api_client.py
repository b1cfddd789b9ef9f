"""Tests for the HTTP API client."""

from __future__ import annotations

from typing import Callable
from unittest.mock import Mock

import pytest
import requests

from snehayog.domain.exceptions import APIError, AuthenticationError
from snehayog.infrastructure.config.environment import EnvironmentConfig
from snehayog.infrastructure.http.client import ApiClient


@pytest.fixture
def session() -> Mock:
    return Mock(spec=requests.Session)


@pytest.fixture
def client(environment: EnvironmentConfig, session: Mock) -> ApiClient:
    return ApiClient(environment, token_provider=lambda: "jwt", session=session, retry_delay=0)


class TestApiClient:
    """Tests for ApiClient."""

    def test_defaults_from_environment(self, environment: EnvironmentConfig, session: Mock) -> None:
        client = ApiClient(environment, session=session)
        assert client.max_retries == 2
        assert client.retry_delay == 1.0

    @pytest.mark.asyncio
    async def test_get_json_success(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.return_value = response_factory(200, {"videos": []})

        data = await client.get_json("http://localhost:5000/api/videos", params={"page": 1})

        assert data == {"videos": []}
        args, kwargs = session.request.call_args
        assert args == ("GET", "http://localhost:5000/api/videos")
        assert kwargs["headers"]["Authorization"] == "Bearer jwt"
        assert kwargs["timeout"] == 15.0
        assert kwargs["params"] == {"page": 1}

    @pytest.mark.asyncio
    async def test_auth_required_without_token(
        self, environment: EnvironmentConfig, session: Mock
    ) -> None:
        client = ApiClient(environment, token_provider=lambda: None, session=session)

        with pytest.raises(AuthenticationError, match="User not authenticated"):
            await client.post_json("http://x/api/videos/v1/like", {}, auth_required=True)
        session.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_server_errors_are_retried(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.side_effect = [
            response_factory(503, {"error": "busy"}),
            response_factory(200, {"ok": True}),
        ]

        assert await client.get_json("http://x/health") == {"ok": True}
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_retries_exhausted_raise_last_server_error(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.return_value = response_factory(500, {"error": "Database unavailable"})

        with pytest.raises(APIError, match="Database unavailable") as exc_info:
            await client.get_json("http://x/api/videos")

        assert exc_info.value.status_code == 500
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_no_retry_when_disabled(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.return_value = response_factory(502)

        with pytest.raises(APIError):
            await client.request("GET", "http://x/health", retry=False)
        assert session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_is_mapped(self, client: ApiClient, session: Mock) -> None:
        session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(APIError, match="Request timed out"):
            await client.get_json("http://x/api/videos")
        assert session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_connection_error_is_mapped(self, client: ApiClient, session: Mock) -> None:
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(APIError, match="Network error"):
            await client.get_json("http://x/api/videos")

    @pytest.mark.asyncio
    async def test_other_request_errors_are_not_retried(self, client: ApiClient, session: Mock) -> None:
        session.request.side_effect = requests.exceptions.InvalidURL("bad url")

        with pytest.raises(APIError, match="Request failed"):
            await client.get_json("not a url")
        assert session.request.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_statuses(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock], status: int
    ) -> None:
        session.request.return_value = response_factory(status, {"error": "Invalid token"})

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await client.get_json("http://x/api/users/profile")
        assert session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_client_error_uses_message_field(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.return_value = response_factory(400, {"message": "Bad page"})

        with pytest.raises(APIError, match="Bad page") as exc_info:
            await client.get_json("http://x/api/videos")
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_empty_body_decodes_to_none(
        self, client: ApiClient, session: Mock, response_factory: Callable[..., Mock]
    ) -> None:
        session.request.return_value = response_factory(204)
        assert await client.delete_json("http://x/api/videos/v1") is None

    def test_invalid_json(self) -> None:
        response = Mock()
        response.content = b"<html>"
        response.status_code = 200
        response.url = "http://x"
        response.json.side_effect = ValueError("bad json")

        with pytest.raises(APIError, match="Invalid JSON"):
            ApiClient.decode_json(response)

    def test_close(self, client: ApiClient, session: Mock) -> None:
        client.close()
        session.close.assert_called_once()
