"""Tests for the GitHub OAuth client."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from oauth.github import GITHUB_TOKEN_URL, GitHubOAuthClient, TokenResponse

from conftest import CLIENT_ID, CLIENT_SECRET


def make_client(fake_github) -> GitHubOAuthClient:
    return GitHubOAuthClient(CLIENT_ID, CLIENT_SECRET, transport=fake_github.transport)


class TestAuthorizeUrl:
    """Tests for authorize_url()."""

    def test_points_at_github_with_client_id_and_scope(self, fake_github):
        url = make_client(fake_github).authorize_url()
        assert url == f"https://github.com/login/oauth/authorize?client_id={CLIENT_ID}&scope=repo%2Cuser"

    def test_client_id_is_url_encoded(self):
        url = GitHubOAuthClient("a b&c", "secret").authorize_url()
        query = parse_qs(urlparse(url).query)
        assert query == {"client_id": ["a b&c"], "scope": ["repo,user"]}


class TestExchangeCode:
    """Tests for exchange_code()."""

    @pytest.mark.asyncio
    async def test_posts_json_credentials(self, fake_github):
        await make_client(fake_github).exchange_code("abc")

        request = fake_github.requests[-1]
        assert request.method == "POST"
        assert str(request.url) == GITHUB_TOKEN_URL
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["Accept"] == "application/json"
        assert fake_github.last_body() == {
            "client_id": CLIENT_ID,
            "client_secret": CLIENT_SECRET,
            "code": "abc",
        }

    @pytest.mark.asyncio
    async def test_success_response(self, fake_github):
        fake_github.payload = {"access_token": "gho_123", "token_type": "bearer", "scope": "repo,user"}

        token = await make_client(fake_github).exchange_code("abc")

        assert token.is_error is False
        assert token.access_token == "gho_123"
        assert token.token_type == "bearer"

    @pytest.mark.asyncio
    async def test_error_response(self, fake_github):
        fake_github.payload = {
            "error": "bad_verification_code",
            "error_description": "The code passed is incorrect or expired.",
        }

        token = await make_client(fake_github).exchange_code("stale")

        assert token.is_error is True
        assert token.error == "bad_verification_code"
        assert token.error_message == "The code passed is incorrect or expired."

    @pytest.mark.asyncio
    async def test_error_status_body_is_still_parsed(self, fake_github):
        fake_github.status_code = 401
        fake_github.payload = {"error": "incorrect_client_credentials"}

        token = await make_client(fake_github).exchange_code("abc")

        assert token.error_message == "incorrect_client_credentials"

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, fake_github):
        fake_github.error = httpx.ConnectError("connection refused")

        with pytest.raises(httpx.ConnectError):
            await make_client(fake_github).exchange_code("abc")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, fake_github):
        fake_github.payload = "<html>rate limited</html>"

        with pytest.raises(ValueError):
            await make_client(fake_github).exchange_code("abc")

    @pytest.mark.asyncio
    async def test_non_object_json_raises(self, fake_github):
        fake_github.payload = ["not", "an", "object"]

        with pytest.raises(ValueError, match="expected a JSON object"):
            await make_client(fake_github).exchange_code("abc")


class TestTokenResponse:
    """Tests for TokenResponse defaults."""

    def test_token_type_defaults_to_bearer(self):
        assert TokenResponse({"access_token": "T"}).token_type == "bearer"
        assert TokenResponse({"access_token": "T", "token_type": ""}).token_type == "bearer"

    def test_error_message_falls_back_to_error_code(self):
        assert TokenResponse({"error": "access_denied"}).error_message == "access_denied"

    def test_empty_error_is_not_an_error(self):
        assert TokenResponse({"error": "", "access_token": "T"}).is_error is False
