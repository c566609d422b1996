from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from tests.support.wug import BASE_URL, json_response, make_client_factory
from wugrecon.adapters.wug import authenticate
from wugrecon.config.http import HttpClientConfig  # noqa: TC001
from wugrecon.config.wug import WugConfig
from wugrecon.domain.errors import AuthError, MalformedTokenResponse


@pytest.fixture
def config() -> WugConfig:
    return WugConfig(url=f"{BASE_URL}/", user="admin", password="secret")


def test_authenticate_exchanges_credentials_for_token(config: WugConfig) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return json_response(
            200, {"access_token": "abc", "token_type": "bearer", "expires_in": 86400}
        )

    session = authenticate(config, client_factory=make_client_factory(handler))

    assert session.token == "abc"
    assert session.base_url == BASE_URL
    assert session.headers()["Authorization"] == "Bearer abc"
    assert session.url("devices/42") == f"{BASE_URL}/devices/42"

    (request,) = requests
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/token"
    form = parse_qs(request.content.decode())
    assert form == {"grant_type": ["password"], "username": ["admin"], "password": ["secret"]}


def test_authenticate_rejected_credentials(config: WugConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid_grant")

    with pytest.raises(AuthError) as excinfo:
        authenticate(config, client_factory=make_client_factory(handler))

    assert excinfo.value.status_code == 401
    assert "invalid_grant" in str(excinfo.value)
    assert not isinstance(excinfo.value, MalformedTokenResponse)


@pytest.mark.parametrize(
    "body",
    [b"<html>maintenance</html>", b'{"token_type": "bearer"}', b'{"access_token": ""}'],
)
def test_authenticate_malformed_token_response(config: WugConfig, body: bytes) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    with pytest.raises(MalformedTokenResponse):
        authenticate(config, client_factory=make_client_factory(handler))


def test_authenticate_transport_failure(config: WugConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthError) as excinfo:
        authenticate(config, client_factory=make_client_factory(handler))

    assert excinfo.value.status_code is None


def test_authenticate_can_skip_tls_verification() -> None:
    config = WugConfig(url=BASE_URL, user="admin", password="secret", allow_unverified_ssl=True)
    seen: list[HttpClientConfig] = []

    def handler(_: httpx.Request) -> httpx.Response:
        return json_response(200, {"access_token": "abc"})

    session = authenticate(config, client_factory=make_client_factory(handler, seen_configs=seen))

    assert [cfg.verify_tls for cfg in seen] == [False]
    assert session.http.verify_tls is False


def test_session_repr_hides_token(config: WugConfig) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return json_response(200, {"access_token": "very-secret-token"})

    session = authenticate(config, client_factory=make_client_factory(handler))

    assert "very-secret-token" not in repr(session)
