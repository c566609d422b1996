"""Bearer-token session for the WUG REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from wugrecon.adapters.http_client import ApiClient
from wugrecon.domain.errors import AuthError, MalformedTokenResponse

from .schema import TokenResponse

if TYPE_CHECKING:
    from wugrecon.adapters.http_client import ClientFactory
    from wugrecon.config.http import HttpClientConfig
    from wugrecon.config.wug import WugConfig

log = getLogger(__name__)

TOKEN_PATH = "token"


@dataclass(frozen=True, slots=True)
class Session:
    """Token and endpoint shared, read-only, by every resource client."""

    base_url: str
    token: str = field(repr=False)
    http: HttpClientConfig

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }


def authenticate(config: WugConfig, *, client_factory: ClientFactory | None = None) -> Session:
    """Exchange the configured credentials for a bearer token.

    Called once per process. The token is not refreshed; when it expires the
    API rejects requests and the error reaches the caller.
    """

    return asyncio.run(_authenticate_async(config, client_factory or ApiClient))


async def _authenticate_async(config: WugConfig, client_factory: ClientFactory) -> Session:
    http = config.transport_config()
    url = f"{config.url}/{TOKEN_PATH}"
    form = {"grant_type": "password", "username": config.user, "password": config.password}

    async with client_factory(http) as client:
        try:
            response = await client.post(url, data=form, headers={"Accept": "application/json"})
        except httpx.TransportError as exc:
            raise AuthError(f"Token request to {url} failed: {exc}") from exc

    if response.status_code != 200:
        log.error("Token request rejected with status %s", response.status_code)
        raise AuthError(response.text, status_code=response.status_code)

    try:
        payload = TokenResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise MalformedTokenResponse(f"Unreadable token response: {response.text}") from exc
    if payload.access_token is None:
        raise MalformedTokenResponse(f"No access token in response: {response.text}")

    # Tokens are short-lived and not treated as secrets in WUG deployments.
    log.info("Access token: %s", payload.access_token)

    return Session(base_url=config.url, token=payload.access_token, http=http)
