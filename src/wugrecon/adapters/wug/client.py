"""HTTP clients for the WUG device, monitor and monitor-library endpoints."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from wugrecon.adapters.http_client import ApiClient
from wugrecon.domain.errors import RemoteAPIError, ResourceNotFound
from wugrecon.domain.ports import Submission

from .schema import (
    CreateResponse,
    DeviceTemplateResponse,
    MonitorAssignmentResponse,
    MonitorSearchResponse,
    parse_payload,
)

if TYPE_CHECKING:
    from wugrecon.adapters.http_client import ClientFactory
    from wugrecon.domain.records import MonitorKind

    from .schema import DeviceTemplateBatch, MonitorTemplate
    from .session import Session

log = getLogger(__name__)

MONITOR_SEARCH_FLAGS = {
    "includeDeviceMonitors": "true",
    "includeSystemMonitors": "true",
    "includeCoreMonitors": "true",
}


def _segment(value: str) -> str:
    return quote(value, safe="")


class _WugClient:
    """Shared request handling: auth headers, status classification, no retries."""

    def __init__(self, *, session: Session, client_factory: ClientFactory | None = None) -> None:
        self._session = session
        self._client_factory = client_factory or ApiClient

    async def _perform_request(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        params: dict[str, str] | None = None,
        missing: str | None = None,
    ) -> httpx.Response:
        """Send one request and return the 200 response.

        When ``missing`` is given, a 404 raises ``ResourceNotFound`` with that
        description instead of ``RemoteAPIError``.
        """

        url = self._session.url(path)
        async with self._client_factory(self._session.http) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    content=content,
                    params=params,
                    headers=self._session.headers(),
                )
            except httpx.TransportError as exc:
                raise RemoteAPIError(f"{method} {url} failed: {exc}") from exc

        log.debug("%s %s -> %s", method, url, response.status_code)
        if response.status_code == 404 and missing is not None:
            raise ResourceNotFound(f"{missing}: {response.text}")
        if response.status_code != 200:
            log.error("WUG API error %s on %s %s", response.status_code, method, url)
            raise RemoteAPIError(response.text, status_code=response.status_code)
        return response

    async def _submit(self, method: str, path: str, body: bytes) -> Submission:
        response = await self._perform_request(method, path, content=body)
        created = parse_payload(CreateResponse, response.content)
        return Submission(identifier=created.result_id, raw=response.content)


class DeviceClient(_WugClient):
    def create(self, batch: DeviceTemplateBatch) -> Submission:
        return asyncio.run(self._submit("PATCH", "devices/-/config/template", batch.encode_wire()))

    def fetch(self, device_id: str) -> DeviceTemplateResponse:
        return asyncio.run(self._fetch_async(device_id))

    def delete(self, device_id: str) -> None:
        asyncio.run(
            self._perform_request(
                "DELETE", f"devices/{_segment(device_id)}", missing=f"Device {device_id}"
            )
        )

    async def _fetch_async(self, device_id: str) -> DeviceTemplateResponse:
        response = await self._perform_request(
            "GET",
            f"devices/{_segment(device_id)}/config/template",
            missing=f"Device {device_id}",
        )
        return parse_payload(DeviceTemplateResponse, response.content)


class MonitorClient(_WugClient):
    def create(self, device_id: str, template: MonitorTemplate) -> Submission:
        return asyncio.run(
            self._submit("POST", f"devices/{_segment(device_id)}/monitors/-", template.encode_wire())
        )

    def fetch(self, device_id: str, monitor_id: str) -> MonitorAssignmentResponse:
        return asyncio.run(self._fetch_async(device_id, monitor_id))

    def delete(self, device_id: str, monitor_id: str) -> None:
        asyncio.run(
            self._perform_request(
                "DELETE",
                f"devices/{_segment(device_id)}/monitors/{_segment(monitor_id)}",
                missing=f"Monitor {monitor_id} on device {device_id}",
            )
        )

    async def _fetch_async(self, device_id: str, monitor_id: str) -> MonitorAssignmentResponse:
        response = await self._perform_request(
            "GET",
            f"devices/{_segment(device_id)}/monitors/{_segment(monitor_id)}",
            missing=f"Monitor {monitor_id} on device {device_id}",
        )
        return parse_payload(MonitorAssignmentResponse, response.content)


class MonitorLibraryClient(_WugClient):
    """Read-only search over the monitor types known to the server."""

    def search(self, *, kind: MonitorKind, search: str) -> MonitorSearchResponse:
        return asyncio.run(self._search_async(kind=kind, search=search))

    async def _search_async(self, *, kind: MonitorKind, search: str) -> MonitorSearchResponse:
        params = {"type": kind, "search": search, **MONITOR_SEARCH_FLAGS}
        response = await self._perform_request("GET", "monitors/-", params=params)
        return parse_payload(MonitorSearchResponse, response.content)
