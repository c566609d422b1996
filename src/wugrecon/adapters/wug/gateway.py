"""Resource gateways: WUG clients and translators behind the domain port."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from wugrecon.domain.errors import MappingError, ResourceNotFound
from wugrecon.domain.ports import Observation

from .translator import (
    device_from_template,
    device_to_wire,
    monitor_from_wire,
    monitor_to_wire,
    monitor_type_from_search,
)

if TYPE_CHECKING:
    from wugrecon.domain.ports import Submission
    from wugrecon.domain.records import DeviceRecord, MonitorKind, MonitorRecord, MonitorTypeMatch

    from .client import DeviceClient, MonitorClient, MonitorLibraryClient
    from .schema import MonitorSearchEntry

log = getLogger(__name__)


@dataclass(slots=True)
class DeviceGateway:
    client: DeviceClient

    def submit(self, desired: DeviceRecord) -> Submission:
        return self.client.create(device_to_wire(desired))

    def observe(self, identifier: str, desired: DeviceRecord) -> Observation[DeviceRecord]:
        data = self.client.fetch(identifier).data
        if data is None or data.device_count != 1:
            return Observation(match_count=0 if data is None else data.device_count)
        if not data.templates:
            raise MappingError(f"Device {identifier} was reported without a template")
        record = device_from_template(data.templates[0], options=desired.options)
        return Observation(match_count=1, record=record)

    def remove(self, identifier: str, desired: DeviceRecord) -> None:
        del desired
        self.client.delete(identifier)


@dataclass(slots=True)
class MonitorGateway:
    client: MonitorClient

    def submit(self, desired: MonitorRecord) -> Submission:
        return self.client.create(desired.device_id, monitor_to_wire(desired))

    def observe(self, identifier: str, desired: MonitorRecord) -> Observation[MonitorRecord]:
        response = self.client.fetch(desired.device_id, identifier)
        count = response.match_count
        if count != 1 or response.data is None:
            return Observation(match_count=count)
        record = monitor_from_wire(response.data, device_id=desired.device_id)
        return Observation(match_count=1, record=record)

    def remove(self, identifier: str, desired: MonitorRecord) -> None:
        self.client.delete(desired.device_id, identifier)


def find_monitor_type(
    client: MonitorLibraryClient, *, kind: MonitorKind, search: str
) -> MonitorTypeMatch:
    """Look up a monitor type by search term.

    An entry whose name equals ``search`` (ignoring case) wins, so the result
    can differ from the entry the server ranks first. Without such an entry
    the first one is used.
    """

    response = client.search(kind=kind, search=search)
    data = response.data
    entries: list[MonitorSearchEntry] = []
    if data is not None:
        entries = data.active_monitors if kind == "active" else data.performance_monitors

    if (response.paging is not None and response.paging.size == 0) or not entries:
        raise ResourceNotFound(f"Found no monitor for {search}")

    wanted = search.strip().casefold()
    entry = next(
        (candidate for candidate in entries if (candidate.name or "").casefold() == wanted),
        entries[0],
    )
    if len(entries) > 1:
        log.debug("%d monitor types match %r, using %r", len(entries), search, entry.name)
    return monitor_type_from_search(entry, kind=kind, search=search)

