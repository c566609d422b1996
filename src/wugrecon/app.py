"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from wugrecon.adapters.wug import (
    DeviceClient,
    DeviceGateway,
    MonitorClient,
    MonitorGateway,
    MonitorLibraryClient,
    authenticate,
    find_monitor_type,
)
from wugrecon.config.wug import get_wug_config
from wugrecon.domain.reconciliation import ReconciliationEngine
from wugrecon.domain.records import DeviceRecord, ResourceKind

if TYPE_CHECKING:
    from wugrecon.adapters.http_client import ClientFactory
    from wugrecon.adapters.wug import Session
    from wugrecon.config.wug import WugConfig
    from wugrecon.domain.reconciliation import ResourceInstance
    from wugrecon.domain.records import DesiredRecord, MonitorKind, MonitorRecord, MonitorTypeMatch

log = getLogger(__name__)


class Action(StrEnum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True)
class Reconcilers:
    """Engines for every managed kind, sharing one authenticated session."""

    devices: ReconciliationEngine[DeviceRecord]
    monitors: ReconciliationEngine[MonitorRecord]
    monitor_library: MonitorLibraryClient

    def engine_for(self, desired: DesiredRecord) -> ReconciliationEngine[DesiredRecord]:
        if isinstance(desired, DeviceRecord):
            return self.devices  # type: ignore[return-value]
        return self.monitors  # type: ignore[return-value]


def build_reconcilers(
    session: Session, *, client_factory: ClientFactory | None = None
) -> Reconcilers:
    return Reconcilers(
        devices=ReconciliationEngine(
            kind=ResourceKind.DEVICE,
            gateway=DeviceGateway(
                client=DeviceClient(session=session, client_factory=client_factory)
            ),
        ),
        monitors=ReconciliationEngine(
            kind=ResourceKind.MONITOR,
            gateway=MonitorGateway(
                client=MonitorClient(session=session, client_factory=client_factory)
            ),
        ),
        monitor_library=MonitorLibraryClient(session=session, client_factory=client_factory),
    )


def connect(
    config: WugConfig | None = None, *, client_factory: ClientFactory | None = None
) -> Reconcilers:
    """Authenticate once and return engines bound to the new session."""

    active_config = config or get_wug_config()
    log.info("Connecting to %s as %s", active_config.url, active_config.user)
    session = authenticate(active_config, client_factory=client_factory)
    return build_reconcilers(session, client_factory=client_factory)


def reconcile(
    action: Action,
    desired: DesiredRecord,
    *,
    identifier: str = "",
    reconcilers: Reconcilers | None = None,
) -> ResourceInstance[DesiredRecord]:
    """Run one lifecycle operation and return the resulting instance."""

    active = reconcilers or connect()
    engine = active.engine_for(desired)
    instance = engine.track(desired, identifier)
    log.info("Starting %s of %s %s", action, engine.kind, identifier or "(new)")

    match action:
        case Action.CREATE:
            engine.create(instance)
        case Action.READ:
            engine.read(instance)
        case Action.UPDATE:
            engine.update(instance)
        case Action.DELETE:
            engine.delete(instance)

    log.info(
        "Finished %s of %s: state=%s, id=%s",
        action,
        engine.kind,
        instance.state,
        instance.identifier or "-",
    )
    return instance


def lookup_monitor_type(
    kind: MonitorKind, search: str, *, reconcilers: Reconcilers | None = None
) -> MonitorTypeMatch:
    active = reconcilers or connect()
    return find_monitor_type(active.monitor_library, kind=kind, search=search)
