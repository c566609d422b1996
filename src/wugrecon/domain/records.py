"""Desired-state records for the managed WhatsUp Gold resources.

Records are immutable. Ordered attributes are tuples, order-insensitive
collections of sub-records are frozensets so that two records built from the
same configuration compare equal regardless of the order the server returns
their members in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

type TemplateOption = Literal["l2", "basic"]
type MonitorKind = Literal["active", "performance"]


class ResourceKind(StrEnum):
    DEVICE = "device"
    MONITOR = "monitor"


@dataclass(frozen=True, slots=True)
class Group:
    """Leaf group the device is added to, with its parent chain (root first)."""

    name: str
    parents: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Interface:
    network_address: str
    network_name: str
    default: bool = False
    poll_using_network_name: bool = False


@dataclass(frozen=True, slots=True)
class Credential:
    type: str
    name: str


@dataclass(frozen=True, slots=True)
class ActiveMonitorAssignment:
    name: str
    argument: str | None = None
    comment: str | None = None
    critical: bool = False
    polling_order: int | None = None


@dataclass(frozen=True, slots=True)
class PerformanceMonitorAssignment:
    name: str


@dataclass(frozen=True, slots=True)
class DeviceRecord:
    """A device together with the template it is created from."""

    name: str
    options: TemplateOption
    groups: tuple[Group, ...] = ()
    interfaces: frozenset[Interface] = frozenset()
    credentials: frozenset[Credential] = frozenset()
    active_monitors: frozenset[ActiveMonitorAssignment] = frozenset()
    performance_monitors: frozenset[PerformanceMonitorAssignment] = frozenset()
    device_type: str | None = None
    snmp_oid: str | None = None
    primary_role: str | None = None
    subroles: tuple[str, ...] = ()
    os: str | None = None
    brand: str | None = None
    action_policy: str | None = None


@dataclass(frozen=True, slots=True)
class ActiveMonitorParameters:
    critical_order: int | None = None
    action_policy_name: str | None = None
    action_policy_id: str | None = None
    comment: str | None = None
    argument: str | None = None
    polling_interval_seconds: int | None = None
    interface_id: int | None = None


@dataclass(frozen=True, slots=True)
class PerformanceMonitorParameters:
    polling_interval_minutes: int | None = None


@dataclass(frozen=True, slots=True)
class MonitorRecord:
    """A monitor assigned to an existing device.

    ``enabled`` and ``is_global`` are reported by the server; they may be left
    unset in the desired state and are filled in on read.
    """

    device_id: str
    type: MonitorKind
    monitor_type_class_id: str | None = None
    monitor_type_id: str | None = None
    monitor_type_name: str | None = None
    active: ActiveMonitorParameters | None = None
    performance: PerformanceMonitorParameters | None = None
    enabled: bool | None = None
    is_global: bool | None = None


@dataclass(frozen=True, slots=True)
class MonitorTypeMatch:
    """Result of a monitor-type search. Not a managed resource."""

    type: MonitorKind
    search: str
    class_id: str | None
    monitor_name: str | None
    monitor_id: str | None


type DesiredRecord = DeviceRecord | MonitorRecord
