"""Translate between desired-state records and WUG wire payloads.

All functions here are pure. Field renaming lives in the pydantic aliases of
``schema``; this module handles nesting, collection shapes and the fields the
API represents as strings although they are numbers or booleans.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from wugrecon.domain.errors import MappingError
from wugrecon.domain.records import (
    ActiveMonitorAssignment,
    ActiveMonitorParameters,
    Credential,
    DeviceRecord,
    Group,
    Interface,
    MonitorRecord,
    MonitorTypeMatch,
    PerformanceMonitorAssignment,
    PerformanceMonitorParameters,
)

from .schema import (
    DeviceTemplate,
    DeviceTemplateBatch,
    MonitorActiveParameters,
    MonitorPerformanceParameters,
    MonitorTemplate,
    TemplateActiveMonitor,
    TemplateCredential,
    TemplateInterface,
    TemplatePerformanceMonitor,
    TemplateReferenceName,
    parse_payload,
)

if TYPE_CHECKING:
    from wugrecon.domain.records import MonitorKind, TemplateOption

    from .schema import MonitorSearchEntry


# Scalar coercion


def _int_to_wire(value: int | None) -> str | None:
    return None if value is None else str(value)


def _int_from_wire(value: str | int | None, field: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MappingError(f"Expected a number for {field}, got {value!r}")
    if isinstance(value, int):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise MappingError(f"Expected a number for {field}, got {value!r}") from None


def _bool_to_wire(value: bool) -> str:
    return "true" if value else "false"


def _bool_from_wire(value: str | bool | None, field: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized in {"false", ""}:
        return False
    raise MappingError(f"Expected a boolean for {field}, got {value!r}")


def _require(value: str | None, field: str) -> str:
    if value is None:
        raise MappingError(f"Missing required field {field}")
    return value


# Device: record -> wire


def device_to_template(record: DeviceRecord) -> DeviceTemplate:
    return DeviceTemplate(
        display_name=record.name,
        interfaces=[_interface_to_wire(iface) for iface in record.interfaces],
        groups=[
            TemplateReferenceName(name=group.name, parents=list(group.parents))
            for group in record.groups
        ],
        credentials=[
            TemplateCredential(credential_type=cred.type, credential=cred.name)
            for cred in record.credentials
        ],
        active_monitors=[_active_monitor_to_wire(mon) for mon in record.active_monitors],
        performance_monitors=[
            TemplatePerformanceMonitor(name=mon.name) for mon in record.performance_monitors
        ],
        device_type=record.device_type,
        snmp_oid=record.snmp_oid,
        primary_role=record.primary_role,
        sub_roles=list(record.subroles),
        os=record.os,
        brand=record.brand,
        action_policy=record.action_policy,
    )


def device_to_wire(record: DeviceRecord) -> DeviceTemplateBatch:
    """Build the bulk template request that creates exactly one device."""

    return DeviceTemplateBatch(options=[record.options], templates=[device_to_template(record)])


def encode_device(record: DeviceRecord) -> bytes:
    return device_to_wire(record).encode_wire()


def _interface_to_wire(iface: Interface) -> TemplateInterface:
    return TemplateInterface(
        default_interface=iface.default,
        poll_using_network_name=iface.poll_using_network_name,
        network_address=iface.network_address,
        network_name=iface.network_name,
    )


def _active_monitor_to_wire(monitor: ActiveMonitorAssignment) -> TemplateActiveMonitor:
    return TemplateActiveMonitor(
        name=monitor.name,
        argument=monitor.argument,
        comment=monitor.comment,
        is_critical=_bool_to_wire(monitor.critical),
        polling_order=_int_to_wire(monitor.polling_order),
    )


# Device: wire -> record


def device_from_template(template: DeviceTemplate, *, options: TemplateOption) -> DeviceRecord:
    """Return the record described by ``template``.

    The template read back from the server does not carry the options it was
    applied with, so the caller supplies them.
    """

    return DeviceRecord(
        name=_require(template.display_name, "displayName"),
        options=options,
        groups=tuple(_group_from_wire(group) for group in template.groups or ()),
        interfaces=frozenset(_interface_from_wire(iface) for iface in template.interfaces or ()),
        credentials=frozenset(
            Credential(
                type=_require(cred.credential_type, "credentials.credentialType"),
                name=_require(cred.credential, "credentials.credential"),
            )
            for cred in template.credentials or ()
        ),
        active_monitors=frozenset(
            _active_monitor_from_wire(mon) for mon in template.active_monitors or ()
        ),
        performance_monitors=frozenset(
            PerformanceMonitorAssignment(name=_require(mon.name, "performanceMonitors.name"))
            for mon in template.performance_monitors or ()
        ),
        device_type=template.device_type,
        snmp_oid=template.snmp_oid,
        primary_role=template.primary_role,
        subroles=tuple(template.sub_roles or ()),
        os=template.os,
        brand=template.brand,
        action_policy=template.action_policy,
    )


def device_from_wire(batch: DeviceTemplateBatch) -> DeviceRecord:
    if len(batch.templates) != 1:
        raise MappingError(f"Expected exactly one device template, got {len(batch.templates)}")
    if len(batch.options) != 1:
        raise MappingError(f"Expected exactly one template option, got {len(batch.options)}")
    # Membership is checked when desired state is loaded, not here.
    options = cast("TemplateOption", batch.options[0])
    return device_from_template(batch.templates[0], options=options)


def decode_device(raw: bytes | str) -> DeviceRecord:
    return device_from_wire(parse_payload(DeviceTemplateBatch, raw))


def _group_from_wire(group: TemplateReferenceName) -> Group:
    return Group(name=_require(group.name, "groups.name"), parents=tuple(group.parents or ()))


def _interface_from_wire(iface: TemplateInterface) -> Interface:
    return Interface(
        network_address=_require(iface.network_address, "interfaces.networkAddress"),
        network_name=_require(iface.network_name, "interfaces.networkName"),
        default=bool(iface.default_interface),
        poll_using_network_name=bool(iface.poll_using_network_name),
    )


def _active_monitor_from_wire(monitor: TemplateActiveMonitor) -> ActiveMonitorAssignment:
    return ActiveMonitorAssignment(
        name=_require(monitor.name, "activeMonitors.name"),
        argument=monitor.argument,
        comment=monitor.comment,
        critical=_bool_from_wire(monitor.is_critical, "activeMonitors.isCritical"),
        polling_order=_int_from_wire(monitor.polling_order, "activeMonitors.pollingOrder"),
    )


# Monitor


def monitor_to_wire(record: MonitorRecord) -> MonitorTemplate:
    active = record.active
    performance = record.performance
    return MonitorTemplate(
        type=record.type,
        monitor_type_class_id=record.monitor_type_class_id,
        monitor_type_id=record.monitor_type_id,
        monitor_type_name=record.monitor_type_name,
        active=(
            MonitorActiveParameters(
                critical_order=active.critical_order,
                action_policy_name=active.action_policy_name,
                action_policy_id=active.action_policy_id,
                comment=active.comment,
                argument=active.argument,
                polling_interval_seconds=active.polling_interval_seconds,
                interface_id=_int_to_wire(active.interface_id),
            )
            if active is not None
            else None
        ),
        performance=(
            MonitorPerformanceParameters(
                polling_interval_minutes=performance.polling_interval_minutes
            )
            if performance is not None
            else None
        ),
        enabled=record.enabled,
        is_global=record.is_global,
    )


def encode_monitor(record: MonitorRecord) -> bytes:
    return monitor_to_wire(record).encode_wire()


def monitor_from_wire(template: MonitorTemplate, *, device_id: str) -> MonitorRecord:
    """Return the record described by ``template``.

    The owning device is part of the URL, not of the payload.
    """

    active = template.active
    performance = template.performance
    return MonitorRecord(
        device_id=device_id,
        type=cast("MonitorKind", _require(template.type, "type")),
        monitor_type_class_id=template.monitor_type_class_id,
        monitor_type_id=template.monitor_type_id,
        monitor_type_name=template.monitor_type_name,
        active=(
            ActiveMonitorParameters(
                critical_order=active.critical_order,
                action_policy_name=active.action_policy_name,
                action_policy_id=active.action_policy_id,
                comment=active.comment,
                argument=active.argument,
                polling_interval_seconds=active.polling_interval_seconds,
                interface_id=_int_from_wire(active.interface_id, "active.interfaceId"),
            )
            if active is not None
            else None
        ),
        performance=(
            PerformanceMonitorParameters(
                polling_interval_minutes=performance.polling_interval_minutes
            )
            if performance is not None
            else None
        ),
        enabled=template.enabled,
        is_global=template.is_global,
    )


def decode_monitor(raw: bytes | str, *, device_id: str) -> MonitorRecord:
    return monitor_from_wire(parse_payload(MonitorTemplate, raw), device_id=device_id)


# Monitor library


def monitor_type_from_search(
    entry: MonitorSearchEntry, *, kind: MonitorKind, search: str
) -> MonitorTypeMatch:
    info = entry.monitor_type_info
    return MonitorTypeMatch(
        type=kind,
        search=search,
        class_id=info.class_id if info is not None else None,
        monitor_name=entry.name,
        monitor_id=entry.monitor_id,
    )
