"""Pydantic models describing the WhatsUp Gold REST payloads."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from wugrecon.domain.errors import MappingError


def _blank_to_none(value: object) -> object:
    # Non-blank text is sent and read back verbatim, surrounding spaces included.
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _int_to_str(value: object) -> object:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
Identifier = Annotated[str | None, BeforeValidator(_int_to_str), BeforeValidator(_blank_to_none)]


class WugBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def encode_wire(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def parse_payload[M: BaseModel](model: type[M], raw: bytes | str) -> M:
    """Validate a raw JSON body, reporting any mismatch as ``MappingError``."""

    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise MappingError(f"Unexpected {model.__name__} payload: {exc}") from exc


# Device template


class TemplateInterface(WugBaseModel):
    default_interface: bool | None = Field(default=None, alias="defaultInterface")
    poll_using_network_name: bool | None = Field(default=None, alias="pollUsingNetworkName")
    network_address: OptionalText = Field(default=None, alias="networkAddress")
    network_name: OptionalText = Field(default=None, alias="networkName")


class TemplateReferenceName(WugBaseModel):
    name: OptionalText = None
    parents: list[str] | None = None


class TemplateCredential(WugBaseModel):
    credential_type: OptionalText = Field(default=None, alias="credentialType")
    credential: OptionalText = None


class TemplateActiveMonitor(WugBaseModel):
    name: OptionalText = None
    argument: OptionalText = None
    comment: OptionalText = None
    # Both are strings on the wire; older servers answer with native JSON types.
    is_critical: str | bool | None = Field(default=None, alias="isCritical")
    polling_order: str | int | None = Field(default=None, alias="pollingOrder")


class TemplatePerformanceMonitor(WugBaseModel):
    name: OptionalText = None


class DeviceTemplate(WugBaseModel):
    display_name: OptionalText = Field(default=None, alias="displayName")
    interfaces: list[TemplateInterface] | None = None
    groups: list[TemplateReferenceName] | None = None
    credentials: list[TemplateCredential] | None = None
    active_monitors: list[TemplateActiveMonitor] | None = Field(
        default=None, alias="activeMonitors"
    )
    performance_monitors: list[TemplatePerformanceMonitor] | None = Field(
        default=None, alias="performanceMonitors"
    )
    device_type: OptionalText = Field(default=None, alias="deviceType")
    snmp_oid: OptionalText = Field(default=None, alias="snmpOid")
    primary_role: OptionalText = Field(default=None, alias="primaryRole")
    sub_roles: list[str] | None = Field(default=None, alias="subRoles")
    os: OptionalText = None
    brand: OptionalText = None
    action_policy: OptionalText = Field(default=None, alias="actionPolicy")


class DeviceTemplateBatch(WugBaseModel):
    """Body of ``PATCH /devices/-/config/template``."""

    options: list[str] = Field(default_factory=list)
    templates: list[DeviceTemplate] = Field(default_factory=list["DeviceTemplate"])


class DeviceTemplateData(WugBaseModel):
    device_count: int = Field(default=0, alias="deviceCount")
    templates: list[DeviceTemplate] = Field(default_factory=list["DeviceTemplate"])


class DeviceTemplateResponse(WugBaseModel):
    """Body of ``GET /devices/{id}/config/template``."""

    data: DeviceTemplateData | None = None


# Creation results


class IdMapEntry(WugBaseModel):
    template_id: Identifier = Field(default=None, alias="templateId")
    result_id: Identifier = Field(default=None, alias="resultId")


class IdMapData(WugBaseModel):
    id_map: list[IdMapEntry] = Field(default_factory=list["IdMapEntry"], alias="idMap")


class CreateResponse(WugBaseModel):
    data: IdMapData | None = None

    @property
    def result_id(self) -> str:
        if self.data is None or not self.data.id_map:
            return ""
        return self.data.id_map[0].result_id or ""


# Monitor assignment


class Paging(WugBaseModel):
    size: int = 0


class MonitorActiveParameters(WugBaseModel):
    critical_order: int | None = Field(default=None, alias="criticalOrder")
    action_policy_name: OptionalText = Field(default=None, alias="actionPolicyName")
    action_policy_id: Identifier = Field(default=None, alias="actionPolicyId")
    comment: OptionalText = None
    argument: OptionalText = None
    polling_interval_seconds: int | None = Field(default=None, alias="pollingIntervalSeconds")
    interface_id: str | int | None = Field(default=None, alias="interfaceId")


class MonitorPerformanceParameters(WugBaseModel):
    polling_interval_minutes: int | None = Field(default=None, alias="pollingIntervalMinutes")


class MonitorTemplate(WugBaseModel):
    """Body of ``POST /devices/{deviceId}/monitors/-``."""

    type: OptionalText = None
    monitor_type_class_id: Identifier = Field(default=None, alias="monitorTypeClassId")
    monitor_type_id: Identifier = Field(default=None, alias="monitorType")
    monitor_type_name: OptionalText = Field(default=None, alias="monitorTypeName")
    active: MonitorActiveParameters | None = None
    performance: MonitorPerformanceParameters | None = None
    enabled: bool | None = None
    is_global: bool | None = Field(default=None, alias="isGlobal")


class MonitorAssignment(MonitorTemplate):
    id: Identifier = None
    description: OptionalText = None


class MonitorAssignmentResponse(WugBaseModel):
    """Body of ``GET /devices/{deviceId}/monitors/{id}``."""

    data: MonitorAssignment | None = None
    paging: Paging | None = None

    @property
    def match_count(self) -> int:
        if self.paging is not None:
            return self.paging.size
        return 0 if self.data is None else 1


# Monitor library search


class MonitorTypeInfo(WugBaseModel):
    class_id: Identifier = Field(default=None, alias="classId")
    base_type: OptionalText = Field(default=None, alias="baseType")


class MonitorSearchEntry(WugBaseModel):
    monitor_id: Identifier = Field(default=None, alias="monitorId")
    name: OptionalText = None
    description: OptionalText = None
    id: Identifier = None
    monitor_type_info: MonitorTypeInfo | None = Field(default=None, alias="monitorTypeInfo")


class MonitorSearchData(WugBaseModel):
    active_monitors: list[MonitorSearchEntry] = Field(
        default_factory=list["MonitorSearchEntry"], alias="activeMonitors"
    )
    performance_monitors: list[MonitorSearchEntry] = Field(
        default_factory=list["MonitorSearchEntry"], alias="performanceMonitors"
    )


class MonitorSearchResponse(WugBaseModel):
    """Body of ``GET /monitors/-``."""

    data: MonitorSearchData | None = None
    paging: Paging | None = None


class TokenResponse(WugBaseModel):
    access_token: OptionalText = None
    token_type: OptionalText = None
    expires_in: int | None = None
