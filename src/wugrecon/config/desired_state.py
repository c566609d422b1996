"""Load desired-state records from JSON or TOML files.

This is the only place where user input is validated. The records handed to
the reconciliation engine are always well-typed.
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, cast

from pydantic import TypeAdapter, ValidationError

from wugrecon.domain.records import DeviceRecord, MonitorRecord

from .errors import ConfigurationError

if TYPE_CHECKING:
    from os import PathLike

_DEVICE_ADAPTER: TypeAdapter[DeviceRecord] = TypeAdapter(DeviceRecord)
_MONITOR_ADAPTER: TypeAdapter[MonitorRecord] = TypeAdapter(MonitorRecord)

# Every device template names at least one group and one interface.
_REQUIRED_DEVICE_COLLECTIONS = ("groups", "interfaces")


def _blanks_to_none(value: object) -> object:
    """Replace whitespace-only strings, at any depth, with ``None``.

    The API does not distinguish an empty string from an absent value, so a
    blank optional field is unset and a blank required field fails validation.
    """

    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, Mapping):
        mapping = cast("Mapping[str, object]", value)
        return {key: _blanks_to_none(item) for key, item in mapping.items()}
    if isinstance(value, list):
        return [_blanks_to_none(item) for item in cast("list[object]", value)]
    return value


def _normalize(data: Mapping[str, object], key: str) -> dict[str, object]:
    normalized = cast("dict[str, object]", _blanks_to_none(data))
    value = normalized.get(key)
    if isinstance(value, str):
        normalized[key] = value.strip().lower()
    return normalized


def read_document(path: str | PathLike[str]) -> dict[str, object]:
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {source}: {exc}") from exc

    suffix = source.suffix.lower()
    try:
        if suffix == ".toml":
            document: object = tomllib.loads(text)
        elif suffix == ".json":
            document = json.loads(text)
        else:
            raise ConfigurationError(f"Unsupported desired-state format: {source.name}")
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid {suffix[1:].upper()} in {source}: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigurationError(f"Expected a table/object at the top of {source}")
    return cast(dict[str, object], document)


def parse_device(data: Mapping[str, object]) -> DeviceRecord:
    # Template options are matched case-insensitively.
    try:
        record = _DEVICE_ADAPTER.validate_python(_normalize(data, "options"))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid device definition: {exc}") from exc
    missing = [name for name in _REQUIRED_DEVICE_COLLECTIONS if not getattr(record, name)]
    if missing:
        missing_list = ", ".join(missing)
        raise ConfigurationError(f"Invalid device definition: {record.name} has no {missing_list}")
    return record


def parse_monitor(data: Mapping[str, object]) -> MonitorRecord:
    try:
        return _MONITOR_ADAPTER.validate_python(_normalize(data, "type"))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid monitor definition: {exc}") from exc


def load_device(path: str | PathLike[str]) -> DeviceRecord:
    return parse_device(read_document(path))


def load_monitor(path: str | PathLike[str]) -> MonitorRecord:
    return parse_monitor(read_document(path))


def dump_record(record: object) -> str:
    """Render a record (or lookup result) as indented JSON for display."""

    return TypeAdapter(type(record)).dump_json(record, indent=2).decode("utf-8")
