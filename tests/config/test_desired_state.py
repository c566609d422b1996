from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from wugrecon.adapters.wug import decode_device, decode_monitor, encode_device, encode_monitor
from wugrecon.config import (
    ConfigurationError,
    dump_record,
    load_device,
    load_monitor,
    parse_device,
)
from wugrecon.domain.records import (
    ActiveMonitorParameters,
    DeviceRecord,
    Group,
    Interface,
    MonitorRecord,
)

if TYPE_CHECKING:
    from pathlib import Path

DEVICE_TOML = """
name = "core-switch-1"
options = "L2"
subroles = ["Core"]
device_type = "Switch"
primary_role = "Switch"
os = "IOS"
brand = "Cisco"

[[groups]]
name = "Switches"
parents = ["Network", "Core"]

[[interfaces]]
network_address = "10.0.0.1"
network_name = "core-switch-1.example.net"
default = true

[[credentials]]
type = "SNMPv2"
name = "public-ro"

[[active_monitors]]
name = "Ping"
critical = true
polling_order = 1

[[performance_monitors]]
name = "CPU Utilization"
"""


def test_load_device_from_toml(tmp_path: Path, device_record: DeviceRecord) -> None:
    path = tmp_path / "core-switch-1.toml"
    path.write_text(DEVICE_TOML, encoding="utf-8")

    assert load_device(path) == device_record


def test_load_device_from_json(tmp_path: Path) -> None:
    path = tmp_path / "device.json"
    path.write_text(
        json.dumps(
            {
                "name": "edge-router",
                "options": "Basic",
                "groups": [{"name": "Routers"}],
                "interfaces": [
                    {"network_address": "10.0.1.1", "network_name": "edge"},
                    {"network_address": "10.0.1.1", "network_name": "edge"},
                ],
            }
        ),
        encoding="utf-8",
    )

    record = load_device(path)

    assert record.options == "basic"
    assert record.groups == (Group(name="Routers"),)
    assert record.interfaces == frozenset(
        {Interface(network_address="10.0.1.1", network_name="edge")}
    )


def test_load_device_rejects_unknown_option(tmp_path: Path) -> None:
    path = tmp_path / "device.json"
    path.write_text('{"name": "x", "options": "l3"}', encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid device definition"):
        load_device(path)


def test_load_device_requires_name(tmp_path: Path) -> None:
    path = tmp_path / "device.json"
    path.write_text('{"options": "l2"}', encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_device(path)


def test_load_monitor_from_json(tmp_path: Path) -> None:
    path = tmp_path / "monitor.json"
    path.write_text(
        json.dumps(
            {
                "device_id": "42",
                "type": "Active",
                "monitor_type_name": "Ping",
                "active": {"critical_order": 1, "interface_id": 7},
            }
        ),
        encoding="utf-8",
    )

    assert load_monitor(path) == MonitorRecord(
        device_id="42",
        type="active",
        monitor_type_name="Ping",
        active=ActiveMonitorParameters(critical_order=1, interface_id=7),
    )


def test_load_monitor_rejects_unknown_type(tmp_path: Path) -> None:
    path = tmp_path / "monitor.json"
    path.write_text('{"device_id": "42", "type": "passive"}', encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid monitor definition"):
        load_monitor(path)


@pytest.mark.parametrize(
    ("filename", "content", "message"),
    [
        ("device.yaml", "name: x", "Unsupported desired-state format"),
        ("device.json", "{broken", "Invalid JSON"),
        ("device.toml", "name = ", "Invalid TOML"),
        ("device.json", '["not", "an", "object"]', "Expected a table/object"),
    ],
)
def test_read_document_errors(tmp_path: Path, filename: str, content: str, message: str) -> None:
    path = tmp_path / filename
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        load_device(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read"):
        load_device(tmp_path / "absent.json")


def test_dump_record_renders_json(device_record: DeviceRecord) -> None:
    rendered = json.loads(dump_record(device_record))

    assert rendered["name"] == "core-switch-1"
    assert rendered["groups"] == [{"name": "Switches", "parents": ["Network", "Core"]}]
    assert rendered["credentials"] == [{"type": "SNMPv2", "name": "public-ro"}]


def test_blank_optional_text_is_unset_and_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "device.json"
    path.write_text(
        json.dumps(
            {
                "name": "web-1",
                "options": "basic",
                "os": "",
                "groups": [{"name": "Web"}],
                "interfaces": [{"network_address": "10.0.2.1", "network_name": "web-1"}],
                "active_monitors": [{"name": "HTTP", "argument": " -p 8080 ", "comment": ""}],
            }
        ),
        encoding="utf-8",
    )

    record = load_device(path)

    (monitor,) = record.active_monitors
    assert monitor.argument == " -p 8080 "
    assert monitor.comment is None
    assert record.os is None
    assert decode_device(encode_device(record)) == record


def test_blank_monitor_comment_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "monitor.json"
    path.write_text(
        json.dumps(
            {"device_id": "42", "type": "active", "active": {"comment": "  ", "argument": " x "}}
        ),
        encoding="utf-8",
    )

    record = load_monitor(path)

    assert record.active == ActiveMonitorParameters(argument=" x ")
    assert decode_monitor(encode_monitor(record), device_id="42") == record


_VALID_DEVICE: dict[str, object] = {
    "name": "core-switch-1",
    "options": "l2",
    "groups": [{"name": "Switches", "parents": ["Network"]}],
    "interfaces": [{"network_address": "10.0.0.1", "network_name": "core"}],
    "credentials": [{"type": "SNMPv2", "name": "public-ro"}],
    "active_monitors": [{"name": "Ping"}],
}


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("name", " "),
        ("groups", []),
        ("interfaces", []),
        ("groups", [{"name": "Switches", "parents": [""]}]),
        ("interfaces", [{"network_address": "10.0.0.1", "network_name": ""}]),
        ("interfaces", [{"network_address": "", "network_name": "core"}]),
        ("credentials", [{"type": " ", "name": "public-ro"}]),
        ("active_monitors", [{"name": ""}]),
    ],
)
def test_parse_device_rejects_missing_required_values(key: str, value: object) -> None:
    data = {**_VALID_DEVICE, key: value}

    with pytest.raises(ConfigurationError, match="Invalid device definition"):
        parse_device(data)


def test_parsed_device_round_trips() -> None:
    record = parse_device(_VALID_DEVICE)

    assert decode_device(encode_device(record)) == record
