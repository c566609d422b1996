"""WhatsUp Gold REST adapter."""

from __future__ import annotations

from .client import DeviceClient, MonitorClient, MonitorLibraryClient
from .gateway import DeviceGateway, MonitorGateway, find_monitor_type
from .session import Session, authenticate
from .translator import (
    decode_device,
    decode_monitor,
    device_from_template,
    device_to_wire,
    encode_device,
    encode_monitor,
    monitor_from_wire,
    monitor_to_wire,
)

__all__ = [
    "DeviceClient",
    "DeviceGateway",
    "MonitorClient",
    "MonitorGateway",
    "MonitorLibraryClient",
    "Session",
    "authenticate",
    "decode_device",
    "decode_monitor",
    "device_from_template",
    "device_to_wire",
    "encode_device",
    "encode_monitor",
    "find_monitor_type",
    "monitor_from_wire",
    "monitor_to_wire",
]
