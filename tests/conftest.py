from __future__ import annotations

import pytest

from tests.support.wug import core_switch, make_session, ping_monitor
from wugrecon.adapters.wug import Session
from wugrecon.domain.records import DeviceRecord, MonitorRecord  # noqa: TC001

WUG_ENV_VARS = (
    "WUG_URL",
    "WUG_USER",
    "WUG_PASSWORD",
    "WUG_ALLOW_UNVERIFIED_SSL",
    "WUG_RATE_LIMIT",
)


@pytest.fixture
def device_record() -> DeviceRecord:
    return core_switch()


@pytest.fixture
def monitor_record() -> MonitorRecord:
    return ping_monitor()


@pytest.fixture
def session() -> Session:
    return make_session()


@pytest.fixture
def wug_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in WUG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WUG_URL", "https://wug.example.net/api/v1/")
    monkeypatch.setenv("WUG_USER", "admin")
    monkeypatch.setenv("WUG_PASSWORD", "secret")
    return monkeypatch
