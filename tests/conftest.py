"""Pytest configuration and shared fixtures for gslaunch tests

Query tools are never executed: providers get a fake runner that returns
canned kscreen-doctor / xrandr / gsettings output, and a fake ``which``
that reports which binaries are installed.
"""

import json
import logging
from typing import Dict, Iterable, Optional, Sequence, Union

import pytest

from gslaunch.display.preflight import DependencyChecker

SESSION_ENVS = (
    "KDE_FULL_SESSION",
    "XDG_CURRENT_DESKTOP",
    "XDG_SESSION_DESKTOP",
    "GSLAUNCH_CONFIG_DIR",
    "GSLAUNCH_DISABLE",
    "GSLAUNCH_COMPAT",
    "GSLAUNCH_LOG_FILE",
    "GAMESCOPE_WAYLAND_DISPLAY",
    "SteamAppId",
    "STEAM_COMPAT_APP_ID",
)

XRANDR_OUTPUT = """\
Screen 0: minimum 320 x 200, current 4480 x 1440, maximum 16384 x 16384
DP-1 connected 2560x1440+1920+0 (normal left inverted right x axis y axis) 597mm x 336mm
   2560x1440    143.97*+ 119.99    59.95
   1920x1080     60.00
HDMI-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 527mm x 296mm
   1920x1080     60.00*+  50.00    59.94
   1280x720      60.00
DP-2 disconnected (normal left inverted right x axis y axis)
"""


def kscreen_output(name: str, priority: int, enabled: bool = True, width: int = 1920,
                   height: int = 1080, refresh: float = 60.0, hdr: bool = False, vrr: int = 0) -> dict:
    return {
        "name": name,
        "enabled": enabled,
        "priority": priority,
        "currentModeId": "2",
        "hdr": hdr,
        "vrrPolicy": vrr,
        "modes": [
            {"id": "1", "size": {"width": 1280, "height": 720}, "refreshRate": 60.0},
            {"id": "2", "size": {"width": width, "height": height}, "refreshRate": refresh},
        ],
    }


def kscreen_json(*outputs: dict) -> str:
    return json.dumps({"outputs": list(outputs)})


class FakeRunner:
    """Stands in for ``run_tool``: maps a command tuple to output or an exception."""

    def __init__(self, responses: Dict[tuple, Union[str, Exception]]):
        self.responses = responses
        self.calls = []

    def __call__(self, cmd: Sequence[str]) -> str:
        self.calls.append(tuple(cmd))
        response = self.responses[tuple(cmd)]
        if isinstance(response, Exception):
            raise response
        return response


def fake_which(installed: Iterable[str]):
    installed = set(installed)

    def which(name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in installed else None

    return which


def make_checker(installed: Iterable[str], environ: Optional[dict] = None) -> DependencyChecker:
    return DependencyChecker(environ=environ or {}, which=fake_which(installed))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's desktop session out of the tests"""
    for name in SESSION_ENVS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)


@pytest.fixture
def config_dir(tmp_path):
    path = tmp_path / "gslaunch"
    (path / "apps").mkdir(parents=True)
    return path
