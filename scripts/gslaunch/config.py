"""Layered launcher configuration.

Each layer is a shell-style assignment list (``KEY=value`` or
``export KEY=value``). The profile layer is read first and the per-app
layer is merged over it key by key, the way a later assignment wins when
two files are sourced in turn. Nothing in a layer is executed; commands
only run through the ``PRE_LAUNCH`` and ``POST_LAUNCH`` hooks.
"""

import os
import re
import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set

from gslaunch.args import ArgumentSet
from gslaunch.errors import ConfigError
from gslaunch.logging import Logger

logger = Logger(__name__)

TRUTHY = {"1", "true", "yes", "on"}
KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
APP_ID_RE = re.compile(r"^AppId=(\d+)$")


class Profile(Enum):
    DEFAULT = "default"
    NO_COMPOSITOR = "nocompositor"
    COMPAT = "compat"


class LauncherConfig:
    APP_NAME = "gslaunch"

    # Environment signals
    CONFIG_DIR_ENV = "GSLAUNCH_CONFIG_DIR"
    DISABLE_ENV = "GSLAUNCH_DISABLE"
    COMPAT_ENV = "GSLAUNCH_COMPAT"
    GAMESCOPE_SESSION_ENV = "GAMESCOPE_WAYLAND_DISPLAY"
    APP_ID_ENVS = ("SteamAppId", "STEAM_COMPAT_APP_ID")

    # Layer files, relative to the config directory
    PROFILE_FILES = {
        Profile.DEFAULT: "gslaunch.conf",
        Profile.NO_COMPOSITOR: "nocompositor.conf",
        Profile.COMPAT: "compat.conf",
    }
    APPS_DIR = "apps"

    # Recognised keys
    ARGS_KEY = "GAMESCOPE_ARGS"
    BIN_KEY = "GAMESCOPE_BIN"
    AUTO_RESOLUTION_KEY = "AUTO_RESOLUTION"
    AUTO_HDR_KEY = "AUTO_HDR"
    AUTO_VRR_KEY = "AUTO_VRR"
    PRE_LAUNCH_KEY = "PRE_LAUNCH"
    POST_LAUNCH_KEY = "POST_LAUNCH"

    DEFAULT_GAMESCOPE_BIN = "gamescope"


def is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUTHY


@dataclass
class ConfigLayer:
    values: Dict[str, str] = field(default_factory=dict)
    exported: Set[str] = field(default_factory=set)
    sources: List[Path] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str, source: Optional[Path] = None) -> "ConfigLayer":
        layer = cls(sources=[source] if source else [])
        where = str(source) if source else "<config>"

        for lineno, line in enumerate(text.splitlines(), 1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                tokens = shlex.split(stripped, comments=True)
            except ValueError as e:
                logger.warning(f"{where}:{lineno}: skipping unparseable line ({e})")
                continue
            if not tokens:
                continue

            export = tokens[0] == "export"
            if export:
                tokens = tokens[1:]

            for token in tokens:
                key, sep, value = token.partition("=")
                if not KEY_RE.match(key) or (not sep and not export):
                    logger.warning(f"{where}:{lineno}: skipping malformed assignment {token!r}")
                    continue
                if sep:
                    layer.values[key] = value
                if export:
                    layer.exported.add(key)

        return layer

    @classmethod
    def load(cls, path: Path) -> "ConfigLayer":
        if not path.is_file():
            logger.debug(f"No config layer at {path}")
            return cls()
        try:
            text = path.read_text()
        except OSError as e:
            raise ConfigError(f"cannot read {path}: {e}")
        logger.debug(f"Loaded config layer {path}")
        return cls.parse(text, path)

    def merge(self, override: "ConfigLayer") -> "ConfigLayer":
        values = dict(self.values)
        values.update(override.values)
        return ConfigLayer(values, self.exported | override.exported, self.sources + override.sources)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def exports(self) -> Dict[str, str]:
        return {k: self.values[k] for k in sorted(self.exported) if k in self.values}


@dataclass
class ResolvedConfig:
    profile: Profile
    base_args: ArgumentSet
    app_id: Optional[str] = None
    gamescope_bin: str = LauncherConfig.DEFAULT_GAMESCOPE_BIN
    auto_resolution: bool = False
    auto_hdr: bool = False
    auto_vrr: bool = False
    pre_launch: Optional[str] = None
    post_launch: Optional[str] = None
    exports: Dict[str, str] = field(default_factory=dict)
    sources: List[Path] = field(default_factory=list)

    @property
    def auto_detect(self) -> bool:
        return self.auto_resolution or self.auto_hdr or self.auto_vrr

    @property
    def use_compositor(self) -> bool:
        return self.profile is not Profile.NO_COMPOSITOR


class ConfigResolver:
    def __init__(self, config_dir: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        self.config_dir = Path(config_dir) if config_dir else self.default_config_dir(self.environ)

    @staticmethod
    def default_config_dir(environ: Mapping[str, str]) -> Path:
        explicit = environ.get(LauncherConfig.CONFIG_DIR_ENV)
        if explicit:
            return Path(explicit).expanduser()
        xdg = environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path(environ.get("HOME") or Path.home()) / ".config"
        return base / LauncherConfig.APP_NAME

    def select_profile(self) -> Profile:
        if is_truthy(self.environ.get(LauncherConfig.DISABLE_ENV)):
            return Profile.NO_COMPOSITOR
        if self.environ.get(LauncherConfig.GAMESCOPE_SESSION_ENV):
            logger.info("Already running inside gamescope, launching without a nested compositor")
            return Profile.NO_COMPOSITOR
        if is_truthy(self.environ.get(LauncherConfig.COMPAT_ENV)):
            return Profile.COMPAT
        return Profile.DEFAULT

    def app_id(self, command: Sequence[str]) -> Optional[str]:
        for token in command:
            match = APP_ID_RE.match(token)
            if match:
                return match.group(1)
        for key in LauncherConfig.APP_ID_ENVS:
            value = (self.environ.get(key) or "").strip()
            if value and value != "0":
                return value
        if command:
            return Path(command[0]).stem or None
        return None

    def layer_path(self, profile: Profile) -> Path:
        return self.config_dir / LauncherConfig.PROFILE_FILES[profile]

    def app_layer_path(self, app_id: str) -> Optional[Path]:
        if not app_id or Path(app_id).name != app_id:
            return None
        return self.config_dir / LauncherConfig.APPS_DIR / f"{app_id}.conf"

    def resolve(self, command: Sequence[str], user_args: Optional[Sequence[str]] = None) -> ResolvedConfig:
        profile = self.select_profile()
        layer = ConfigLayer.load(self.layer_path(profile))

        app_id = self.app_id(command)
        app_path = self.app_layer_path(app_id) if app_id else None
        if app_path:
            layer = layer.merge(ConfigLayer.load(app_path))

        if user_args:
            logger.debug("Using gamescope arguments from the command line instead of configured defaults")
            base_args = ArgumentSet.parse(list(user_args))
        else:
            try:
                base_args = ArgumentSet.parse(layer.get(LauncherConfig.ARGS_KEY, ""))
            except ValueError as e:
                raise ConfigError(f"{LauncherConfig.ARGS_KEY}: {e}")

        resolved = ResolvedConfig(
            profile=profile,
            base_args=base_args,
            app_id=app_id,
            gamescope_bin=layer.get(LauncherConfig.BIN_KEY) or LauncherConfig.DEFAULT_GAMESCOPE_BIN,
            auto_resolution=is_truthy(layer.get(LauncherConfig.AUTO_RESOLUTION_KEY)),
            auto_hdr=is_truthy(layer.get(LauncherConfig.AUTO_HDR_KEY)),
            auto_vrr=is_truthy(layer.get(LauncherConfig.AUTO_VRR_KEY)),
            pre_launch=layer.get(LauncherConfig.PRE_LAUNCH_KEY) or None,
            post_launch=layer.get(LauncherConfig.POST_LAUNCH_KEY) or None,
            exports=layer.exports(),
            sources=layer.sources,
        )

        layers = ", ".join(str(p) for p in resolved.sources) or "none"
        logger.info(f"Profile {profile.value}, app {app_id or '-'}, config layers: {layers}")
        return resolved
