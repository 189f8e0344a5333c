"""Desktop session classification."""

import os
import shutil
from enum import Enum
from typing import Callable, Mapping, Optional

from .config import DisplayConfig


class DesktopVariant(Enum):
    KDE = "kde"
    GNOME = "gnome"
    GENERIC_X11 = "x11"
    UNKNOWN = "unknown"


def _is_gnome(value: str) -> bool:
    return DisplayConfig.GNOME_DESKTOP in value.split(":")


def detect(environ: Optional[Mapping[str, str]] = None,
           which: Optional[Callable[[str], Optional[str]]] = None) -> DesktopVariant:
    env = os.environ if environ is None else environ
    which = which or shutil.which

    if env.get(DisplayConfig.KDE_SESSION_ENV):
        return DesktopVariant.KDE

    if any(_is_gnome(env.get(key, "")) for key in DisplayConfig.DESKTOP_ENVS):
        return DesktopVariant.GNOME

    if which(DisplayConfig.XRANDR_TOOL):
        return DesktopVariant.GENERIC_X11

    return DesktopVariant.UNKNOWN
