import os
import shutil
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from gslaunch.logging import Logger
from .config import DisplayConfig
from .desktop import DesktopVariant

logger = Logger(__name__)

UNSUPPORTED_REASON = "no supported display detection method (need a KDE or GNOME session, or xrandr)"

REQUIREMENTS: Dict[DesktopVariant, List[str]] = {
    DesktopVariant.KDE: [DisplayConfig.JSON_TOOL, DisplayConfig.KSCREEN_TOOL],
    DesktopVariant.GNOME: [DisplayConfig.JSON_TOOL, DisplayConfig.XRANDR_TOOL],
    DesktopVariant.GENERIC_X11: [DisplayConfig.JSON_TOOL, DisplayConfig.XRANDR_TOOL],
}


@dataclass
class PreflightResult:
    variant: DesktopVariant
    missing: List[str] = field(default_factory=list)
    supported: bool = True

    @property
    def ok(self) -> bool:
        return self.supported and not self.missing

    def __bool__(self) -> bool:
        return self.ok


class DependencyChecker:
    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 which: Optional[Callable[[str], Optional[str]]] = None):
        self.environ = os.environ if environ is None else environ
        self.which = which or shutil.which

    def check_exists(self, binary: str) -> bool:
        return self.which(binary) is not None

    def validate(self, variant: DesktopVariant, tools: Optional[List[str]] = None) -> PreflightResult:
        if variant not in REQUIREMENTS:
            logger.error(UNSUPPORTED_REASON)
            return PreflightResult(variant, supported=False)

        missing: List[str] = []
        if variant is DesktopVariant.KDE and not self.environ.get(DisplayConfig.KDE_SESSION_ENV):
            missing.append(f"{DisplayConfig.KDE_SESSION_ENV} (KDE session marker)")
        required = REQUIREMENTS[variant] if tools is None else tools
        missing.extend(b for b in required if not self.check_exists(b))

        if missing:
            for dep in missing:
                logger.error("%s display detection requires %s, which is missing", variant.value, dep)
            pkgs = [DisplayConfig.PACKAGE_MAP[b] for b in missing if b in DisplayConfig.PACKAGE_MAP]
            if pkgs:
                logger.error("Suggested install (Arch): sudo pacman -S --needed %s", " ".join(sorted(set(pkgs))))
            return PreflightResult(variant, missing)

        logger.debug("%s display detection dependencies present", variant.value)
        return PreflightResult(variant)
