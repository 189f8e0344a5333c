from typing import Dict, Optional, Type

from gslaunch.errors import UnsupportedEnvironmentError
from .desktop import DesktopVariant
from .kde import KScreenProvider
from .preflight import UNSUPPORTED_REASON, DependencyChecker
from .strategies import DisplayProvider, Runner
from .xrandr import GnomeProvider, XrandrProvider


class ProviderFactory:
    """Returns the display provider for a desktop variant."""

    _mapping: Dict[DesktopVariant, Type[DisplayProvider]] = {
        DesktopVariant.KDE: KScreenProvider,
        DesktopVariant.GNOME: GnomeProvider,
        DesktopVariant.GENERIC_X11: XrandrProvider,
    }

    def __init__(self, checker: Optional[DependencyChecker] = None, runner: Optional[Runner] = None):
        self.checker = checker
        self.runner = runner

    def get(self, variant: DesktopVariant) -> DisplayProvider:
        ctor = self._mapping.get(variant)
        if not ctor:
            raise UnsupportedEnvironmentError(UNSUPPORTED_REASON)
        return ctor(checker=self.checker, runner=self.runner)

