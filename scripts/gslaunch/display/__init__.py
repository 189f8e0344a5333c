"""Display detection for gamescope auto-sizing."""

from .desktop import DesktopVariant, detect
from .factory import ProviderFactory
from .preflight import DependencyChecker, PreflightResult
from .state import DisplayState

__all__ = [
    'DesktopVariant',
    'DependencyChecker',
    'DisplayState',
    'PreflightResult',
    'ProviderFactory',
    'detect',
]
