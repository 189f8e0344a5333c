"""Merges auto-detected display state into the configured gamescope arguments."""

from typing import Callable, Optional

from gslaunch.args import HDR_FLAG, HEIGHT_FLAG, PREFER_OUTPUT_FLAG, VRR_FLAG, WIDTH_FLAG, ArgumentSet, first_output
from gslaunch.config import ResolvedConfig
from gslaunch.display.desktop import DesktopVariant, detect
from gslaunch.display.factory import ProviderFactory
from gslaunch.display.preflight import UNSUPPORTED_REASON
from gslaunch.display.state import DisplayState
from gslaunch.errors import MalformedStateError, MissingDependencyError, UnsupportedEnvironmentError
from gslaunch.logging import Logger

logger = Logger(__name__)


class ArgumentAssembler:
    def __init__(self, config: ResolvedConfig,
                 detector: Callable[[], DesktopVariant] = detect,
                 factory: Optional[ProviderFactory] = None):
        self.config = config
        self.detector = detector
        self.factory = factory or ProviderFactory()
        self.variant: Optional[DesktopVariant] = None
        self.state: Optional[DisplayState] = None

    def preferred_output(self, args: ArgumentSet) -> Optional[str]:
        return first_output(args.get(PREFER_OUTPUT_FLAG))

    def query_display(self, preferred: Optional[str] = None) -> DisplayState:
        variant = self.detector()
        self.variant = variant
        logger.debug(f"Desktop variant: {variant.value}")

        provider = self.factory.get(variant)
        result = provider.preflight()
        if not result.supported:
            raise UnsupportedEnvironmentError(UNSUPPORTED_REASON)
        if result.missing:
            raise MissingDependencyError(result.missing, variant.value)

        return provider.query(preferred)

    def assemble(self) -> ArgumentSet:
        args = self.config.base_args.copy()
        if not self.config.auto_detect:
            return args

        preferred = self.preferred_output(args)
        if preferred:
            logger.info(f"Preferred output: {preferred}")
        state = self.query_display(preferred)
        self.state = state

        if self.config.auto_resolution:
            if not state.is_valid():
                raise MalformedStateError(
                    f"detected resolution {state.width}x{state.height} of {state.name or 'primary output'} is not usable"
                )
            args.set(WIDTH_FLAG, str(state.width))
            args.set(HEIGHT_FLAG, str(state.height))

        if self.config.auto_hdr:
            self._apply_signal(args, state, "HDR", state.hdr_enabled, HDR_FLAG)
        if self.config.auto_vrr:
            self._apply_signal(args, state, "VRR", state.vrr_enabled, VRR_FLAG)

        logger.info(f"Gamescope arguments: {args}")
        return args

    def _apply_signal(self, args: ArgumentSet, state: DisplayState, label: str, enabled: bool, flag: str) -> None:
        if not state.signals_known:
            logger.warning(f"{label} state cannot be detected on this desktop, leaving {flag} unset")
            return
        if enabled:
            args.append_if_absent(flag)
        else:
            logger.debug(f"{label} is disabled on {state.name or 'primary output'}")
