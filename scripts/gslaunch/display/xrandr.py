"""Display state from ``xrandr --query`` output, with GNOME feature probing."""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from gslaunch.errors import MalformedStateError, QueryError
from .config import DisplayConfig
from .desktop import DesktopVariant
from .state import DisplayState
from .strategies import DisplayProvider

CONNECTED_RE = re.compile(r"^(\S+) connected\b(.*)$")
RESOLUTION_RE = re.compile(r"(\d+)x(\d+)")
CURRENT_RATE_RE = re.compile(r"(\d+(?:\.\d+)?)\*")
QUOTED_RE = re.compile(r"'([^']*)'")


@dataclass
class XrandrOutput:
    name: str
    primary: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    refresh_rate: Optional[float] = None


def parse_outputs(text: str) -> List[XrandrOutput]:
    outputs: List[XrandrOutput] = []
    current: Optional[XrandrOutput] = None

    for line in text.splitlines():
        match = CONNECTED_RE.match(line)
        if match:
            rest = match.group(2)
            current = XrandrOutput(name=match.group(1), primary="primary" in rest.split())
            res = RESOLUTION_RE.search(rest)
            if res:
                current.width, current.height = int(res.group(1)), int(res.group(2))
            outputs.append(current)
            continue

        if not line[:1].isspace():
            # Screen line or a disconnected output ends the mode block.
            current = None
            continue

        if current is not None and current.refresh_rate is None:
            rate = CURRENT_RATE_RE.search(line)
            if rate:
                current.refresh_rate = float(rate.group(1))

    return outputs


def select_output(outputs: List[XrandrOutput], preferred: Optional[str] = None) -> XrandrOutput:
    if not outputs:
        raise QueryError(DisplayConfig.XRANDR_TOOL, "no connected output")

    if preferred:
        for output in outputs:
            if output.name == preferred:
                return output
        names = ", ".join(o.name for o in outputs)
        raise QueryError(DisplayConfig.XRANDR_TOOL, f"no connected output named {preferred!r} (found: {names})")

    for output in outputs:
        if output.primary:
            return output
    return outputs[0]


class XrandrProvider(DisplayProvider):
    """Generic X11 provider. HDR and VRR cannot be measured through xrandr."""

    variant = DesktopVariant.GENERIC_X11

    def query(self, preferred_output: Optional[str] = None) -> DisplayState:
        text = self.runner(DisplayConfig.XRANDR_QUERY)
        output = select_output(parse_outputs(text), preferred_output)

        if not output.width or not output.height:
            raise MalformedStateError(f"{DisplayConfig.XRANDR_TOOL}: no active resolution on {output.name}")

        refresh = output.refresh_rate
        if refresh is None:
            self.logger.warning(
                f"Could not read current refresh rate of {output.name}, assuming {DisplayConfig.DEFAULT_REFRESH_RATE:g}Hz"
            )
            refresh = DisplayConfig.DEFAULT_REFRESH_RATE

        hdr, vrr, known = self.signals()
        state = DisplayState(
            width=output.width,
            height=output.height,
            refresh_rate=refresh,
            name=output.name,
            primary=output.primary,
            hdr_enabled=hdr,
            vrr_enabled=vrr,
            signals_known=known,
        )
        self.logger.info(f"Detected {state} via {DisplayConfig.XRANDR_TOOL}")
        return state

    def signals(self) -> Tuple[bool, bool, bool]:
        return False, False, False


def parse_features(text: str) -> List[str]:
    # gsettings prints a GVariant string array: ['a', 'b'] or @as []
    return QUOTED_RE.findall(text)


class GnomeProvider(XrandrProvider):
    variant = DesktopVariant.GNOME

    def signals(self) -> Tuple[bool, bool, bool]:
        if not self.checker.check_exists(DisplayConfig.GSETTINGS_TOOL):
            self.logger.warning(f"{DisplayConfig.GSETTINGS_TOOL} not found; HDR/VRR state unknown")
            return False, False, False
        try:
            text = self.runner(DisplayConfig.GNOME_FEATURES_QUERY)
        except QueryError as e:
            self.logger.warning(f"Could not read mutter experimental features: {e}")
            return False, False, False

        features = parse_features(text)
        hdr = DisplayConfig.GNOME_HDR_FEATURE in features
        vrr = DisplayConfig.GNOME_VRR_FEATURE in features
        self.logger.debug(f"mutter experimental features: {features}")
        return hdr, vrr, True
