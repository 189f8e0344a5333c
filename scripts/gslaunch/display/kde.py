"""Display state from KDE Plasma via ``kscreen-doctor -j``."""

import json
from typing import Any, Dict, List, Optional

from gslaunch.errors import MalformedStateError, QueryError
from .config import DisplayConfig
from .desktop import DesktopVariant
from .state import DisplayState
from .strategies import DisplayProvider

Output = Dict[str, Any]


def parse_outputs(document: str) -> List[Output]:
    try:
        data = json.loads(document)
    except json.JSONDecodeError as e:
        raise QueryError(DisplayConfig.KSCREEN_TOOL, f"returned malformed JSON: {e}")

    outputs = data.get("outputs") if isinstance(data, dict) else None
    if not isinstance(outputs, list) or not outputs:
        raise QueryError(DisplayConfig.KSCREEN_TOOL, "returned no outputs")
    return [o for o in outputs if isinstance(o, dict)]


def _priority(output: Output) -> float:
    try:
        return float(output.get("priority"))
    except (TypeError, ValueError):
        return float("inf")


def select_output(outputs: List[Output], preferred: Optional[str] = None) -> Output:
    """Pick the output to size gamescope for.

    A preferred name must match exactly. Without one, a lone output is used
    as-is; otherwise the enabled output with the lowest priority wins.
    """
    if preferred:
        for output in outputs:
            if output.get("name") == preferred:
                return output
        names = ", ".join(str(o.get("name")) for o in outputs)
        raise QueryError(DisplayConfig.KSCREEN_TOOL, f"no output named {preferred!r} (found: {names})")

    if len(outputs) == 1:
        return outputs[0]

    enabled = [o for o in outputs if o.get("enabled")]
    if not enabled:
        raise QueryError(DisplayConfig.KSCREEN_TOOL, "no enabled output")
    return min(enabled, key=_priority)


def current_mode(output: Output) -> Dict[str, Any]:
    mode_id = output.get("currentModeId")
    for mode in output.get("modes") or []:
        if isinstance(mode, dict) and mode_id is not None and str(mode.get("id")) == str(mode_id):
            return mode
    raise MalformedStateError(
        f"{DisplayConfig.KSCREEN_TOOL}: current mode {mode_id!r} of {output.get('name')} not among its modes"
    )


def _dimension(size: Dict[str, Any], key: str, output_name: Any) -> int:
    value = size.get(key)
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if isinstance(value, bool) or number <= 0 or (isinstance(value, float) and not value.is_integer()):
        raise MalformedStateError(f"{DisplayConfig.KSCREEN_TOOL}: invalid {key} {value!r} for {output_name}")
    return number


def vrr_enabled(policy: Any) -> bool:
    try:
        return int(policy) in DisplayConfig.KDE_VRR_ENABLED
    except (TypeError, ValueError):
        return False


def state_from_output(output: Output) -> DisplayState:
    name = output.get("name")
    mode = current_mode(output)
    size = mode.get("size") if isinstance(mode.get("size"), dict) else {}

    try:
        refresh = float(mode.get("refreshRate"))
    except (TypeError, ValueError):
        refresh = DisplayConfig.DEFAULT_REFRESH_RATE

    return DisplayState(
        width=_dimension(size, "width", name),
        height=_dimension(size, "height", name),
        refresh_rate=refresh,
        name=name,
        primary=_priority(output) == 1,
        hdr_enabled=output.get("hdr") is True,
        vrr_enabled=vrr_enabled(output.get("vrrPolicy")),
    )


class KScreenProvider(DisplayProvider):
    variant = DesktopVariant.KDE

    def query(self, preferred_output: Optional[str] = None) -> DisplayState:
        document = self.runner(DisplayConfig.KSCREEN_QUERY)
        output = select_output(parse_outputs(document), preferred_output)
        state = state_from_output(output)
        self.logger.info(f"Detected {state} via {DisplayConfig.KSCREEN_TOOL}")
        return state
