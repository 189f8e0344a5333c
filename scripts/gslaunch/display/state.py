from dataclasses import dataclass
from typing import Optional


@dataclass
class DisplayState:
    width: Optional[int]
    height: Optional[int]
    refresh_rate: float
    name: Optional[str] = None
    primary: bool = False
    hdr_enabled: bool = False
    vrr_enabled: bool = False
    # False when the provider cannot measure HDR/VRR and only reports a default
    signals_known: bool = True

    def is_valid(self) -> bool:
        return (
            isinstance(self.width, int) and not isinstance(self.width, bool) and self.width > 0
            and isinstance(self.height, int) and not isinstance(self.height, bool) and self.height > 0
        )

    def __str__(self) -> str:
        name = self.name or "primary"
        return f"{name}: {self.width}x{self.height}@{self.refresh_rate:g}Hz"
