"""gslaunch: run games inside gamescope with auto-detected display settings.

Modules are imported directly (``gslaunch.cli``, ``gslaunch.assembler``)
rather than re-exported here.
"""

__version__ = "0.1.0"

__all__ = [
    "args",
    "assembler",
    "cli",
    "config",
    "display",
    "errors",
    "launch",
]
