"""Exceptions raised while resolving and launching a gamescope command."""

from typing import List, Optional


class LaunchError(Exception):
    """Base class for every fatal gslaunch condition."""


class ConfigError(LaunchError):
    pass


class MissingDependencyError(LaunchError):
    def __init__(self, missing: List[str], variant: Optional[str] = None):
        self.missing = list(missing)
        self.variant = variant
        where = f" for {variant}" if variant else ""
        super().__init__(f"missing required dependencies{where}: {', '.join(self.missing)}")


class UnsupportedEnvironmentError(LaunchError):
    def __init__(self, message: str = "no supported display detection method for this session"):
        super().__init__(message)


class QueryError(LaunchError):
    """A display query failed.

    ``tool_failed`` separates a tool that could not run (missing, non-zero
    exit) from one that ran but returned nothing usable.
    """

    def __init__(self, tool: str, message: str, tool_failed: bool = False):
        self.tool = tool
        self.tool_failed = tool_failed
        super().__init__(f"{tool}: {message}")


class MalformedStateError(LaunchError):
    pass
