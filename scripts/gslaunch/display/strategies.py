import subprocess
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from gslaunch.errors import QueryError
from gslaunch.logging import Logger
from .desktop import DesktopVariant
from .preflight import REQUIREMENTS, DependencyChecker, PreflightResult
from .state import DisplayState

logger = Logger(__name__)

Runner = Callable[[Sequence[str]], str]


def run_tool(cmd: Sequence[str]) -> str:
    """Run a query tool and return its stdout, raising QueryError on failure."""
    tool = cmd[0]
    try:
        result = subprocess.run(list(cmd), capture_output=True, text=True, check=True)
    except FileNotFoundError:
        raise QueryError(tool, "not found on PATH", tool_failed=True)
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise QueryError(tool, f"failed to run: {detail}", tool_failed=True)

    if not result.stdout.strip():
        raise QueryError(tool, "ran but produced no output")
    logger.debug(f"{' '.join(cmd)} returned {len(result.stdout)} bytes")
    return result.stdout


class DisplayProvider(ABC):
    variant: DesktopVariant

    def __init__(self, checker: Optional[DependencyChecker] = None, runner: Optional[Runner] = None):
        self.logger = Logger(f"{__name__}.{self.__class__.__name__}")
        self.checker = checker or DependencyChecker()
        self.runner = runner or run_tool

    @property
    def required_tools(self) -> List[str]:
        return list(REQUIREMENTS[self.variant])

    def preflight(self) -> PreflightResult:
        return self.checker.validate(self.variant, self.required_tools)

    @abstractmethod
    def query(self, preferred_output: Optional[str] = None) -> DisplayState:
        pass
