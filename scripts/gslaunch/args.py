"""Gamescope option strings.

Arguments are kept as an ordered list of ``(flag, value)`` entries and only
flattened back into tokens when the command line is built. Short and long
spellings of the same gamescope option are treated as one flag, so a
``-W`` set by auto-detection replaces a user's ``--output-width``.
"""

import re
import shlex
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Union

WIDTH_FLAG = "-W"
HEIGHT_FLAG = "-H"
PREFER_OUTPUT_FLAG = "-O"
HDR_FLAG = "--hdr-enabled"
VRR_FLAG = "--adaptive-sync"

GAMESCOPE_ALIASES = {
    "-W": "--output-width",
    "-H": "--output-height",
    "-w": "--nested-width",
    "-h": "--nested-height",
    "-r": "--nested-refresh",
    "-o": "--nested-unfocused-refresh",
    "-O": "--prefer-output",
    "-b": "--borderless",
    "-f": "--fullscreen",
    "-F": "--filter",
    "-S": "--scaler",
    "-e": "--steam",
    "-g": "--grab",
    "-C": "--hide-cursor-delay",
    "-s": "--mouse-sensitivity",
    "-R": "--ready-fd",
    "-T": "--stats-path",
    "--sharpness": "--fsr-sharpness",
}

_NUMBER_RE = re.compile(r"-\d+(\.\d+)?")


def canonical(flag: str) -> str:
    return GAMESCOPE_ALIASES.get(flag, flag)


def is_flag(token: str) -> bool:
    return token.startswith("-") and len(token) > 1 and not _NUMBER_RE.fullmatch(token)


@dataclass
class FlagEntry:
    flag: str
    value: Optional[str] = None
    joined: bool = False

    def tokens(self) -> List[str]:
        if self.value is None:
            return [self.flag]
        if self.joined:
            return [f"{self.flag}={self.value}"]
        return [self.flag, self.value]


class ArgumentSet:
    def __init__(self, entries: Optional[Iterable[FlagEntry]] = None):
        self.entries: List[FlagEntry] = list(entries or [])

    @classmethod
    def parse(cls, args: Union[str, Iterable[str], None]) -> "ArgumentSet":
        if args is None:
            tokens: List[str] = []
        elif isinstance(args, str):
            tokens = shlex.split(args)
        else:
            tokens = list(args)

        entries: List[FlagEntry] = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.startswith("--") and "=" in token:
                flag, value = token.split("=", 1)
                entries.append(FlagEntry(flag, value, joined=True))
                i += 1
            elif is_flag(token) and i + 1 < len(tokens) and not is_flag(tokens[i + 1]):
                entries.append(FlagEntry(token, tokens[i + 1]))
                i += 2
            else:
                entries.append(FlagEntry(token))
                i += 1
        return cls(entries)

    def _find(self, flag: str) -> List[int]:
        key = canonical(flag)
        return [i for i, e in enumerate(self.entries) if canonical(e.flag) == key]

    def has(self, flag: str) -> bool:
        return bool(self._find(flag))

    def get(self, flag: str) -> Optional[str]:
        found = self._find(flag)
        return self.entries[found[0]].value if found else None

    def set(self, flag: str, value: Optional[str] = None) -> "ArgumentSet":
        """Replace the value of ``flag`` in place, or append it if absent.

        The first occurrence keeps its position and spelling; any further
        occurrences of the flag or its aliases are dropped.
        """
        value = None if value is None else str(value)
        found = self._find(flag)
        if not found:
            self.entries.append(FlagEntry(flag, value))
            return self
        first = self.entries[found[0]]
        first.value = value
        if value is None:
            first.joined = False
        for i in reversed(found[1:]):
            del self.entries[i]
        return self

    def append_if_absent(self, flag: str, value: Optional[str] = None) -> "ArgumentSet":
        if not self.has(flag):
            self.entries.append(FlagEntry(flag, None if value is None else str(value)))
        return self

    def copy(self) -> "ArgumentSet":
        return ArgumentSet(FlagEntry(e.flag, e.value, e.joined) for e in self.entries)

    def tokens(self) -> List[str]:
        out: List[str] = []
        for entry in self.entries:
            out.extend(entry.tokens())
        return out

    def __iter__(self) -> Iterator[FlagEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __str__(self) -> str:
        return " ".join(shlex.quote(t) for t in self.tokens())

    def __repr__(self) -> str:
        return f"ArgumentSet({str(self)!r})"


def append_if_absent(arg_string: str, flag: str) -> str:
    if flag in arg_string:
        return arg_string
    if not arg_string.strip():
        return flag
    return f"{arg_string} {flag}"


def replace_or_append(arg_string: str, pattern: Union[str, "re.Pattern[str]"], replacement: str) -> str:
    """Substitute every match of ``pattern`` with ``replacement``, or append it.

    The caller is responsible for ``pattern`` and ``replacement`` addressing
    the same flag; prefer :func:`set_flag`, which derives both from one name.
    """
    updated, count = re.subn(pattern, lambda _m: replacement, arg_string)
    if count:
        return updated
    if not arg_string.strip():
        return replacement
    return f"{arg_string} {replacement}"


def set_flag(arg_string: str, flag: str, value: Union[str, int]) -> str:
    """Set ``flag`` to ``value`` so that it occurs exactly once."""
    return str(ArgumentSet.parse(arg_string).set(flag, str(value)))


def first_output(value: Optional[str]) -> Optional[str]:
    """First name of a comma-separated ``--prefer-output`` list."""
    if not value:
        return None
    for name in value.split(","):
        name = name.strip()
        if name:
            return name
    return None
