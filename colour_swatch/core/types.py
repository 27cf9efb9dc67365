"""Shared types for colour-swatch: Span, literal shapes, ColourMatch, Command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Union

from colour_swatch.core.palette import apply_opacity, argb_to_key, hex_to_argb, parse_float, parse_int


class Span(NamedTuple):
    """Where a colour literal sits in the scanned text (string indices)."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


class Position(NamedTuple):
    """0-based line and character."""

    line: int
    character: int


@dataclass(frozen=True)
class Argb8Literal:
    """Colour(0xAARRGGBB[, factor])"""

    hex8: str
    opacity: str | None = None

    def resolve(self) -> str | None:
        return apply_opacity(hex_to_argb(self.hex8), self.opacity)


@dataclass(frozen=True)
class Rgb6Quoted:
    """Colour('#RRGGBB'[, factor]) with implicit full alpha."""

    hex6: str
    opacity: str | None = None

    def resolve(self) -> str | None:
        return apply_opacity(hex_to_argb('ff' + self.hex6), self.opacity)


@dataclass(frozen=True)
class Argb8Quoted:
    """Colour('#AARRGGBB'[, factor])"""

    hex8: str
    opacity: str | None = None

    def resolve(self) -> str | None:
        return apply_opacity(hex_to_argb(self.hex8), self.opacity)


@dataclass(frozen=True)
class RgbComponents:
    """Colour(r, g, b) with implicit full alpha."""

    r: str
    g: str
    b: str

    def resolve(self) -> str | None:
        r, g, b = parse_int(self.r), parse_int(self.g), parse_int(self.b)
        if r is None or g is None or b is None:
            return None
        return argb_to_key(255, r, g, b)


@dataclass(frozen=True)
class ArgboComponents:
    """Colour(t1, t2, t3, t4).

    Two encodings share this arity. A decimal point in the fourth token makes
    it (r, g, b, opacity); otherwise the tokens are (a, r, g, b).
    """

    first: str
    second: str
    third: str
    fourth: str

    @property
    def is_opacity(self) -> bool:
        return '.' in self.fourth

    def resolve(self) -> str | None:
        if self.is_opacity:
            r, g, b = parse_int(self.first), parse_int(self.second), parse_int(self.third)
            opacity = parse_float(self.fourth)
            if r is None or g is None or b is None or opacity is None:
                return None
            return argb_to_key(opacity * 255, r, g, b)

        a, r, g, b = (parse_int(t) for t in (self.first, self.second, self.third, self.fourth))
        if a is None or r is None or g is None or b is None:
            return None
        return argb_to_key(a, r, g, b)


LiteralShape = Union[Argb8Literal, Rgb6Quoted, Argb8Quoted, RgbComponents, ArgboComponents]

# colour key -> spans in order of appearance
ScanResult = dict[str, list[Span]]


@dataclass(frozen=True)
class ColourMatch:
    """One recognised constructor call."""

    shape: LiteralShape
    span: Span

    @property
    def key(self) -> str | None:
        return self.shape.resolve()


@dataclass
class SourceFile:
    """A file handed to a command: its path, text and scan result."""

    path: str
    text: str
    colours: ScanResult


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='scan', help='List colours per file')

        @command.run
        def run(files, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, files: list[SourceFile], report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(files, report, args)


@dataclass
class Report:
    """Accumulates results from commands for text/JSON output."""

    files: dict[str, dict[str, Any]] = field(default_factory=dict)
    counts: dict[str, int] = field(default_factory=dict)

    def add(self, path: str, command_name: str, data: Any) -> None:
        """Add command results for a file."""
        if path not in self.files:
            self.files[path] = {'commands': {}}
        self.files[path]['commands'][command_name] = data

    def record_colours(self, colours: ScanResult) -> None:
        """Count occurrences per colour key across every scanned file."""
        for key, spans in colours.items():
            self.counts[key] = self.counts.get(key, 0) + len(spans)

    @property
    def distinct(self) -> int:
        return sum(1 for n in self.counts.values() if n > 0)
