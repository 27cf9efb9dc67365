"""Regex-based scanner for Colour(...) constructor calls.

Recognises five literal shapes and resolves each call to a colour key
(8 lowercase hex digits, AARRGGBB):

    Colour(0xFFAABBCC)          ARGB integer literal
    Colour(0xFFAABBCC, 0.5)     ... with an opacity factor
    Colour('#AABBCC')           quoted RGB, alpha ff
    Colour('#80AABBCC', 0.5)    quoted ARGB, optional opacity factor
    Colour(170, 187, 204)       RGB components, alpha ff
    Colour(170, 187, 204, 0.5)  RGB + fractional opacity
    Colour(128, 170, 187, 204)  ARGB components

Does NOT attempt to parse Dart (or anything else). A lexical match is
sufficient. Calls whose numbers do not parse are skipped silently, so
compute() never raises for string input.
"""

import re
from collections.abc import Iterable, Iterator

from colour_swatch.core.types import (
    Argb8Literal,
    Argb8Quoted,
    ArgboComponents,
    ColourMatch,
    LiteralShape,
    Rgb6Quoted,
    RgbComponents,
    ScanResult,
    Span,
)

DEFAULT_CONSTRUCTORS = ('Colour',)

# {ctor} is substituted with the constructor alternation
_ARGB8_LITERAL = r'\b{ctor}\(\s*0x(?P<col1>[A-Fa-f0-9]{{8}})(?:,\s*(?P<op1>[.?\d]+))?,?\s*\)'
_RGB6_QUOTED = r'\b{ctor}\(\s*[\'"]#?(?P<col2>[A-Fa-f0-9]{{6}})[\'"](?:,\s*(?P<op2>[.?\d]+))?,?\s*\)'
_ARGB8_QUOTED = r'\b{ctor}\(\s*[\'"]#?(?P<col3>[A-Fa-f0-9]{{8}})[\'"](?:,\s*(?P<op3>[.?\d]+))?,?\s*\)'
_RGB = r'\b{ctor}\(\s*(?P<rgbR>[\w_]+),\s*(?P<rgbG>[\w_]+),\s*(?P<rgbB>[\w_]+),?\s*\)'
_ARGBO = r'\b{ctor}\(\s*(?P<rgb1>[\w_]+),\s*(?P<rgb2>[\w_]+),\s*(?P<rgb3>[\w_]+),\s*(?P<rgb4>[.?\d]+),?\s*\)'

_SHAPES = [_ARGB8_LITERAL, _RGB6_QUOTED, _ARGB8_QUOTED, _RGB, _ARGBO]


def build_pattern(constructors: Iterable[str] = DEFAULT_CONSTRUCTORS) -> re.Pattern[str]:
    """Compile the five shapes into one alternation with a `range` group."""
    names = [c for c in constructors if c]
    if not names:
        raise ValueError('at least one constructor name is required')
    ctor = '(?:' + '|'.join(re.escape(n) for n in names) + ')'
    alternation = '|'.join(shape.format(ctor=ctor) for shape in _SHAPES)
    return re.compile(f'(?P<range>{alternation})', re.MULTILINE)


def _shape_from_match(m: re.Match[str]) -> LiteralShape | None:
    """Build the literal shape whose field groups are populated.

    Checked in a fixed order; group names are unique per shape so at most
    one set is ever filled.
    """
    g = m.group
    if g('col1'):
        return Argb8Literal(g('col1'), g('op1'))
    if g('col2'):
        return Rgb6Quoted(g('col2'), g('op2'))
    if g('col3'):
        return Argb8Quoted(g('col3'), g('op3'))
    if g('rgbR') and g('rgbG') and g('rgbB'):
        return RgbComponents(g('rgbR'), g('rgbG'), g('rgbB'))
    if g('rgb1') and g('rgb2') and g('rgb3') and g('rgb4'):
        return ArgboComponents(g('rgb1'), g('rgb2'), g('rgb3'), g('rgb4'))
    return None


class ColourRangeComputer:
    """Finds colour literals in text and groups their spans by colour key."""

    def __init__(self, constructors: Iterable[str] = DEFAULT_CONSTRUCTORS):
        self.constructors = tuple(constructors)
        self._pattern = build_pattern(self.constructors)

    def matches(self, text: str) -> Iterator[ColourMatch]:
        """Yield every recognised constructor call in source order."""
        for m in self._pattern.finditer(text):
            shape = _shape_from_match(m)
            if shape is None:
                continue
            start, end = m.span('range')
            yield ColourMatch(shape=shape, span=Span(start, end - start))

    def compute(self, text: str, known: Iterable[str] = ()) -> ScanResult:
        """Map each colour key to the spans where it occurs.

        Keys in `known` that no longer occur are included with an empty list,
        so a caller can retract whatever it drew for them last time.
        """
        result: ScanResult = {}
        for match in self.matches(text):
            key = match.key
            if key is None:
                continue
            result.setdefault(key, []).append(match.span)
        for key in known:
            result.setdefault(key, [])
        return result


_default = ColourRangeComputer()


def compute(text: str, known: Iterable[str] = ()) -> ScanResult:
    """Scan text with the default `Colour` constructor."""
    return _default.compute(text, known)
