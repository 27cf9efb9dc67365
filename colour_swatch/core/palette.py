"""Channel arithmetic for colour keys.

A colour key is 8 lowercase hex digits in AARRGGBB order. Every channel is
clamped to [0, 255] and rounded half up before it is encoded, so inputs
such as Colour(300, 0, 0) or an opacity of 0.5 on alpha 255 always
produce two hex digits per channel.
"""

import math
import re

_DIGITS = re.compile(r'\d+')
_HEX = re.compile(r'[0-9A-Fa-f]+')


def clamp(v: float, lo: float = 0, hi: float = 255) -> float:
    return min(max(lo, v), hi)


def _round(v: float) -> int:
    # half up, so 127.5 -> 128
    return int(math.floor(v + 0.5))


def as_hex(v: float) -> str:
    """Clamp, round and render one channel as two hex digits."""
    return f'{_round(clamp(v)):02x}'


def argb_to_key(a: float, r: float, g: float, b: float) -> str:
    """Encode four channels as a colour key."""
    return f'{as_hex(a)}{as_hex(r)}{as_hex(g)}{as_hex(b)}'


def hex_to_argb(hex_str: str) -> tuple[int, int, int, int]:
    """Decode 8 hex digits into (a, r, g, b)."""
    value = int(hex_str, 16)
    return ((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def key_to_rgba(key: str) -> tuple[int, int, int, int]:
    """Colour key to (r, g, b, a), the order image libraries want."""
    a, r, g, b = hex_to_argb(key)
    return (r, g, b, a)


def is_key(value: str) -> bool:
    return len(value) == 8 and _HEX.fullmatch(value) is not None and value == value.lower()


def parse_int(token: str) -> int | None:
    """Parse a base-10 integer token. Anything but plain digits is rejected.

    So are digit runs past the interpreter's int conversion limit, the same
    way parse_float rejects values that overflow to inf.
    """
    if _DIGITS.fullmatch(token) is None:
        return None
    try:
        return int(token)
    except ValueError:
        return None


def parse_float(token: str | None) -> float | None:
    if token is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def opacity_factor(token: str | None) -> float | None:
    """Return the factor if the token is a number in [0, 1], else None."""
    value = parse_float(token)
    if value is None or not 0.0 <= value <= 1.0:
        return None
    return value


def apply_opacity(argb: tuple[int, int, int, int], token: str | None) -> str:
    """Scale alpha by an optional opacity factor and encode.

    An absent or invalid factor leaves the base colour unchanged.
    """
    a, r, g, b = argb
    factor = opacity_factor(token)
    if factor is not None:
        a = factor * a
    return argb_to_key(a, r, g, b)
