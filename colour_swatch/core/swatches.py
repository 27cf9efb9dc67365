"""Swatch images for colour keys, and a bounded cache of where they live.

A swatch is a 16x16 square filled with the key's RGB at the key's alpha.
SVG swatches are plain text; PNG swatches are rendered with Pillow.
Files are written once per key and reused on later runs.
"""

import os
import sys
from collections import OrderedDict

import numpy as np
from PIL import Image

from colour_swatch.core.palette import key_to_rgba

FORMATS = ('svg', 'png')
SWATCH_SIZE = 16

SVG_TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 {size} {size}">
\t<rect fill="#{hex6}" x="0" y="0" width="{size}" height="{size}" fill-opacity="{opacity}" />
</svg>
"""


def svg_swatch(key: str, size: int = SWATCH_SIZE) -> str:
    opacity = int(key[:2], 16) / 255
    return SVG_TEMPLATE.format(size=size, hex6=key[2:], opacity=f'{opacity:g}')


def png_swatch(key: str, size: int = SWATCH_SIZE) -> Image.Image:
    arr = np.empty((size, size, 4), dtype=np.uint8)
    arr[:, :] = key_to_rgba(key)
    return Image.fromarray(arr)


def write_swatch(folder: str, key: str, fmt: str = 'svg') -> str | None:
    """Write <folder>/<key>.<fmt> unless it exists. Returns the path.

    Write failures are reported on stderr and return None; a missing swatch
    must never stop a scan.
    """
    if fmt not in FORMATS:
        raise ValueError(f'Unknown swatch format: {fmt}. Available: {", ".join(FORMATS)}')

    path = os.path.join(folder, f'{key}.{fmt}')
    if os.path.exists(path):
        return path

    try:
        os.makedirs(folder, exist_ok=True)
        if fmt == 'svg':
            with open(path, 'w', encoding='utf-8') as f:
                f.write(svg_swatch(key))
        else:
            png_swatch(key).save(path)
    except OSError as e:
        print(f'swatches: cannot write {path}: {e}', file=sys.stderr)
        return None
    return path


class SwatchCache:
    """Key -> swatch path, least recently used first out.

    Eviction forgets the handle only; the file stays on disk and is picked
    up again by write_swatch on the next miss.
    """

    def __init__(self, folder: str, fmt: str = 'svg', max_entries: int = 256):
        if max_entries < 1:
            raise ValueError('max_entries must be at least 1')
        self.folder = folder
        self.fmt = fmt
        self.max_entries = max_entries
        self._paths: OrderedDict[str, str] = OrderedDict()

    def __contains__(self, key: str) -> bool:
        return key in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, key: str) -> str | None:
        if key in self._paths:
            self._paths.move_to_end(key)
            return self._paths[key]

        path = write_swatch(self.folder, key, self.fmt)
        if path is None:
            return None
        self._paths[key] = path
        while len(self._paths) > self.max_entries:
            self._paths.popitem(last=False)
        return path

    def discard(self, key: str) -> None:
        self._paths.pop(key, None)
