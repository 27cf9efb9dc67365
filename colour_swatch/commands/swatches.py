"""Write one swatch image per colour key into <tmp_dir>.

Each swatch is a 16x16 square: the key's RGB as fill, its alpha as
opacity. Files are named <key>.svg (default) or <key>.png and are only
written when missing, so <tmp_dir> doubles as a persistent cache.

A swatch that cannot be written is reported and skipped; the rest of the
run carries on.

Example:
    uv run colour-swatch swatches ./swatches lib/theme.dart
    uv run colour-swatch swatches ./swatches lib/theme.dart --format png
"""

from colour_swatch.core.swatches import SwatchCache
from colour_swatch.core.types import Command, Report, SourceFile

command = Command(
    name='swatches',
    help='Write a swatch image (SVG or PNG) for every colour found.',
)


@command.run
def run(files: list[SourceFile], report: Report, args) -> None:
    cache = SwatchCache(
        args.tmp_dir,
        fmt=getattr(args, 'format', None) or 'svg',
        max_entries=getattr(args, 'cache_size', None) or 256,
    )
    for f in files:
        written = []
        failed = []
        for key, spans in f.colours.items():
            if not spans:
                continue
            path = cache.get(key)
            if path is None:
                failed.append(key)
            else:
                written.append(path)
        report.add(f.path, 'swatches', {'folder': args.tmp_dir, 'written': written, 'failed': failed})
