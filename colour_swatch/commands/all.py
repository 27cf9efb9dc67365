"""Run scan, census and swatches, combine into a single report.

Example:
    uv run colour-swatch all ./tmp lib/theme.dart
    uv run colour-swatch all ./tmp lib/theme.dart --json
    uv run colour-swatch all ./tmp lib/*.dart --max-colours=20
"""

from colour_swatch.core.types import Command, Report, SourceFile

command = Command(
    name='all',
    help='Run scan, census and swatches. Combine into a single report.',
)

ORDER = ['scan', 'census', 'swatches']


@command.run
def run(files: list[SourceFile], report: Report, args) -> None:
    from colour_swatch.registry import get

    for name in ORDER:
        get(name).execute(files, report, args)
