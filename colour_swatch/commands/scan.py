"""List every colour literal per file with its line:column range.

Each Colour(...) call is resolved to an AARRGGBB key. Calls sharing a
resolved colour are grouped under one key, in source order, whatever
syntax they were written in.

Example:
    uv run colour-swatch scan ./tmp lib/theme.dart
    uv run colour-swatch scan ./tmp lib/*.dart --json
"""

from colour_swatch.core.report import describe_spans
from colour_swatch.core.types import Command, Report, SourceFile

command = Command(
    name='scan',
    help='List colour literals per file, grouped by resolved AARRGGBB key.',
)


@command.run
def run(files: list[SourceFile], report: Report, args) -> None:
    for f in files:
        report.add(f.path, 'scan', describe_spans(f.text, f.colours))
