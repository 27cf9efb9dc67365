"""Count distinct colours and occurrences per file and across all files.

Combine with --max-colours N to fail a CI run once a codebase uses more
than N distinct colours.

Example:
    uv run colour-swatch census ./tmp lib/**/*.dart --max-colours=40
"""

from colour_swatch.core.types import Command, Report, SourceFile

command = Command(
    name='census',
    help='Count distinct colours per file and overall.',
)


@command.run
def run(files: list[SourceFile], report: Report, args) -> None:
    for f in files:
        used = {key: len(spans) for key, spans in f.colours.items() if spans}
        report.add(
            f.path,
            'census',
            {
                'distinct': len(used),
                'occurrences': sum(used.values()),
            },
        )
