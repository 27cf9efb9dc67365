"""colour-swatch — Find Colour(...) literals in source files and render swatches.

Usage: uv run colour-swatch <command> <tmp_dir> <file> [<file> ...] [options]

Commands are auto-discovered from colour_swatch/commands/.
Each command module's docstring is its documentation.
Run `colour-swatch help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, colour-swatch looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import os
import sys

from colour_swatch import registry
from colour_swatch.core.colour_parser import ColourRangeComputer
from colour_swatch.core.env import Settings, load_env
from colour_swatch.core.files import is_analyzable
from colour_swatch.core.report import format_json, format_text
from colour_swatch.core.swatches import FORMATS
from colour_swatch.core.types import Report, SourceFile


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'colour_swatch.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  colour-swatch scan ./tmp lib/theme.dart\n'
        '  colour-swatch all ./tmp lib/theme.dart lib/widgets.dart --json\n'
        '  colour-swatch swatches ./swatches lib/theme.dart --format png\n'
        '  colour-swatch census ./tmp lib/*.dart --max-colours=20\n'
        '  colour-swatch scan ./tmp src/styles.py --all-files -c Color\n'
        '  colour-swatch help scan\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  COLOUR_SWATCH_CONSTRUCTORS=Colour,Color\n'
        '  COLOUR_SWATCH_EXTRA_EXTENSIONS=py,kt\n'
        '  COLOUR_SWATCH_CACHE_SIZE=256\n'
        '  COLOUR_SWATCH_DEBOUNCE=1.0\n'
    )
    parser = argparse.ArgumentParser(
        prog='colour-swatch',
        description='Find Colour(...) literals in source files and render swatches.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global --env-file option before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        p.add_argument('tmp_dir', help='Working directory for swatches')
        p.add_argument('files', nargs='+', help='Source files to scan')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-f', '--format', choices=FORMATS, default='svg', help='Swatch image format (default: svg)')
        p.add_argument(
            '-c',
            '--constructor',
            action='append',
            default=None,
            metavar='NAME',
            help='Constructor name to match (repeatable, default: COLOUR_SWATCH_CONSTRUCTORS or Colour)',
        )
        p.add_argument('-a', '--all-files', action='store_true', help='Scan files whatever their type')
        p.add_argument(
            '-m',
            '--max-colours',
            type=int,
            default=None,
            metavar='N',
            help='Exit 1 if more than N distinct colours are found (CI gating)',
        )

    # `help` subcommand — prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: colour-swatch help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _check_max_colours(report: Report, limit: int) -> bool:
    """Return True if more than `limit` distinct colours were found."""
    if report.distinct <= limit:
        return False
    print(f'\nFAIL: {report.distinct} distinct colours found, limit is {limit}')
    return True


def _load_files(
    paths: list[str],
    computer: ColourRangeComputer,
    settings: Settings,
    all_files: bool,
) -> list[SourceFile]:
    """Read and scan every applicable file. Unreadable files are skipped."""
    files = []
    for path in paths:
        if not all_files and not is_analyzable(path, extra_extensions=settings.extra_extensions):
            print(f'colour-swatch: skipping {path} (not a recognised file type, use --all-files)', file=sys.stderr)
            continue
        try:
            with open(path, encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f'colour-swatch: cannot read {path}: {e}', file=sys.stderr)
            continue
        files.append(SourceFile(path=path, text=text, colours=computer.compute(text)))
    return files


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else — OS env vars always win
    env_path = load_env(env_file=getattr(args, 'env_file', None))
    if env_path:
        print(f'colour-swatch: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    missing = [p for p in args.files if not os.path.isfile(p)]
    if missing:
        for p in missing:
            print(f'Error: file not found: {p}', file=sys.stderr)
        sys.exit(1)

    constructors = None
    if args.constructor is not None:
        constructors = [c.strip() for c in args.constructor if c.strip()]
        if not constructors:
            parser.error('--constructor needs a non-empty name')

    settings = Settings.from_env()
    args.cache_size = settings.cache_size
    computer = ColourRangeComputer(constructors or settings.constructors)

    files = _load_files(args.files, computer, settings, args.all_files)

    report = Report()
    for f in files:
        report.record_colours(f.colours)

    cmd = registry.get(args.command)
    cmd.execute(files, report, args)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate — must happen after output so report is visible even on failure
    if args.max_colours is not None and _check_max_colours(report, args.max_colours):
        sys.exit(1)


if __name__ == '__main__':
    main()
