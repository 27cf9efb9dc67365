"""Environment variable loading and settings for colour-swatch.

Load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Settings read after loading:
  COLOUR_SWATCH_CONSTRUCTORS      comma list of constructor names (Colour)
  COLOUR_SWATCH_EXTRA_EXTENSIONS  comma list of extra file extensions to scan
  COLOUR_SWATCH_DEBOUNCE          seconds to wait after the last edit (1.0)
  COLOUR_SWATCH_CACHE_SIZE        max swatch handles kept in memory (256)
"""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = 'COLOUR_SWATCH_'


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export ') :]
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value

    return path


def _split(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(',') if part.strip())


def _number(environ: Mapping[str, str], name: str, default, cast):
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        print(f'colour-swatch: ignoring {ENV_PREFIX}{name}={raw!r}, using {default}', file=sys.stderr)
        return default
    if value < 0:
        print(f'colour-swatch: ignoring negative {ENV_PREFIX}{name}, using {default}', file=sys.stderr)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    constructors: tuple[str, ...] = ('Colour',)
    extra_extensions: tuple[str, ...] = ()
    debounce: float = 1.0
    cache_size: int = 256

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        env = os.environ if environ is None else environ
        default = cls()
        return cls(
            constructors=_split(env.get(ENV_PREFIX + 'CONSTRUCTORS')) or default.constructors,
            extra_extensions=_split(env.get(ENV_PREFIX + 'EXTRA_EXTENSIONS')),
            debounce=_number(env, 'DEBOUNCE', default.debounce, float),
            cache_size=_number(env, 'CACHE_SIZE', default.cache_size, int) or default.cache_size,
        )
