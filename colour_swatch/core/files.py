"""Which files are worth scanning, and how their paths are spelled."""

import ntpath
import os
import posixpath
import sys
from collections.abc import Iterable

ANALYZABLE_LANGUAGES = ('dart', 'html')
ANALYZABLE_FILENAMES = ('.analysis_options', 'analysis_options.yaml', 'pubspec.yaml')
ANALYZABLE_EXTENSIONS = ('dart', 'htm', 'html')


def fs_path(path: str, platform: str = sys.platform) -> str:
    """Upper-case the drive letter of an absolute Windows path."""
    if path and platform.startswith('win') and ntpath.isabs(path) and path[0] == path[0].lower():
        return path[0].upper() + path[1:]
    return path


def is_analyzable(
    path: str,
    language_id: str | None = None,
    is_untitled: bool = False,
    scheme: str = 'file',
    extra_extensions: Iterable[str] = (),
) -> bool:
    """Return True if a document should be scanned for colour literals.

    Language id wins when present. Without one (e.g. a file picked up from
    disk) the file name and extension decide.
    """
    path = fs_path(path)
    if is_untitled or not path or scheme != 'file':
        return False

    if language_id and language_id in ANALYZABLE_LANGUAGES:
        return True

    # either separator so Windows paths work on any host
    basename = ntpath.basename(path) if '\\' in path else posixpath.basename(path)
    if basename in ANALYZABLE_FILENAMES:
        return True

    _root, ext = os.path.splitext(basename)
    extensions = set(ANALYZABLE_EXTENSIONS) | {e.lstrip('.') for e in extra_extensions if e}
    return bool(ext) and ext[1:] in extensions
