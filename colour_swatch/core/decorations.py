"""Editor-side bookkeeping around the scanner.

DecorationTable remembers which colour keys it has handed out so a rescan
can report removed colours with an empty span list. ColourDecorations tracks
the active document and rescans it after edits settle, via Debouncer.

Nothing in here is needed to call compute(); it is the glue an editor
integration (or the CLI) sits on.
"""

import threading
from collections import OrderedDict
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from colour_swatch.core.colour_parser import ColourRangeComputer
from colour_swatch.core.env import Settings
from colour_swatch.core.files import is_analyzable
from colour_swatch.core.swatches import SwatchCache
from colour_swatch.core.text_index import TextIndex
from colour_swatch.core.types import Position, ScanResult, Span

DEFAULT_DELAY = 1.0
DEFAULT_MAX_ENTRIES = 256

# (key, swatch path or None, ranges)
SetDecorations = Callable[[str, str | None, list[tuple[Position, Position]]], None]


@dataclass
class TextDocument:
    """The parts of an open editor document the tracker looks at."""

    path: str
    text: str
    language_id: str | None = None
    is_untitled: bool = False
    scheme: str = 'file'


class DecorationTable:
    """Caller-owned map of colour key -> current spans.

    update() returns every key still tracked; keys that disappeared from the
    text come back with []. Once more than max_entries keys are tracked, the
    oldest empty ones are forgotten after being reported empty once.
    """

    def __init__(
        self,
        computer: ColourRangeComputer | None = None,
        swatches: SwatchCache | None = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ):
        self.computer = computer or ColourRangeComputer()
        self.swatches = swatches
        self.max_entries = max_entries
        self._spans: OrderedDict[str, list[Span]] = OrderedDict()

    @property
    def keys(self) -> list[str]:
        return list(self._spans)

    def spans(self, key: str) -> list[Span]:
        return list(self._spans.get(key, []))

    def update(self, text: str) -> ScanResult:
        results = self.computer.compute(text, known=self._spans.keys())
        for key, spans in results.items():
            if spans and self.swatches is not None:
                self.swatches.get(key)
            self._spans[key] = spans
            if spans:
                self._spans.move_to_end(key)
        self._evict()
        return results

    def _evict(self) -> None:
        excess = len(self._spans) - self.max_entries
        if excess <= 0:
            return
        # live keys are never dropped, the text bounds how many there are
        stale = [key for key, spans in self._spans.items() if not spans][:excess]
        for key in stale:
            del self._spans[key]
            if self.swatches is not None:
                self.swatches.discard(key)

    def clear(self) -> None:
        self._spans.clear()


class Debouncer:
    """Run callback once, `delay` seconds after the last trigger()."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def flush(self) -> None:
        """Run now if a call is pending."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            self.callback()

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None or self._timer is not threading.current_thread():
                return
            self._timer = None
        self.callback()


class ColourDecorations:
    """Keeps colour decorations of the active document up to date.

    set_decorations(key, swatch_path, ranges) is called for every tracked
    key on each update; an empty ranges list means "clear this colour".
    """

    def __init__(
        self,
        set_decorations: SetDecorations,
        table: DecorationTable | None = None,
        delay: float = DEFAULT_DELAY,
        extra_extensions: Iterable[str] = (),
    ):
        self.set_decorations = set_decorations
        self.table = table or DecorationTable()
        self.extra_extensions = tuple(extra_extensions)
        self.active: TextDocument | None = None
        self._debouncer = Debouncer(delay, self.update)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        set_decorations: SetDecorations,
        settings: Settings,
        swatch_folder: str | None = None,
        fmt: str = 'svg',
    ) -> 'ColourDecorations':
        swatches = SwatchCache(swatch_folder, fmt, settings.cache_size) if swatch_folder else None
        table = DecorationTable(
            computer=ColourRangeComputer(settings.constructors),
            swatches=swatches,
            max_entries=settings.cache_size,
        )
        return cls(set_decorations, table=table, delay=settings.debounce, extra_extensions=settings.extra_extensions)

    @property
    def update_pending(self) -> bool:
        return self._debouncer.pending

    def set_active(self, document: TextDocument | None) -> None:
        """Switch to another document (or none) and rescan it immediately."""
        self._debouncer.cancel()
        if document is not None and is_analyzable(
            document.path,
            language_id=document.language_id,
            is_untitled=document.is_untitled,
            scheme=document.scheme,
            extra_extensions=self.extra_extensions,
        ):
            self.active = document
        else:
            self.active = None
        self.update()

    def document_changed(self, document: TextDocument) -> None:
        """Record an edit; the rescan waits until edits stop for `delay`."""
        if self.active is None or document.path != self.active.path:
            return
        self.active = document
        self._debouncer.trigger()

    def flush(self) -> None:
        """Run a pending rescan now instead of waiting out the delay."""
        self._debouncer.flush()

    def update(self) -> None:
        with self._lock:
            document = self.active
            if document is None:
                return
            results = self.table.update(document.text)
            index = TextIndex(document.text)
            swatches = self.table.swatches
            for key, spans in results.items():
                path = swatches.get(key) if swatches is not None and spans else None
                self.set_decorations(key, path, [index.range_of(s) for s in spans])

    def dispose(self) -> None:
        self._debouncer.cancel()
        self.active = None
