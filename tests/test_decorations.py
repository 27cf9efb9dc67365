"""Tests for colour_swatch.core.decorations — retraction, debouncing, document tracking."""

import threading
from pathlib import Path

from colour_swatch.core.colour_parser import ColourRangeComputer
from colour_swatch.core.decorations import ColourDecorations, DecorationTable, Debouncer, TextDocument
from colour_swatch.core.env import Settings
from colour_swatch.core.swatches import SwatchCache
from colour_swatch.core.types import Position

RED = 'ffff0000'
BLUE = 'ff0000ff'


class TestDecorationTable:
    def test_first_update(self) -> None:
        table = DecorationTable()
        results = table.update('Colour(255, 0, 0)')
        assert list(results) == [RED]
        assert table.keys == [RED]

    def test_removed_colour_reported_empty(self) -> None:
        table = DecorationTable()
        table.update('Colour(255, 0, 0)\nColour(0, 0, 255)')
        results = table.update('Colour(0, 0, 255)')
        assert results[RED] == []
        assert len(results[BLUE]) == 1

    def test_retracted_key_stays_tracked(self) -> None:
        table = DecorationTable()
        table.update('Colour(255, 0, 0)')
        table.update('')
        assert table.update('')[RED] == []
        assert table.spans(RED) == []

    def test_colour_coming_back(self) -> None:
        table = DecorationTable()
        table.update('Colour(255, 0, 0)')
        table.update('')
        results = table.update('x = Colour(255, 0, 0)')
        assert results[RED][0].offset == 4

    def test_stale_keys_evicted_beyond_capacity(self) -> None:
        table = DecorationTable(max_entries=2)
        table.update('Colour(1, 0, 0) Colour(2, 0, 0)')
        results = table.update('Colour(3, 0, 0)')
        # both old keys are reported empty once, then the oldest is dropped
        assert set(results) == {'ff010000', 'ff020000', 'ff030000'}
        assert table.keys == ['ff020000', 'ff030000']

    def test_live_keys_never_evicted(self) -> None:
        table = DecorationTable(max_entries=1)
        table.update('Colour(1, 0, 0) Colour(2, 0, 0)')
        assert set(table.keys) == {'ff010000', 'ff020000'}

    def test_custom_computer(self) -> None:
        table = DecorationTable(computer=ColourRangeComputer(['Color']))
        assert list(table.update('Color(0, 0, 255)')) == [BLUE]

    def test_swatches_written_for_present_keys(self, tmp_path: Path) -> None:
        table = DecorationTable(swatches=SwatchCache(str(tmp_path)))
        table.update('Colour(255, 0, 0)')
        assert (tmp_path / f'{RED}.svg').exists()

    def test_clear(self) -> None:
        table = DecorationTable()
        table.update('Colour(255, 0, 0)')
        table.clear()
        assert table.keys == []


class TestDebouncer:
    def test_bursts_collapse_to_one_call(self) -> None:
        calls = []
        done = threading.Event()

        def callback() -> None:
            calls.append(1)
            done.set()

        debouncer = Debouncer(0.05, callback)
        for _ in range(5):
            debouncer.trigger()
        assert done.wait(5)
        # give a stale timer the chance to misfire
        threading.Event().wait(0.2)
        assert calls == [1]
        assert not debouncer.pending

    def test_cancel(self) -> None:
        calls = []
        debouncer = Debouncer(0.05, lambda: calls.append(1))
        debouncer.trigger()
        debouncer.cancel()
        threading.Event().wait(0.2)
        assert calls == []

    def test_flush_runs_pending_now(self) -> None:
        calls = []
        debouncer = Debouncer(60, lambda: calls.append(1))
        debouncer.trigger()
        assert debouncer.pending
        debouncer.flush()
        assert calls == [1]
        assert not debouncer.pending

    def test_flush_without_pending_is_noop(self) -> None:
        calls = []
        Debouncer(60, lambda: calls.append(1)).flush()
        assert calls == []


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None, list[tuple[Position, Position]]]] = []

    def __call__(self, key, path, ranges) -> None:
        self.calls.append((key, path, ranges))

    def by_key(self) -> dict:
        return {key: ranges for key, _path, ranges in self.calls}


class TestColourDecorations:
    def test_activating_dart_document_updates(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60)
        decorations.set_active(TextDocument('/p/lib/a.dart', 'x\n  Colour(255, 0, 0)'))
        assert rec.by_key() == {RED: [(Position(1, 2), Position(1, 19))]}

    def test_other_file_types_ignored(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60)
        decorations.set_active(TextDocument('/p/notes.txt', 'Colour(255, 0, 0)'))
        assert decorations.active is None
        assert rec.calls == []

    def test_extra_extensions(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60, extra_extensions=['py'])
        decorations.set_active(TextDocument('/p/theme.py', 'Colour(255, 0, 0)'))
        assert RED in rec.by_key()

    def test_edits_are_debounced(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60)
        decorations.set_active(TextDocument('/p/a.dart', 'Colour(255, 0, 0)'))
        rec.calls.clear()

        decorations.document_changed(TextDocument('/p/a.dart', 'Colour(0, 0, 255)'))
        decorations.document_changed(TextDocument('/p/a.dart', 'Colour(0, 0, 255) Colour(0, 0, 255)'))
        assert rec.calls == []
        assert decorations.update_pending

        decorations.flush()
        by_key = rec.by_key()
        assert by_key[RED] == []
        assert len(by_key[BLUE]) == 2
        decorations.dispose()

    def test_edits_to_other_documents_ignored(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60)
        decorations.set_active(TextDocument('/p/a.dart', 'Colour(255, 0, 0)'))
        decorations.document_changed(TextDocument('/p/b.dart', 'Colour(0, 0, 255)'))
        assert not decorations.update_pending

    def test_timer_fires_update(self) -> None:
        done = threading.Event()
        seen = []

        def set_decorations(key, path, ranges) -> None:
            seen.append(key)
            if key == BLUE:
                done.set()

        decorations = ColourDecorations(set_decorations, delay=0.05)
        decorations.set_active(TextDocument('/p/a.dart', ''))
        decorations.document_changed(TextDocument('/p/a.dart', 'Colour(0, 0, 255)'))
        assert done.wait(5)
        assert BLUE in seen

    def test_swatch_paths_passed(self, tmp_path: Path) -> None:
        rec = Recorder()
        table = DecorationTable(swatches=SwatchCache(str(tmp_path)))
        decorations = ColourDecorations(rec, table=table, delay=60)
        decorations.set_active(TextDocument('/p/a.dart', 'Colour(255, 0, 0)'))
        decorations.set_active(TextDocument('/p/b.dart', ''))
        assert rec.calls[0] == (RED, str(tmp_path / f'{RED}.svg'), rec.calls[0][2])
        # retracted key carries no swatch
        assert rec.calls[-1] == (RED, None, [])

    def test_from_settings(self, tmp_path: Path) -> None:
        rec = Recorder()
        settings = Settings(constructors=('Color',), extra_extensions=('kt',), debounce=30.0, cache_size=8)
        decorations = ColourDecorations.from_settings(rec, settings, swatch_folder=str(tmp_path), fmt='png')
        assert decorations._debouncer.delay == 30.0
        assert decorations.table.max_entries == 8
        decorations.set_active(TextDocument('/p/Theme.kt', 'Color(0, 0, 255) Colour(255, 0, 0)'))
        assert list(rec.by_key()) == [BLUE]
        assert (tmp_path / f'{BLUE}.png').exists()

    def test_dispose(self) -> None:
        rec = Recorder()
        decorations = ColourDecorations(rec, delay=60)
        decorations.set_active(TextDocument('/p/a.dart', 'Colour(255, 0, 0)'))
        decorations.document_changed(TextDocument('/p/a.dart', ''))
        decorations.dispose()
        assert decorations.active is None
        assert not decorations.update_pending
