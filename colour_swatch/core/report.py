"""Report builder — text and JSON output for colour-swatch results.

Line and column numbers in both formats are 1-based.
"""

import json
from typing import Any

from colour_swatch.core.text_index import TextIndex
from colour_swatch.core.types import Report, ScanResult


def describe_spans(text: str, colours: ScanResult) -> list[dict[str, Any]]:
    """Turn a scan result into report entries with line/column ranges."""
    index = TextIndex(text)
    entries = []
    for key, spans in colours.items():
        ranges = []
        for span in spans:
            start, end = index.range_of(span)
            ranges.append(
                {
                    'offset': span.offset,
                    'length': span.length,
                    'start': [start.line + 1, start.character + 1],
                    'end': [end.line + 1, end.character + 1],
                    'text': text[span.offset : span.end],
                }
            )
        entries.append({'key': key, 'ranges': ranges})
    return entries


def _one_line(s: str, limit: int = 60) -> str:
    s = ' '.join(s.split())
    return s if len(s) <= limit else s[: limit - 1] + '…'


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    lines.append(f'colour-swatch: {len(report.files)} files, {report.distinct} colours')
    lines.append('')

    for path, file_data in report.files.items():
        lines.append(f'── {path}')
        commands = file_data.get('commands', {})
        for name, data in commands.items():
            if name == 'scan':
                if not data:
                    lines.append('  (no colours)')
                for entry in data:
                    for r in entry['ranges']:
                        where = f'{r["start"][0]}:{r["start"][1]}-{r["end"][0]}:{r["end"][1]}'
                        lines.append(f'  {entry["key"]}  {where:<14} {_one_line(r["text"])}')
            elif name == 'swatches':
                lines.append(f'  swatches: {len(data["written"])} in {data["folder"]}')
                for key in data.get('failed', []):
                    lines.append(f'  swatch failed: {key}')
            else:
                # Generic fallback
                for k, v in (data.items() if isinstance(data, dict) else [('', data)]):
                    lines.append(f'  {name}.{k}: {v}')
        lines.append('')

    ran_census = any('census' in f.get('commands', {}) for f in report.files.values())
    if ran_census and report.counts:
        lines.append('census:')
        for key, count in sorted(report.counts.items(), key=lambda kv: (-kv[1], kv[0])):
            if count:
                lines.append(f'  {key}  {count}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'files': []}
    for path, file_data in report.files.items():
        obj['files'].append({'path': path, 'commands': file_data.get('commands', {})})

    obj['summary'] = {
        'files': len(report.files),
        'colours': report.distinct,
        'counts': dict(sorted(report.counts.items(), key=lambda kv: (-kv[1], kv[0]))),
    }
    return json.dumps(obj, indent=2)
