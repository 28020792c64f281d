"""Adapters that turn an external source list into ``Source`` records.

The first row of a spreadsheet or CSV list is a header, and only the first
worksheet of a workbook is read. Rows missing either the label or the url are
skipped rather than rejected, so a half-filled sheet still loads.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List, Sequence, Union
import zipfile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import Source


class SourceListError(ValueError):
    """The source list is missing, unreadable or empty."""


def parse_sources(rows: Iterable[Union[Sequence[object], dict]]) -> List[Source]:
    sources: List[Source] = []
    for row in rows:
        if isinstance(row, dict):
            label, url = row.get("label"), row.get("url")
        elif isinstance(row, (list, tuple)) and len(row) >= 2:
            label, url = row[0], row[1]
        else:
            continue
        label = str(label).strip() if label is not None else ""
        url = str(url).strip() if url is not None else ""
        if label and url:
            sources.append(Source(label=label, url=url))
    return sources


def load_sources(path: Union[str, Path]) -> List[Source]:
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        if suffix == ".xlsx":
            rows = _read_worksheet(path)
        elif suffix == ".csv":
            with path.open(newline="", encoding="utf-8-sig") as handle:
                rows = list(csv.reader(handle))[1:]
        elif suffix == ".json":
            rows = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(rows, list):
                raise SourceListError(f"{path}: expected a JSON list of sources")
        else:
            raise SourceListError(f"{path}: unsupported source list format {path.suffix!r}")
    except (OSError, json.JSONDecodeError, csv.Error, InvalidFileException, zipfile.BadZipFile) as exc:
        raise SourceListError(f"Could not read source list {path}: {exc}") from exc
    sources = parse_sources(rows)
    if not sources:
        raise SourceListError(f"Source list {path} contains no usable sources")
    return sources


def _read_worksheet(path: Path) -> List[tuple]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            return []
        return list(workbook.worksheets[0].iter_rows(min_row=2, values_only=True))
    finally:
        workbook.close()
