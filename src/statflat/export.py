"""Serialise flat records as CSV rows or flat JSON.

The record's key order is the column order: ``write_csv_row()`` appends one
row per collection run, ``records_to_csv()`` writes a batch to an open text
handle.
"""

from __future__ import annotations

import csv
import json
import logging
import pathlib
from typing import IO, Iterable

from statflat.models import FlatRecord

logger = logging.getLogger("statflat")


def record_to_json(record: FlatRecord, indent: int | None = None) -> str:
    """Return *record* as a flat JSON object, key order preserved."""
    return json.dumps(record, indent=indent, ensure_ascii=False)


def write_csv_row(record: FlatRecord, path: str) -> None:
    """Append *record* as one CSV row to *path*.

    The header (the record's keys) is written first when the file does not
    exist yet or is empty.  An existing header is reused: its columns fix
    the cell order, unknown keys are dropped and missing ones left empty.
    """
    file_path = pathlib.Path(path)
    fieldnames = list(record)
    new_file = not file_path.exists() or file_path.stat().st_size == 0

    if not new_file:
        with open(file_path, newline="", encoding="utf-8") as fh:
            header = next(csv.reader(fh), None)
        if header:
            dropped = [k for k in record if k not in header]
            if dropped:
                logger.warning(
                    "statflat | file=%s | dropped_columns=%d",
                    file_path.name,
                    len(dropped),
                )
            fieldnames = header

    with open(file_path, "a", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames, extrasaction="ignore")
        if new_file:
            writer.writeheader()
        writer.writerow(record)


def records_to_csv(records: Iterable[FlatRecord], fh: IO[str]) -> int:
    """Write *records* to *fh* with a shared header; return the row count.

    The header is the union of all keys in first-seen order.  Cells for
    keys a record lacks are left empty.
    """
    rows = list(records)
    fieldnames: dict[str, None] = {}
    for row in rows:
        for key in row:
            fieldnames.setdefault(key, None)

    writer = csv.DictWriter(fh, fieldnames=list(fieldnames), restval="")
    writer.writeheader()
    writer.writerows(rows)
    return len(rows)
