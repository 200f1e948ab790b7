"""Flatten a structured node into dotted-path scalar fields.

Provides ``flatten_structure()`` to walk the output of ``structure_xml()``
depth-first and write every scalar leaf into one ordered record keyed by the
dot-joined path of its ancestors.
"""

from __future__ import annotations

import logging

from statflat.config import StatsConfig
from statflat.models import FlatRecord, StructuredNode

logger = logging.getLogger("statflat")


def flatten_structure(
    structured: StructuredNode,
    parent_path: str = "",
    record: FlatRecord | None = None,
    config: StatsConfig | None = None,
) -> FlatRecord:
    """Flatten *structured* into ``dotted.path -> value`` entries.

    Mappings extend the path with their key.  Sequence elements that are
    mappings with a name field (``config.name_field``) are placed under
    ``parent_path.<name>``; nameless ones flatten straight into
    *parent_path*, and scalar elements are written to the sequence's own
    path.  Colliding paths are overwritten (last write wins).

    Parameters
    ----------
    structured:
        Output of ``structure_xml()``.
    parent_path:
        Prefix for every path produced.  Empty means un-prefixed.
    record:
        Record to extend in place.  A new one is created when *None*.
    config:
        Configuration for the path separator and name field.

    Returns
    -------
    FlatRecord
        The (same) record, populated.
    """
    config = config or StatsConfig()
    if record is None:
        record = {}
    _flatten_recursive(structured, parent_path, record, config)
    return record


def _flatten_recursive(
    structured: StructuredNode,
    parent_path: str,
    record: FlatRecord,
    config: StatsConfig,
) -> None:
    """Recursive helper for ``flatten_structure``.

    Mutates *record* in place.  Paths are passed by value.
    """
    for key, value in structured.items():
        current_path = _join(parent_path, key, config)

        if isinstance(value, str):
            _write(record, current_path, value, config)
        elif isinstance(value, dict):
            _flatten_recursive(value, current_path, record, config)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, str):
                    _write(record, current_path, item, config)
                elif isinstance(item, dict):
                    name = item.get(config.name_field)
                    if isinstance(name, str):
                        item_path = _join(parent_path, name, config)
                    else:
                        item_path = parent_path
                    _flatten_recursive(item, item_path, record, config)


def _join(parent_path: str, key: str, config: StatsConfig) -> str:
    """Join *key* onto *parent_path*, without a leading separator."""
    sep = config.path_separator
    return f"{parent_path}{sep}{key}".lstrip(sep)


def _write(record: FlatRecord, path: str, value: str, config: StatsConfig) -> None:
    if path in record:
        if config.log_sample_data:
            logger.debug(
                "statflat | overwriting field=%s | old=%r | new=%r",
                path,
                record[path],
                value,
            )
        else:
            logger.debug("statflat | overwriting field=%s", path)
    record[path] = value
