"""statflat -- monitoring statistics XML to flat records.

Public API re-exports for convenient access.
"""

from statflat.client import StatsClient, build_stats_url
from statflat.config import StatsConfig
from statflat.converter import convert_document, parse_document
from statflat.errors import (
    DocumentParseError,
    ErrorCode,
    FetchError,
    StatflatError,
    StatsError,
)
from statflat.export import record_to_json, records_to_csv, write_csv_row
from statflat.flattener import flatten_structure
from statflat.models import ConversionResult, FlatRecord, StructuredNode
from statflat.router import StatsRouter
from statflat.security import scan_body
from statflat.structurer import structure_xml

__all__ = [
    "StatsRouter",
    "StatsClient",
    "StatsConfig",
    "ErrorCode",
    "StatsError",
    "StatflatError",
    "FetchError",
    "DocumentParseError",
    "ConversionResult",
    "FlatRecord",
    "StructuredNode",
    "scan_body",
    "build_stats_url",
    "parse_document",
    "convert_document",
    "structure_xml",
    "flatten_structure",
    "record_to_json",
    "records_to_csv",
    "write_csv_row",
]
