"""Type aliases and Pydantic models for the statflat package.

``StructuredNode`` is the order-preserving output of the structurer,
``FlatRecord`` the dotted-path output of the flattener, and
``ConversionResult`` the final result assembled by the converter.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel

from statflat.errors import StatsError

# A structured value is a scalar string, a nested mapping, or a sequence of
# either.  ``dict`` keeps insertion order, which downstream CSV column order
# depends on.
StructuredValue = Union[str, "StructuredNode", list[Union[str, "StructuredNode"]]]
StructuredNode = dict[str, StructuredValue]
FlatRecord = dict[str, str]


class ConversionResult(BaseModel):
    """Final result of converting one statistics document."""

    record: dict[str, str]
    root_tag: str
    source_url: str | None = None
    total_elements: int = 0
    max_depth: int = 0
    field_count: int = 0
    warnings: list[str] = []
    error_details: list[StatsError] = []
    processing_time_seconds: float = 0.0
