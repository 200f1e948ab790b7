"""Resource checks for statistics response bodies.

``scan_body()`` looks at the raw bytes before parsing: empty and oversized
bodies are rejected, large ones flagged.  Entity declarations are left to
``defusedxml`` at parse time.  ``measure_depth()`` and ``count_elements()``
inspect the parsed tree without recursion, so a deeply nested document is
reported instead of exhausting the interpreter stack.
"""

from __future__ import annotations

from xml.dom import Node

from statflat.config import StatsConfig
from statflat.errors import ErrorCode, StatsError

_MB = 1024 * 1024
_LARGE_BODY_THRESHOLD_MB = 10


def scan_body(body: bytes, config: StatsConfig) -> list[StatsError]:
    """Return errors/warnings for *body*; ``E_*`` codes are fatal."""
    if not body.strip():
        return [
            StatsError(code=ErrorCode.E_PARSE_EMPTY, message="Response body is empty", stage="scan")
        ]

    size = len(body)
    if size > config.max_body_size_mb * _MB:
        return [
            StatsError(
                code=ErrorCode.E_SECURITY_TOO_LARGE,
                message=f"Body of {size} bytes is over the {config.max_body_size_mb} MB limit",
                stage="scan",
            )
        ]

    if size > _LARGE_BODY_THRESHOLD_MB * _MB:
        return [
            StatsError(
                code=ErrorCode.W_LARGE_BODY,
                message=f"Body is {size / _MB:.1f} MB",
                stage="scan",
                recoverable=True,
            )
        ]
    return []


def measure_depth(node: Node) -> int:
    """Return the maximum element nesting depth, *node* counting as 1."""
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        for child in current.childNodes:
            if child.nodeType == Node.ELEMENT_NODE:
                stack.append((child, depth + 1))
    return deepest


def count_elements(node: Node) -> int:
    """Count all elements in the tree (including *node*)."""
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        stack.extend(c for c in current.childNodes if c.nodeType == Node.ELEMENT_NODE)
    return count
