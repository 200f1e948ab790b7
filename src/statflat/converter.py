"""Core conversion logic -- parse, structure and flatten.

Provides ``parse_document()`` to turn a raw response body into a DOM after
pre-flight checks, and ``convert_document()`` to run the structurer and
flattener over it and assemble a :class:`ConversionResult`.
"""

from __future__ import annotations

import logging
import time
from xml.dom import Node
from xml.parsers.expat import ExpatError

import defusedxml.minidom
from defusedxml import DefusedXmlException

from statflat.config import StatsConfig
from statflat.errors import DocumentParseError, ErrorCode, StatsError
from statflat.flattener import flatten_structure
from statflat.models import ConversionResult
from statflat.security import count_elements, measure_depth, scan_body
from statflat.structurer import structure_xml

logger = logging.getLogger("statflat")


def parse_document(
    body: bytes | str,
    config: StatsConfig | None = None,
    warnings: list[StatsError] | None = None,
) -> Node:
    """Scan and parse *body* into a DOM ``Document``.

    Non-fatal ``scan_body()`` findings are appended to *warnings* when given.

    Raises
    ------
    DocumentParseError
        When the body is empty or oversized, is not well-formed XML,
        declares entities, or nests deeper than ``config.max_depth``.
    """
    config = config or StatsConfig()
    if isinstance(body, str):
        body = body.encode("utf-8")

    findings = scan_body(body, config)
    fatal = [e for e in findings if e.code.startswith("E_")]
    if fatal:
        raise _fail(fatal[0])
    if warnings is not None:
        warnings.extend(findings)

    try:
        document = defusedxml.minidom.parseString(body)
    except DefusedXmlException as exc:
        raise _fail(
            StatsError(
                code=ErrorCode.E_SECURITY_ENTITY_DECLARATION,
                message=f"Forbidden DTD construct: {exc}",
                stage="parse",
            )
        ) from exc
    except ExpatError as exc:
        raise _fail(
            StatsError(
                code=ErrorCode.E_PARSE_CORRUPT,
                message=f"Invalid XML: {exc}",
                stage="parse",
            )
        ) from exc

    depth = measure_depth(document.documentElement)
    if depth > config.max_depth:
        raise _fail(
            StatsError(
                code=ErrorCode.E_SECURITY_DEPTH_BOMB,
                message=f"XML nesting depth {depth} exceeds limit of {config.max_depth}",
                stage="parse",
            )
        )

    return document


def convert_document(
    body: bytes | str,
    config: StatsConfig | None = None,
    source_url: str | None = None,
) -> ConversionResult:
    """Convert one raw statistics document into a flat record.

    Parameters
    ----------
    body:
        The XML response body.
    config:
        Pipeline configuration.  Uses defaults when *None*.
    source_url:
        Where the body came from, recorded on the result.

    Returns
    -------
    ConversionResult
        The flat record plus statistics about the document.
    """
    start = time.monotonic()
    config = config or StatsConfig()

    warnings: list[StatsError] = []
    document = parse_document(body, config, warnings=warnings)
    root = document.documentElement
    root_tag = root.localName or root.tagName

    if config.expected_root is not None and root_tag != config.expected_root:
        warnings.append(
            StatsError(
                code=ErrorCode.W_UNEXPECTED_ROOT,
                message=f"Root element is '{root_tag}', expected '{config.expected_root}'",
                stage="structure",
                recoverable=True,
            )
        )

    structured = structure_xml(document, include_root=config.include_root, config=config)
    record = flatten_structure(structured, config=config)

    elapsed = time.monotonic() - start
    logger.info(
        "statflat | url=%s | root=%s | fields=%d | time=%.1fs",
        source_url or "-",
        root_tag,
        len(record),
        elapsed,
    )

    return ConversionResult(
        record=record,
        root_tag=root_tag,
        source_url=source_url,
        total_elements=count_elements(root),
        max_depth=measure_depth(root),
        field_count=len(record),
        warnings=[e.code for e in warnings],
        error_details=warnings,
        processing_time_seconds=elapsed,
    )


def _fail(error: StatsError) -> DocumentParseError:
    logger.error("statflat | code=%s | detail=%s", error.code, error.message)
    return DocumentParseError(error)
