"""Convert a parsed XML DOM into an order-preserving nested structure.

Provides ``structure_xml()``, which walks a ``xml.dom.minidom`` node tree and
builds plain ``dict`` / ``list`` / ``str`` values without reference to any
schema.  Attributes come first, then child elements in document order;
sibling tags that repeat are always represented as lists.
"""

from __future__ import annotations

import logging
from xml.dom import Node

from statflat.config import StatsConfig
from statflat.models import StructuredNode, StructuredValue

logger = logging.getLogger("statflat")

TEXT_KEY = "#text"

_CHARACTER_DATA = (Node.TEXT_NODE, Node.CDATA_SECTION_NODE)


def structure_xml(
    node: Node,
    include_root: bool = False,
    config: StatsConfig | None = None,
) -> StructuredNode:
    """Structure an XML document or element into nested mappings.

    Parameters
    ----------
    node:
        A DOM ``Document`` or ``Element``.
    include_root:
        When False (the default) a ``Document`` is unwrapped to its document
        element, whose attributes and children become the top-level keys.
        When True the root element is kept as the single top-level key.
    config:
        Configuration controlling namespace stripping, skipped attribute
        prefixes and whitespace handling.  Uses defaults when *None*.

    Returns
    -------
    StructuredNode
        An insertion-ordered ``dict``.
    """
    config = config or StatsConfig()

    if node.nodeType == Node.DOCUMENT_NODE:
        if include_root:
            return _structure_node(node, config)
        node = node.documentElement

    if include_root:
        result: StructuredNode = {}
        _visit_child(node, result, config)
        return result

    return _structure_node(node, config)


def _structure_node(node: Node, config: StatsConfig) -> StructuredNode:
    """Recursive helper for ``structure_xml``."""
    result: StructuredNode = {}

    for name, value in _attributes(node, config):
        result[name] = value

    # Reserve a list for every tag that repeats among the children.
    seen: dict[str, int] = {}
    for child in node.childNodes:
        if child.nodeType == Node.ELEMENT_NODE:
            name = _local_name(child, config)
            seen[name] = seen.get(name, 0) + 1
    for name, count in seen.items():
        if count > 1 and name not in result:
            result[name] = []

    for child in node.childNodes:
        if child.nodeType in _CHARACTER_DATA:
            if _skip_text(child, config):
                continue
            previous = result.get(child.nodeName, "")
            if not isinstance(previous, str):
                previous = ""
            result[child.nodeName] = previous + child.data
        elif child.nodeType == Node.ELEMENT_NODE:
            _visit_child(child, result, config)

    return result


def _visit_child(child: Node, result: StructuredNode, config: StatsConfig) -> None:
    """Place one child element into *result* according to its shape."""
    name = _local_name(child, config)
    grandchildren = [
        c for c in child.childNodes
        if not (c.nodeType in _CHARACTER_DATA and _skip_text(c, config))
    ]
    logger.debug("statflat | structuring element=%s | children=%d", name, len(grandchildren))

    if len(grandchildren) == 1 and grandchildren[0].nodeType == Node.TEXT_NODE:
        text = grandchildren[0].data
        attrs = _attributes(child, config)
        if attrs:
            value: StructuredNode = dict(attrs)
            value[TEXT_KEY] = text
            _append(result, name, value)
        else:
            _append(result, name, text)
    elif any(c.nodeType == Node.CDATA_SECTION_NODE for c in grandchildren):
        cdata = next(c for c in grandchildren if c.nodeType == Node.CDATA_SECTION_NODE)
        result[name] = cdata.data
    elif len(grandchildren) > 1 and _is_wrapper(child, grandchildren, config):
        for grandchild in grandchildren:
            _append(result, name, _structure_node(grandchild, config))
    else:
        _append(result, name, _structure_node(child, config))


def _append(result: StructuredNode, name: str, value: StructuredValue) -> None:
    """Add *value* under *name*, turning repeated keys into a list."""
    if name not in result:
        result[name] = value
        return
    existing = result[name]
    if isinstance(existing, list):
        existing.append(value)
    else:
        result[name] = [existing, value]


def _is_wrapper(child: Node, grandchildren: list[Node], config: StatsConfig) -> bool:
    """True if *child* has no attributes and only same-named element children."""
    if _attributes(child, config):
        return False
    names = set()
    for grandchild in grandchildren:
        if grandchild.nodeType != Node.ELEMENT_NODE:
            return False
        names.add(_local_name(grandchild, config))
    return len(names) == 1


def _attributes(node: Node, config: StatsConfig) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs for *node* in document order."""
    if node.nodeType != Node.ELEMENT_NODE or node.attributes is None:
        return []
    pairs: list[tuple[str, str]] = []
    for attr in node.attributes.values():
        if _is_skipped_attribute(attr.name, config):
            continue
        pairs.append((_local_name(attr, config), attr.value))
    return pairs


def _is_skipped_attribute(qname: str, config: StatsConfig) -> bool:
    """True for ``xmlns`` declarations and attributes in a skipped namespace prefix."""
    if qname == "xmlns":
        return True
    prefix, sep, _ = qname.partition(":")
    return bool(sep) and prefix in config.skip_attribute_prefixes


def _local_name(node: Node, config: StatsConfig) -> str:
    """Return the element or attribute name, namespace prefix removed."""
    if not config.strip_namespaces:
        return node.nodeName
    return node.localName or node.nodeName.split(":", 1)[-1]


def _skip_text(node: Node, config: StatsConfig) -> bool:
    """True for whitespace-only text when whitespace is not preserved."""
    return (
        not config.preserve_whitespace
        and node.nodeType == Node.TEXT_NODE
        and not node.data.strip()
    )
