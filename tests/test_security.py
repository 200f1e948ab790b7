"""Unit tests for statflat.security -- body scan and tree measures."""

from __future__ import annotations

from statflat.config import StatsConfig
from statflat.errors import ErrorCode
from statflat.security import _LARGE_BODY_THRESHOLD_MB, count_elements, measure_depth, scan_body


class TestScanBody:
    """Tests for scan_body()."""

    def test_empty_body(self, default_config):
        errors = scan_body(b"", default_config)
        assert [e.code for e in errors] == [ErrorCode.E_PARSE_EMPTY]

    def test_whitespace_body(self, default_config):
        assert scan_body(b"  \n\t", default_config)[0].code == ErrorCode.E_PARSE_EMPTY

    def test_too_large(self):
        errors = scan_body(b"<root>data</root>", StatsConfig(max_body_size_mb=0))
        assert errors[0].code == ErrorCode.E_SECURITY_TOO_LARGE

    def test_large_body_warning(self):
        body = b"<r>" + b" " * (_LARGE_BODY_THRESHOLD_MB * 1024 * 1024) + b"</r>"
        errors = scan_body(body, StatsConfig(max_body_size_mb=20))
        assert errors[0].code == ErrorCode.W_LARGE_BODY
        assert errors[0].recoverable is True

    def test_within_limit(self, default_config):
        assert scan_body(b"<root><item>test</item></root>", default_config) == []

    def test_entity_text_in_cdata_not_scanned(self, default_config):
        body = b"<root><raw><![CDATA[<!ENTITY x>]]></raw></root>"
        assert scan_body(body, default_config) == []


class TestTreeMeasures:
    """Tests for depth and element counting on a parsed DOM."""

    def test_measure_depth(self, parse):
        doc = parse("<a><b><c><d>deep</d></c></b><e/></a>")
        assert measure_depth(doc.documentElement) == 4

    def test_measure_depth_single(self, parse):
        assert measure_depth(parse("<a>text</a>").documentElement) == 1

    def test_measure_depth_beyond_recursion_limit(self, parse):
        doc = parse("<r>" + "<a>" * 3000 + "</a>" * 3000 + "</r>")
        assert measure_depth(doc.documentElement) == 3001

    def test_count_elements(self, parse):
        doc = parse("<a><b>1</b><b>2</b><c><d/></c></a>")
        assert count_elements(doc.documentElement) == 5

    def test_count_elements_deep(self, parse):
        doc = parse("<r>" + "<a>" * 3000 + "</a>" * 3000 + "</r>")
        assert count_elements(doc.documentElement) == 3001
