"""Shared test fixtures for statflat tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from defusedxml.minidom import parseString

from statflat.config import StatsConfig


@pytest.fixture
def default_config() -> StatsConfig:
    """Return a default StatsConfig."""
    return StatsConfig()


@pytest.fixture
def parse():
    """Factory fixture parsing an XML string into a DOM Document."""

    def _parse(xml_content: str):
        return parseString(xml_content)

    return _parse


@pytest.fixture
def tmp_config_file(tmp_path: Path):
    """Factory fixture to write config text to a temp file and return the path."""

    def _write(content: str, filename: str) -> str:
        file_path = tmp_path / filename
        file_path.write_text(content, encoding="utf-8")
        return str(file_path)

    return _write


@pytest.fixture
def sample_stats_xml() -> str:
    """A compact statistics document shaped like a monitoring response."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<MonitorStats version="2">'
        "<System>"
        "<Hostname>array-01</Hostname>"
        '<Uptime unit="s">86400</Uptime>'
        "</System>"
        "<Pools>"
        "<Pool><Name>gold</Name><Used>40</Used></Pool>"
        "<Pool><Name>silver</Name><Used>75</Used></Pool>"
        "</Pools>"
        "<Note><![CDATA[<ok/>]]></Note>"
        "<Maintenance/>"
        "</MonitorStats>"
    )
