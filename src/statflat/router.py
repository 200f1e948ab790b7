"""StatsRouter -- orchestrator and public API for the statflat pipeline.

Routes one collection run through the full pipeline:

1. Fetch the statistics document via :class:`StatsClient`.
2. Pre-flight scan and parse via :func:`parse_document`.
3. Structure via :func:`structure_xml`.
4. Flatten via :func:`flatten_structure`.
5. Assemble and return :class:`ConversionResult`.

Fetch and parse failures propagate as :class:`FetchError` /
:class:`DocumentParseError`; no partial result is returned.
"""

from __future__ import annotations

import asyncio
import logging

from statflat.client import StatsClient
from statflat.config import StatsConfig
from statflat.converter import convert_document
from statflat.export import write_csv_row
from statflat.models import ConversionResult

logger = logging.getLogger("statflat")


class StatsRouter:
    """Top-level orchestrator for the statflat pipeline.

    Parameters
    ----------
    config:
        Pipeline configuration.  Uses defaults when *None*.
    client:
        Fetcher for the statistics document.  Built from *config* when
        *None*.
    """

    def __init__(
        self,
        config: StatsConfig | None = None,
        client: StatsClient | None = None,
    ) -> None:
        self._config = config or StatsConfig()
        self._client = client or StatsClient(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def collect(self) -> ConversionResult:
        """Fetch the statistics document and convert it to a flat record."""
        body = self._client.fetch()
        return convert_document(body, self._config, source_url=self._client.url)

    def collect_to_csv(self, path: str) -> ConversionResult:
        """Run :meth:`collect` and append the record to the CSV at *path*."""
        result = self.collect()
        write_csv_row(result.record, path)
        logger.info(
            "statflat | url=%s | csv=%s | fields=%d",
            result.source_url,
            path,
            result.field_count,
        )
        return result

    async def acollect(self) -> ConversionResult:
        """Async wrapper around :meth:`collect`.

        Offloads the synchronous ``collect()`` call to a thread via
        ``asyncio.to_thread()``.
        """
        return await asyncio.to_thread(self.collect)
