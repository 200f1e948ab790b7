"""HTTP client for the monitoring statistics endpoint.

``StatsClient`` performs a single authenticated GET against the REST
statistics resource and returns the raw XML body.  Failures are raised as
:class:`~statflat.errors.FetchError`; retrying is left to the caller.
"""

from __future__ import annotations

import logging

import httpx

from statflat.config import StatsConfig
from statflat.errors import ErrorCode, FetchError, StatsError

logger = logging.getLogger("statflat")

XML_HEADERS = {
    "Accept": "application/xml",
    "Content-Type": "application/xml",
}


def build_stats_url(config: StatsConfig) -> str:
    """Return ``https://<host>:<port><stats_path>`` for *config*."""
    path = config.stats_path if config.stats_path.startswith("/") else f"/{config.stats_path}"
    return f"https://{config.host}:{config.port}{path}"


class StatsClient:
    """Fetch the statistics document from a monitoring endpoint.

    Parameters
    ----------
    config:
        Pipeline configuration providing host, credentials, TLS and
        timeout settings.  Uses defaults when *None*.
    """

    def __init__(self, config: StatsConfig | None = None) -> None:
        self._config = config or StatsConfig()

    @property
    def url(self) -> str:
        return build_stats_url(self._config)

    def fetch(self) -> bytes:
        """GET the statistics resource and return the response body.

        Raises
        ------
        FetchError
            On a non-2xx status, a timeout, or any other transport error.
        """
        config = self._config
        url = self.url
        auth = None
        if config.username is not None:
            auth = httpx.BasicAuth(config.username, config.password or "")

        try:
            response = httpx.get(
                url,
                auth=auth,
                headers=XML_HEADERS,
                verify=config.verify_tls,
                timeout=config.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise self._fail(
                ErrorCode.E_FETCH_STATUS,
                f"Stats endpoint returned HTTP {exc.response.status_code}",
                url,
            ) from exc
        except httpx.TimeoutException as exc:
            raise self._fail(
                ErrorCode.E_FETCH_TIMEOUT,
                f"Stats request timed out after {config.timeout_seconds:.1f}s: {exc}",
                url,
            ) from exc
        except httpx.TransportError as exc:
            raise self._fail(
                ErrorCode.E_FETCH_CONNECT,
                f"Stats request failed: {exc}",
                url,
            ) from exc

        logger.debug(
            "statflat | url=%s | status=%d | bytes=%d",
            url,
            response.status_code,
            len(response.content),
        )
        return response.content

    @staticmethod
    def _fail(code: ErrorCode, message: str, url: str) -> FetchError:
        logger.error("statflat | url=%s | code=%s | detail=%s", url, code.value, message)
        return FetchError(StatsError(code=code, message=message, stage="fetch", path=url))
