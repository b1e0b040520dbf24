"""HTTP clients for a TAP sync endpoint.

Wraps httpx synchronous and asynchronous clients with ADQL query
dispatch, response parsing, and exception mapping to the TapError
hierarchy. Both clients share request parameters and the parser; only
the I/O differs.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import httpx
import sentry_sdk

from vizier_tap.__about__ import __version__
from vizier_tap.core.config import DEFAULT_VIZIER_TAP_URL, ResolvedConfig
from vizier_tap.core.exceptions import NetworkError, NonSuccessStatusError, TapError
from vizier_tap.core.exceptions import TimeoutError as TapTimeoutError
from vizier_tap.core.logging import get_logger
from vizier_tap.core.parser import Record, parse_query_result_json
from vizier_tap.core.query import QueryBuilder

if TYPE_CHECKING:
    from vizier_tap.core.models import QueryResult

__all__ = [
    "DEFAULT_VIZIER_TAP_URL",
    "AsyncTapClient",
    "TapClient",
    "build_query_params",
]


def build_query_params(adql_query: str) -> dict[str, str]:
    """Query-string parameters for a synchronous TAP ADQL request."""
    return {
        "request": "doQuery",
        "lang": "ADQL",
        "format": "json",
        "query": adql_query,
    }


def _default_headers() -> dict[str, str]:
    return {"User-Agent": f"vizier-tap/{__version__}", "Accept": "application/json"}


class _BaseTapClient:
    def __init__(self, config: ResolvedConfig | None) -> None:
        self.config = config if config is not None else ResolvedConfig()

    @property
    def tap_url(self) -> str:
        return self.config.tap_url

    def query_builder(self) -> QueryBuilder:
        """Start a query builder whose send() dispatches through this client."""
        return QueryBuilder(client=self)

    def _transport_error(
        self,
        exc: httpx.TransportError,
        span: Any,
        log: Any,
        adql: str,
        start_time: float,
    ) -> TapError:
        duration_ms = (time.monotonic() - start_time) * 1000
        span.set_data("duration_ms", duration_ms)
        if isinstance(exc, httpx.TimeoutException):
            span.set_status("deadline_exceeded")
            log.error("query timeout", adql=adql, duration_ms=f"{duration_ms:.1f}")
            return TapTimeoutError(
                f"Request to {self.tap_url} timed out after {self.config.timeout}s: {exc}"
            )
        span.set_status("unavailable")
        log.error("request failed", adql=adql, error=str(exc))
        return NetworkError(f"Request failed: {exc}")

    def _handle_response(
        self,
        response: httpx.Response,
        target: Any,
        strict_columns: bool,
        span: Any,
        log: Any,
        adql: str,
        start_time: float,
    ) -> QueryResult[Any]:
        span.set_data("status_code", response.status_code)
        if not response.is_success:
            span.set_status("internal_error")
            log.error(
                "non-success status",
                adql=adql,
                status_code=response.status_code,
            )
            raise NonSuccessStatusError(response.status_code, self.tap_url)

        try:
            result = parse_query_result_json(
                response.content, target, strict_columns=strict_columns
            )
        except TapError as e:
            span.set_status("invalid_argument")
            log.error("response rejected", adql=adql, error=e.message)
            raise

        duration_ms = (time.monotonic() - start_time) * 1000
        span.set_data("row_count", len(result))
        span.set_data("duration_ms", duration_ms)
        log.debug(
            "query complete",
            duration_ms=f"{duration_ms:.1f}",
            row_count=len(result),
        )
        return result


class TapClient(_BaseTapClient):
    """Synchronous TAP client using httpx."""

    def __init__(
        self,
        config: ResolvedConfig | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(config)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers=_default_headers(),
        )

    def __enter__(self) -> TapClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def query(
        self,
        adql_query: str,
        target: Any = Record,
        *,
        strict_columns: bool = False,
    ) -> QueryResult[Any]:
        """Run an ADQL query and decode every row into ``target``."""
        log = get_logger("vizier_tap.client", tap_url=self.tap_url)
        adql_normalized = " ".join(adql_query.split())
        log.debug("executing query", adql=adql_normalized)
        with sentry_sdk.start_span(
            op="http.client", description=f"GET {self.tap_url}"
        ) as span:
            start_time = time.monotonic()
            try:
                response = self._http_client.get(
                    self.tap_url, params=build_query_params(adql_query)
                )
            except httpx.TransportError as e:
                raise self._transport_error(
                    e, span, log, adql_normalized, start_time
                ) from e
            return self._handle_response(
                response, target, strict_columns, span, log, adql_normalized, start_time
            )

    def close(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        if self._owns_http_client:
            self._http_client.close()


class AsyncTapClient(_BaseTapClient):
    """Asynchronous TAP client using httpx.AsyncClient.

    Cancellation of the awaiting task propagates unchanged.
    """

    def __init__(
        self,
        config: ResolvedConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config)
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers=_default_headers(),
        )

    async def __aenter__(self) -> AsyncTapClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def query(
        self,
        adql_query: str,
        target: Any = Record,
        *,
        strict_columns: bool = False,
    ) -> QueryResult[Any]:
        """Run an ADQL query and decode every row into ``target``."""
        log = get_logger("vizier_tap.client", tap_url=self.tap_url)
        adql_normalized = " ".join(adql_query.split())
        log.debug("executing query", adql=adql_normalized)
        with sentry_sdk.start_span(
            op="http.client", description=f"GET {self.tap_url}"
        ) as span:
            start_time = time.monotonic()
            try:
                response = await self._http_client.get(
                    self.tap_url, params=build_query_params(adql_query)
                )
            except httpx.TransportError as e:
                raise self._transport_error(
                    e, span, log, adql_normalized, start_time
                ) from e
            return self._handle_response(
                response, target, strict_columns, span, log, adql_normalized, start_time
            )

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()
