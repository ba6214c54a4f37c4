"""Fetcher HTTP del documento de metadata.

Hace una sola petición GET al endpoint configurado y cachea en memoria el
último documento válido. Nunca lanza: cualquier fallo (red, timeout,
status != 200, JSON inválido) se registra en el log y se devuelve como un
`FetchResult` fallido.
"""

from __future__ import annotations

import asyncio
import json
import logging

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import FetchResult, RawMetadataDocument
from core.errors import MetadataFetchError

logger = logging.getLogger(__name__)


class HttpMetadataFetcher:
    """Pide el documento crudo al metadata endpoint y lo cachea."""

    def __init__(
        self,
        url: str | None,
        *,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._settings = settings or AppSettings()
        self._transport = transport
        self._document: RawMetadataDocument | None = None
        self._last_result: FetchResult | None = None
        self._task: asyncio.Task[FetchResult] | None = None

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_result(self) -> FetchResult | None:
        return self._last_result

    def snapshot(self) -> RawMetadataDocument | None:
        return self._document

    def prefetch(self) -> asyncio.Task[FetchResult]:
        """Lanza el fetch en segundo plano (o devuelve el que ya está en curso)."""

        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._fetch_once())
        return self._task

    async def fetch(self) -> FetchResult:
        # shield: cancelar a un llamador no cancela el fetch compartido.
        return await asyncio.shield(self.prefetch())

    async def _fetch_once(self) -> FetchResult:
        if not self._url:
            logger.warning("No metadata endpoint configured; skipping metadata fetch")
            result = FetchResult.failure(url=None, error="metadata endpoint not configured")
        else:
            try:
                document = await self._request(self._url)
            except MetadataFetchError as exc:
                logger.error("Error requesting metadata from %s: %s", self._url, exc)
                result = FetchResult.failure(url=self._url, error=str(exc), status_code=exc.status_code)
            else:
                logger.debug("Received metadata: %s", json.dumps(document, sort_keys=True))
                result = FetchResult(ok=True, url=self._url, status_code=200, document=document)
                self._document = document

        self._last_result = result
        return result

    async def _request(self, url: str) -> RawMetadataDocument:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise MetadataFetchError(f"{exc.__class__.__name__}: {exc}") from exc

        if response.status_code != 200:
            raise MetadataFetchError(
                f"unexpected HTTP status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            document = response.json()
        except ValueError as exc:
            raise MetadataFetchError(f"malformed metadata body: {exc}", status_code=200) from exc

        if not isinstance(document, dict):
            raise MetadataFetchError(
                f"expected a JSON object, got {type(document).__name__}",
                status_code=200,
            )
        return document
