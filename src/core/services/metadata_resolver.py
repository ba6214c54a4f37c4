"""Instance metadata resolution.

This module turns the raw task metadata document into the flat record a
service-registration client expects. Every logical field is extracted by
an independent rule; the rules run as separate coroutines joined with
`asyncio.gather`, and any field without data is dropped from the record.

Missing metadata is never an error here: an unreachable endpoint or a
partial document degrades to an empty or partial record.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

import httpx

from adapters.metadata_fetcher import HttpMetadataFetcher
from adapters.metadata_sources import get_schema
from core.config import AppSettings
from core.domain.fields import MetadataField
from core.domain.models import FetchResult, RawMetadataDocument, ResolvedMetadataRecord
from core.domain.rules import ConstantRule
from core.interfaces.fetcher import ExtractionRule, MetadataFetcher, MetadataSchema

logger = logging.getLogger(__name__)

_EMPTY_DOCUMENT: Mapping[str, Any] = MappingProxyType({})


@dataclass
class ResolveHooks:
    """Optional callbacks for registration clients."""

    on_result: Callable[[ResolvedMetadataRecord], None] | None = None


def normalize_value(value: Any) -> str | None:
    """Convert a rule output to the record's string form (None when absent)."""

    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


async def _extract(
    field: MetadataField,
    rule: ExtractionRule,
    document: Mapping[str, Any],
) -> tuple[MetadataField, str | None]:
    try:
        value = rule(document)
    except Exception as exc:
        logger.warning("Extraction rule for %s failed: %s", field.value, exc)
        return field, None
    return field, normalize_value(value)


async def resolve_fields(
    document: RawMetadataDocument | None,
    *,
    rules: Mapping[MetadataField, ExtractionRule],
    include_constants: bool = True,
) -> ResolvedMetadataRecord:
    """Run every extraction rule against `document` and keep resolved fields.

    With no document only constant rules run (or none at all when
    `include_constants` is False).
    """

    if document is None:
        if not include_constants:
            return {}
        rules = {field: rule for field, rule in rules.items() if isinstance(rule, ConstantRule)}
        view = _EMPTY_DOCUMENT
    else:
        view = MappingProxyType(document)

    results = await asyncio.gather(*(_extract(field, rule, view) for field, rule in rules.items()))
    return {field.value: value for field, value in results if value}


def metadata_url(settings: AppSettings, schema: MetadataSchema) -> str | None:
    """Endpoint URL for `schema`, from settings or the schema's env var."""

    return settings.metadata_uri or os.environ.get(schema.env_var) or None


class InstanceMetadataResolver:
    """Fetcher + resolver: what a registration client talks to.

    The fetcher owns the cached document; each `resolve` call reads the
    current snapshot and builds a fresh record from it.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        fetcher: MetadataFetcher | None = None,
        schema: MetadataSchema | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._schema = schema or get_schema(self._settings.schema_version)
        self._fetcher = fetcher or HttpMetadataFetcher(
            metadata_url(self._settings, self._schema),
            settings=self._settings,
            transport=transport,
        )
        self._lazy_fetch: asyncio.Task[FetchResult] | None = None

    @property
    def fetcher(self) -> MetadataFetcher:
        return self._fetcher

    @property
    def schema(self) -> MetadataSchema:
        return self._schema

    def prefetch(self) -> asyncio.Task[FetchResult]:
        """Start fetching eagerly; `resolve` will not wait for it."""

        return self._fetcher.prefetch()

    async def resolve(
        self,
        *,
        refresh: bool = False,
        hooks: ResolveHooks | None = None,
    ) -> ResolvedMetadataRecord:
        hooks = hooks or ResolveHooks()
        document = await self._current_document(refresh=refresh)
        record = await resolve_fields(
            document,
            rules=self._schema.rules(),
            include_constants=self._settings.include_constants_without_document,
        )
        logger.info("Resolved instance metadata (%d fields): %s", len(record), record)
        if hooks.on_result:
            hooks.on_result(record)
        return record

    async def _current_document(self, *, refresh: bool) -> RawMetadataDocument | None:
        if not refresh:
            document = self._fetcher.snapshot()
            if document is not None:
                return document
        lazy = self._lazy_fetch
        if lazy is not None and not lazy.done():
            # Started by a sibling resolve(); bounded by the httpx timeout.
            result = await asyncio.shield(lazy)
        elif self._fetcher.in_flight:
            logger.debug("Metadata prefetch still in flight; resolving without a document")
            return self._fetcher.snapshot()
        else:
            self._lazy_fetch = self._fetcher.prefetch()
            result = await asyncio.shield(self._lazy_fetch)
        return result.document if result.ok else self._fetcher.snapshot()

