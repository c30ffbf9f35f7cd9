"""Resolve IATA codes and keywords to coordinates, backed by the location store."""

from __future__ import annotations

import re
from datetime import UTC, datetime

import structlog

from travelmap.core.exceptions import InvalidInputError, NotFoundError, StoreUnavailableError
from travelmap.dto import LocationCandidateDTO, LocationDTO
from travelmap.dto.mappers import candidate_from_provider
from travelmap.repositories.interfaces import LocationStore
from travelmap.services.cache_keys import location_search_key
from travelmap.services.result_cache import LOCATION_SEARCH_TTL_SECONDS, ResultCache
from travelmap.services.travel_provider import LOCATION_SUB_TYPES, TravelProvider

logger = structlog.get_logger(__name__)

_CODE_RE = re.compile(r"^[A-Z]{3,4}$")
MIN_KEYWORD_LENGTH = 2
SEARCH_PAGE_LIMIT = 20


def normalize_code(code: str | None) -> str:
    """Upper-case ``code`` and reject anything that is not 3-4 ASCII letters."""

    normalized = (code or "").strip().upper()
    if not _CODE_RE.match(normalized):
        raise InvalidInputError(f"invalid location code: {code!r}")
    return normalized


class LocationResolver:
    def __init__(
        self,
        store: LocationStore,
        provider: TravelProvider,
        cache: ResultCache,
        *,
        search_ttl_seconds: int = LOCATION_SEARCH_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._provider = provider
        self._cache = cache
        self._search_ttl_seconds = search_ttl_seconds

    async def resolve(self, code: str) -> LocationDTO:
        """Return the stored location for ``code``, learning it from the provider on a miss.

        Stored rows are authoritative and are not re-validated here.
        Raises ``InvalidInputError`` for malformed codes and ``NotFoundError``
        when the provider has no coordinates for the code.
        """

        normalized = normalize_code(code)

        stored = await self._read_store(normalized)
        if stored is not None:
            return stored

        return await self._resolve_from_provider(normalized)

    async def refresh(self, code: str) -> LocationDTO:
        """Re-resolve ``code`` through the provider regardless of the stored row."""

        return await self._resolve_from_provider(normalize_code(code))

    async def search(self, keyword: str) -> list[LocationCandidateDTO]:
        """Free-text airport/city search ranked by provider relevance (cached for 24h).

        Every hit that carries coordinates is written to the store as a side effect.
        """

        cleaned = (keyword or "").strip()
        if len(cleaned) < MIN_KEYWORD_LENGTH:
            raise InvalidInputError(f"keyword must be at least {MIN_KEYWORD_LENGTH} characters")

        async def fetch() -> list[dict]:
            raw = await self._provider.find_locations(
                cleaned, LOCATION_SUB_TYPES, SEARCH_PAGE_LIMIT
            )
            candidates = sorted(
                (candidate_from_provider(item) for item in raw),
                key=lambda candidate: candidate.relevance,
                reverse=True,
            )
            await self._remember(candidates)
            return [candidate.model_dump(mode="json") for candidate in candidates]

        payload, _ = await self._cache.get_or_fill(
            location_search_key(cleaned), fetch, self._search_ttl_seconds
        )
        return [LocationCandidateDTO.model_validate(item) for item in payload]

    async def _resolve_from_provider(self, code: str) -> LocationDTO:
        raw = await self._provider.find_location_by_code(code)
        if raw is None:
            logger.info("location_not_found", code=code, reason="no_match")
            raise NotFoundError(f"location coordinates not found for {code}")

        candidate = candidate_from_provider(raw)
        if not candidate.has_coordinates:
            logger.info("location_not_found", code=code, reason="no_coordinates")
            raise NotFoundError(f"location coordinates not found for {code}")

        location = candidate.to_location(datetime.now(UTC))
        await self._write_store(location)
        return location

    async def _remember(self, candidates: list[LocationCandidateDTO]) -> None:
        now = datetime.now(UTC)
        for candidate in candidates:
            if candidate.code and candidate.has_coordinates:
                await self._write_store(candidate.to_location(now))

    async def _read_store(self, code: str) -> LocationDTO | None:
        try:
            return await self._store.get(code)
        except StoreUnavailableError as exc:
            logger.warning("location_store_read_failed", code=code, error=str(exc))
            return None

    async def _write_store(self, location: LocationDTO) -> None:
        try:
            await self._store.upsert(location)
        except StoreUnavailableError as exc:
            logger.warning("location_store_write_failed", code=location.code, error=str(exc))
