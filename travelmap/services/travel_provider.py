"""Travel provider boundary and the Amadeus Self-Service implementation."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import httpx
import structlog

from travelmap.core.exceptions import UpstreamUnavailableError

logger = structlog.get_logger(__name__)

LOCATION_SUB_TYPES = ("AIRPORT", "CITY")

_HOSTS = {
    "test": "https://test.api.amadeus.com",
    "production": "https://api.amadeus.com",
}
# Refresh the access token this long before the provider says it expires
_TOKEN_EXPIRY_MARGIN_SECONDS = 60


class TravelProvider(Protocol):
    """Provider-native payloads; normalization happens in ``travelmap.dto.mappers``."""

    async def find_locations(
        self, keyword: str, sub_types: Sequence[str] = LOCATION_SUB_TYPES, limit: int = 20
    ) -> list[dict[str, Any]]: ...

    async def find_location_by_code(self, code: str) -> dict[str, Any] | None: ...

    async def search_flight_offers(self, params: Mapping[str, Any]) -> dict[str, Any]: ...

    async def list_hotels_by_city(self, city_code: str) -> list[str]: ...

    async def search_hotel_offers(
        self, hotel_ids: Sequence[str], params: Mapping[str, Any]
    ) -> list[dict[str, Any]]: ...


def match_location_code(candidates: Sequence[Mapping[str, Any]], code: str) -> dict[str, Any] | None:
    """Return the first candidate whose IATA code equals ``code`` (case-insensitive)."""

    wanted = code.upper()
    for candidate in candidates:
        iata = candidate.get("iataCode")
        if isinstance(iata, str) and iata.upper() == wanted:
            return dict(candidate)
    return None


class AmadeusProvider(TravelProvider):
    """Amadeus REST client using OAuth2 client credentials.

    The ``httpx.AsyncClient`` is owned by the caller so it can be shared and
    closed with the rest of the application services.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        client_id: str,
        client_secret: str,
        hostname: str = "test",
        timeout: float = 30.0,
    ) -> None:
        if hostname not in _HOSTS:
            raise ValueError(f"unknown Amadeus hostname: {hostname}")
        self._client = client
        self._client_id = client_id
        self._client_secret = client_secret
        self._base_url = _HOSTS[hostname]
        self._timeout = timeout
        self._token: str | None = None
        self._token_expires_at = 0.0
        self._token_lock = asyncio.Lock()

    def _cached_token(self) -> str | None:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token
        return None

    async def _access_token(self) -> str:
        token = self._cached_token()
        if token:
            return token
        # concurrent callers wait for a single token request
        async with self._token_lock:
            token = self._cached_token()
            if token:
                return token
            return await self._request_token()

    async def _request_token(self) -> str:
        try:
            response = await self._client.post(
                f"{self._base_url}/v1/security/oauth2/token",
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(f"amadeus auth request failed: {exc}") from exc

        if not response.is_success:
            logger.error("amadeus_auth_failed", status=response.status_code)
            raise UpstreamUnavailableError(f"amadeus auth failed with status {response.status_code}")

        try:
            body = response.json()
            token = str(body["access_token"])
            expires_in = float(body.get("expires_in", 1799))
        except (ValueError, KeyError, TypeError) as exc:
            raise UpstreamUnavailableError("amadeus auth response is malformed") from exc

        self._token = token
        self._token_expires_at = time.monotonic() + max(0.0, expires_in - _TOKEN_EXPIRY_MARGIN_SECONDS)
        return token

    async def _get(self, path: str, params: Mapping[str, Any]) -> dict[str, Any]:
        for attempt in (1, 2):
            token = await self._access_token()
            try:
                response = await self._client.get(
                    f"{self._base_url}{path}",
                    params=params,
                    headers={"Authorization": f"Bearer {token}"},
                    timeout=self._timeout,
                )
            except httpx.HTTPError as exc:
                logger.warning("amadeus_request_failed", path=path, error=str(exc))
                raise UpstreamUnavailableError(f"amadeus request to {path} failed") from exc

            # Token revoked or expired early: drop it and try once more
            if response.status_code == 401 and attempt == 1:
                self._token = None
                continue
            break

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning("amadeus_error_status", path=path, status=response.status_code, detail=detail)
            raise UpstreamUnavailableError(
                f"amadeus {path} returned {response.status_code}: {detail}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise UpstreamUnavailableError(f"amadeus {path} returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise UpstreamUnavailableError(f"amadeus {path} returned an unexpected payload")
        return body

    async def find_locations(
        self, keyword: str, sub_types: Sequence[str] = LOCATION_SUB_TYPES, limit: int = 20
    ) -> list[dict[str, Any]]:
        body = await self._get(
            "/v1/reference-data/locations",
            {
                "keyword": keyword,
                "subType": ",".join(sub_types),
                "sort": "analytics.travelers.score",
                "page[limit]": limit,
            },
        )
        return [item for item in body.get("data") or [] if isinstance(item, dict)]

    async def find_location_by_code(self, code: str) -> dict[str, Any] | None:
        return match_location_code(await self.find_locations(code), code)

    async def search_flight_offers(self, params: Mapping[str, Any]) -> dict[str, Any]:
        body = await self._get("/v2/shopping/flight-offers", params)
        return {"data": list(body.get("data") or []), "meta": body.get("meta") or {}}

    async def list_hotels_by_city(self, city_code: str) -> list[str]:
        body = await self._get("/v1/reference-data/locations/hotels/by-city", {"cityCode": city_code})
        return [
            str(item["hotelId"])
            for item in body.get("data") or []
            if isinstance(item, dict) and item.get("hotelId")
        ]

    async def search_hotel_offers(
        self, hotel_ids: Sequence[str], params: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        if not hotel_ids:
            return []
        body = await self._get("/v3/shopping/hotel-offers", {"hotelIds": ",".join(hotel_ids), **params})
        return [item for item in body.get("data") or [] if isinstance(item, dict)]


def _error_detail(response: httpx.Response) -> str:
    try:
        errors = response.json().get("errors") or []
    except (ValueError, AttributeError):
        return response.reason_phrase or "error"
    if errors and isinstance(errors[0], dict):
        first = errors[0]
        return str(first.get("detail") or first.get("title") or "error")
    return response.reason_phrase or "error"
