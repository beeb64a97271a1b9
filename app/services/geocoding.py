from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.core.config import (
    GEOCODER_COUNTRY_CODES,
    GEOCODER_USER_AGENT,
    HTTP_TIMEOUT_SECONDS,
    NOMINATIM_URL,
    OSRM_URL,
)

logger = logging.getLogger(__name__)

# (longitude, latitude): ordem do OSRM, inversa da resposta do Nominatim
Coordinate = tuple[float, float]


@dataclass(frozen=True)
class RouteResult:
    distance_meters: float
    duration_seconds: float


class _HttpClientMixin:
    _client: httpx.Client | None
    _timeout: float

    def _get(self, url: str, *, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url, params=params, headers=headers)
        with httpx.Client(timeout=self._timeout) as client:
            return client.get(url, params=params, headers=headers)


class NominatimGeocoder(_HttpClientMixin):
    def __init__(
        self,
        base_url: str = NOMINATIM_URL,
        *,
        user_agent: str = GEOCODER_USER_AGENT,
        country_codes: str = GEOCODER_COUNTRY_CODES,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._country_codes = country_codes
        self._timeout = timeout
        self._client = client

    def geocode(self, address: str) -> Coordinate | None:
        params = {
            "format": "json",
            "q": address,
            "countrycodes": self._country_codes,
            "limit": 1,
        }
        try:
            response = self._get(
                f"{self._base_url}/search",
                params=params,
                headers={"User-Agent": self._user_agent},
            )
            response.raise_for_status()
            data = response.json()
            if not data:
                return None
            first = data[0]
            return float(first["lon"]), float(first["lat"])
        except Exception:
            logger.warning("Erro no geocoding do endereço '%s'", address, exc_info=True)
            return None


class OsrmRouter(_HttpClientMixin):
    def __init__(
        self,
        base_url: str = OSRM_URL,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    def route(self, origin: Coordinate, destination: Coordinate) -> RouteResult | None:
        coords = f"{origin[0]},{origin[1]};{destination[0]},{destination[1]}"
        try:
            response = self._get(
                f"{self._base_url}/route/v1/driving/{coords}",
                params={"overview": "false"},
            )
            response.raise_for_status()
            data = response.json()
            routes = data.get("routes") or []
            if data.get("code") != "Ok" or not routes:
                logger.warning("OSRM sem rota: code=%s", data.get("code"))
                return None
            return RouteResult(
                distance_meters=float(routes[0]["distance"]),
                duration_seconds=float(routes[0].get("duration") or 0),
            )
        except Exception:
            logger.warning("Erro ao calcular rota %s", coords, exc_info=True)
            return None
