from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from threading import Lock
from typing import Protocol

from app.core.config import (
    FREIGHT_MINIMUM,
    FREIGHT_PRICE_PER_KM,
    HOME_CITY,
    HOME_COUNTRY,
    HOME_STATE,
    STORE_ADDRESS,
)
from app.services.geocoding import Coordinate, RouteResult

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def geocode(self, address: str) -> Coordinate | None:
        ...


class Router(Protocol):
    def route(self, origin: Coordinate, destination: Coordinate) -> RouteResult | None:
        ...


@dataclass(frozen=True)
class FreightConfig:
    store_address: str = STORE_ADDRESS
    price_per_km: float = FREIGHT_PRICE_PER_KM
    minimum_freight: float = FREIGHT_MINIMUM
    home_city: str = HOME_CITY
    home_state: str = HOME_STATE
    home_country: str = HOME_COUNTRY


@dataclass(frozen=True)
class FreightQuote:
    distance_km: float
    freight: float


def calculate_freight_from_distance(distance_km: float, config: FreightConfig) -> float:
    """max(distância * preço/km, frete mínimo): o frete nunca é zerado."""
    return max(distance_km * config.price_per_km, config.minimum_freight)


def meters_to_km(distance_meters: float) -> float:
    return math.floor(distance_meters / 1000 * 10 + 0.5) / 10


def _cache_key(address: str) -> str:
    return " ".join(address.lower().split())


class FreightCalculator:
    def __init__(self, config: FreightConfig, geocoder: Geocoder, router: Router) -> None:
        self.config = config
        self._geocoder = geocoder
        self._router = router
        # Endereço normalizado -> coordenada; sem expiração durante o processo.
        self._coordinates: dict[str, Coordinate] = {}
        self._lock = Lock()

    def normalize_customer_address(self, address: str) -> str:
        address = address.strip()
        if self.config.home_city.lower() in address.lower():
            return address
        return f"{address}, {self.config.home_city}, {self.config.home_state}, {self.config.home_country}"

    def resolve(self, address: str) -> Coordinate | None:
        key = _cache_key(address)
        with self._lock:
            cached = self._coordinates.get(key)
        if cached is not None:
            return cached

        coordinate = self._geocoder.geocode(address)
        if coordinate is not None:
            with self._lock:
                self._coordinates[key] = coordinate
        return coordinate

    def calculate_distance_km(self, origin: Coordinate, destination: Coordinate) -> float | None:
        route = self._router.route(origin, destination)
        if route is None:
            return None
        return meters_to_km(route.distance_meters)

    def calculate_freight_for_address(self, address: str) -> FreightQuote | None:
        if not address or not address.strip():
            return None
        try:
            store = self.resolve(self.config.store_address)
            if store is None:
                logger.error("Não foi possível geocodificar o endereço da loja")
                return None

            customer = self.resolve(self.normalize_customer_address(address))
            if customer is None:
                logger.warning("Não foi possível geocodificar o endereço do cliente: %s", address)
                return None

            distance_km = self.calculate_distance_km(store, customer)
            if distance_km is None:
                logger.warning("Não foi possível calcular a distância até %s", address)
                return None

            return FreightQuote(
                distance_km=distance_km,
                freight=calculate_freight_from_distance(distance_km, self.config),
            )
        except Exception:
            logger.exception("Erro ao calcular frete para %s", address)
            return None

    @property
    def cached_addresses(self) -> int:
        with self._lock:
            return len(self._coordinates)
