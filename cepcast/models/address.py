"""Address and city directory models."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Address:
    postal_code: str
    state: str | None = None
    city: str | None = None
    neighborhood: str | None = None
    street: str | None = None


@dataclass(frozen=True)
class CityInfo:
    id: str
    name: str
    state: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_coordinates(self) -> bool:
        """True only when both coordinates are finite and in range."""
        if self.latitude is None or self.longitude is None:
            return False
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            return False
        return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180


@dataclass(frozen=True)
class CachedLocation:
    city_id: str
    name: str
    latitude: float
    longitude: float
    saved_at: str
    state: str | None = None
