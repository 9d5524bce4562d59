"""Lookup result and pipeline state models."""

from dataclasses import dataclass, field
from enum import StrEnum

from cepcast.models.address import Address, CityInfo
from cepcast.models.forecast import ForecastDay


class PipelineState(StrEnum):
    IDLE = "idle"
    RESOLVING_ADDRESS = "resolving_address"
    RESOLVING_CITY = "resolving_city"
    FETCHING_FORECAST = "fetching_forecast"
    AGGREGATING = "aggregating"
    DONE = "done"
    ADDRESS_FAILED = "address_failed"
    CITY_UNRESOLVED = "city_unresolved"
    SUPERSEDED = "superseded"


class FailureKind(StrEnum):
    ADDRESS_NOT_FOUND = "address_not_found"
    CITY_UNRESOLVED = "city_unresolved"


@dataclass
class LookupResult:
    run_id: str
    postal_code: str
    state: PipelineState = PipelineState.IDLE
    address: Address | None = None
    city: CityInfo | None = None
    forecast: list[ForecastDay] = field(default_factory=list)
    error: FailureKind | None = None
    degraded: list[FailureKind] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.DONE and self.address is not None
