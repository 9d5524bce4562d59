"""Resolution pipeline: CEP -> address -> city -> forecast orchestration."""

import asyncio
import logging
import uuid
from collections.abc import Callable

from cepcast.config.schema import CepcastConfig
from cepcast.ingest.address_resolver import AddressNotFoundError, AddressResolver
from cepcast.ingest.brasilapi_client import BrasilApiClient
from cepcast.ingest.city_resolver import CityResolver
from cepcast.ingest.condition_codes import register_conditions
from cepcast.ingest.forecast_fetcher import ForecastFetcher
from cepcast.ingest.postal_code import normalize
from cepcast.models.reporting import FailureKind, LookupResult, PipelineState
from cepcast.notify.scheduler import NotificationScheduler
from cepcast.pipeline.state_machine import Effect, transition
from cepcast.reporting.formatters import format_reminder
from cepcast.storage.location_cache import LocationCache

logger = logging.getLogger(__name__)

ResultCallback = Callable[[LookupResult], None]


class ResolutionPipeline:
    """Runs one lookup per submitted CEP and publishes the aggregate.

    Every lookup takes a generation token. Once a newer lookup has started,
    an older one stops at its next checkpoint and never publishes, caches
    or schedules anything.
    """

    def __init__(
        self,
        address_resolver: AddressResolver,
        city_resolver: CityResolver,
        forecast_fetcher: ForecastFetcher,
        cache: LocationCache,
        scheduler: NotificationScheduler,
    ):
        self.address_resolver = address_resolver
        self.city_resolver = city_resolver
        self.forecast_fetcher = forecast_fetcher
        self.cache = cache
        self.scheduler = scheduler
        self.state = PipelineState.IDLE
        self.latest_result: LookupResult | None = None
        self._generation = 0
        self._subscribers: list[ResultCallback] = []

    @classmethod
    def from_config(cls, config: CepcastConfig) -> "ResolutionPipeline":
        register_conditions(config.conditions.extra_codes)
        client = BrasilApiClient(
            base_url=config.services.base_url,
            user_agent=config.services.user_agent,
            timeout=config.services.timeout_seconds,
        )
        return cls(
            AddressResolver(client),
            CityResolver(client),
            ForecastFetcher(client),
            LocationCache(config.cache.db_path, config.cache.key),
            NotificationScheduler.from_config(config.notifications),
        )

    def subscribe(self, callback: ResultCallback) -> None:
        self._subscribers.append(callback)

    def submit(self, raw_postal_code: str) -> asyncio.Task:
        """Start a lookup in the background, superseding any run in flight."""
        return asyncio.get_running_loop().create_task(self.lookup(raw_postal_code))

    async def lookup(self, raw_postal_code: str) -> LookupResult:
        self._generation += 1
        token = self._generation
        result = LookupResult(
            run_id=str(uuid.uuid4()), postal_code=normalize(raw_postal_code)
        )
        self._enter(result, token, transition(PipelineState.IDLE).state)
        logger.info("Lookup %s started for CEP %r", result.run_id[:8], result.postal_code)

        # 1. ADDRESS
        try:
            address = await self.address_resolver.resolve_address(result.postal_code)
        except AddressNotFoundError as e:
            if self._is_stale(token):
                return self._abandon(result)
            logger.info("Lookup %s: %s", result.run_id[:8], e)
            step = transition(result.state, e)
            result.error = FailureKind.ADDRESS_NOT_FOUND
            self._enter(result, token, step.state)
            self._apply(step.effects, result, token)
            return result

        if self._is_stale(token):
            return self._abandon(result)
        result.address = address
        self._enter(result, token, transition(result.state, address).state)

        # 2. CITY
        city = await self.city_resolver.resolve_city(address.city)
        if self._is_stale(token):
            return self._abandon(result)
        step = transition(result.state, city)
        self._enter(result, token, step.state)

        # 3. FORECAST
        if city is None:
            result.degraded.append(FailureKind.CITY_UNRESOLVED)
            logger.info(
                "Lookup %s: no city for %r, skipping forecast",
                result.run_id[:8], address.city,
            )
        else:
            result.city = city
            forecast = await self.forecast_fetcher.fetch_forecast(city.id)
            if self._is_stale(token):
                return self._abandon(result)
            result.forecast = forecast

        # 4. AGGREGATE
        self._enter(result, token, transition(result.state).state)
        step = transition(result.state, result)
        self._enter(result, token, step.state)
        self._apply(step.effects, result, token)
        logger.info(
            "Lookup %s done: city=%s forecast_days=%d",
            result.run_id[:8],
            result.city.name if result.city else None,
            len(result.forecast),
        )
        return result

    def _is_stale(self, token: int) -> bool:
        return token != self._generation

    def _enter(self, result: LookupResult, token: int, state: PipelineState) -> None:
        result.state = state
        if not self._is_stale(token):
            self.state = state

    def _abandon(self, result: LookupResult) -> LookupResult:
        logger.info(
            "Lookup %s superseded while %s, discarding",
            result.run_id[:8], result.state.value,
        )
        result.state = PipelineState.SUPERSEDED
        return result

    def _apply(self, effects: tuple[Effect, ...], result: LookupResult, token: int) -> None:
        for effect in effects:
            if self._is_stale(token):
                self._abandon(result)
                return
            if effect == Effect.CLEAR_RESULT:
                self.latest_result = None
            elif effect == Effect.SAVE_LOCATION and result.city is not None:
                self.cache.save(result.city)
            elif effect == Effect.SCHEDULE_REMINDER and result.city is not None:
                self.scheduler.schedule_reminder(
                    format_reminder(result.city.name, result.forecast[1])
                )
            elif effect == Effect.PUBLISH_RESULT:
                self._publish(result)

    def _publish(self, result: LookupResult) -> None:
        self.latest_result = result
        for callback in self._subscribers:
            try:
                callback(result)
            except Exception:
                logger.exception("Result subscriber %r failed", callback)
