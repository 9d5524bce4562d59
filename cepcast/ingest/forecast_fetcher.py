"""Forecast fetcher: retrieves and decodes CPTEC forecasts for a city id."""

import logging
from typing import Any

from cepcast.ingest.brasilapi_client import BrasilApiClient, BrasilApiError
from cepcast.ingest.condition_codes import decode
from cepcast.models.forecast import ForecastDay

logger = logging.getLogger(__name__)

FORECAST_DAYS = 5
FORECAST_PATH = "/cptec/v1/clima/previsao/{city_id}/{days}"


class ForecastFetcher:
    def __init__(self, client: BrasilApiClient):
        self.client = client

    async def fetch_forecast(self, city_id: str) -> list[ForecastDay]:
        """Fetch the 5-day forecast. Any failure yields an empty list."""
        path = FORECAST_PATH.format(city_id=city_id, days=FORECAST_DAYS)
        try:
            raw = await self.client.get_json(path)
        except BrasilApiError as e:
            logger.warning("Forecast fetch failed for city %s: %s", city_id, e)
            return []

        try:
            days = _extract_days(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed forecast payload for city %s: %s", city_id, e)
            return []

        logger.info("Fetched %d forecast days for city %s", len(days), city_id)
        return days


def _extract_days(raw: Any) -> list[ForecastDay]:
    if not isinstance(raw, dict):
        raise TypeError(f"expected object, got {type(raw).__name__}")
    entries = raw["clima"]
    if not isinstance(entries, list):
        raise TypeError("'clima' is not a list")
    return [_parse_day(e) for e in entries[:FORECAST_DAYS]]


def _parse_day(entry: Any) -> ForecastDay:
    if not isinstance(entry, dict):
        raise TypeError(f"forecast day is {type(entry).__name__}")
    code = str(entry.get("condicao") or "")
    symbol = decode(code)
    description = entry.get("condicao_desc")
    if not isinstance(description, str) or not description.strip():
        description = symbol.label

    uv = entry.get("indice_uv")
    return ForecastDay(
        date=str(entry["data"]),
        condition_code=code,
        condition_symbol=symbol,
        condition_description=description.strip(),
        min_temp=int(entry["min"]),
        max_temp=int(entry["max"]),
        uv_index=float(uv) if uv is not None else None,
    )
