"""City resolver: city name -> CPTEC city id and coordinates."""

import logging
import math
from typing import Any
from urllib.parse import quote

from cepcast.ingest.brasilapi_client import BrasilApiClient, BrasilApiError
from cepcast.models.address import CityInfo

logger = logging.getLogger(__name__)

CITY_PATH = "/cptec/v1/cidade/{name}"


class CityResolver:
    def __init__(self, client: BrasilApiClient):
        self.client = client

    async def resolve_city(self, city_name: str | None) -> CityInfo | None:
        """Look up a city by exact name.

        When the directory returns several cities with the same name the
        first one is taken as-is; the payload carries nothing better to
        choose by. No match and any failure both give None.
        """
        if not city_name or not city_name.strip():
            return None

        path = CITY_PATH.format(name=quote(city_name.strip(), safe=""))
        try:
            raw = await self.client.get_json(path)
        except BrasilApiError as e:
            logger.warning("City lookup failed for %r: %s", city_name, e)
            return None

        if not isinstance(raw, list):
            logger.warning(
                "City lookup for %r returned %s, expected a list",
                city_name, type(raw).__name__,
            )
            return None
        if not raw:
            logger.info("No CPTEC city matches %r", city_name)
            return None
        if len(raw) > 1:
            logger.info(
                "%d CPTEC cities match %r, using the first", len(raw), city_name
            )

        return _parse_city(raw[0], city_name)


def _parse_city(item: Any, city_name: str) -> CityInfo | None:
    if not isinstance(item, dict) or item.get("id") is None:
        logger.warning("City entry for %r has no id: %r", city_name, item)
        return None
    name = item.get("nome") or item.get("name") or city_name
    return CityInfo(
        id=str(item["id"]),
        name=str(name),
        state=item.get("estado") or item.get("state"),
        latitude=parse_coordinate(item.get("latitude")),
        longitude=parse_coordinate(item.get("longitude")),
    )


def parse_coordinate(value: Any) -> float | None:
    """Parse a number or numeric string; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
