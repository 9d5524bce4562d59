"""Durable single-slot store for the last resolved location."""

import json
import logging
import sqlite3
from contextlib import closing
from pathlib import Path

from cepcast.ingest.city_resolver import parse_coordinate
from cepcast.models.address import CachedLocation, CityInfo
from cepcast.models.common import utc_now_iso
from cepcast.storage import state_repo
from cepcast.storage.database import open_database

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "last_location"


class LocationCache:
    """Owns the persisted "last location" record.

    Neither operation raises: a broken store degrades to "nothing cached"
    on load and to a logged no-op on save.
    """

    def __init__(self, db_path: str | Path, key: str = DEFAULT_CACHE_KEY):
        self.db_path = db_path
        self.key = key

    def load(self) -> CachedLocation | None:
        try:
            with closing(open_database(self.db_path)) as conn:
                raw = state_repo.get_system_state(conn, self.key)
        except (sqlite3.Error, OSError):
            logger.exception("Could not read cached location from %s", self.db_path)
            return None

        if raw is None:
            return None
        cached = _decode(raw)
        if cached is None:
            logger.warning("Ignoring corrupt cached location under key %r", self.key)
        return cached

    def save(self, city: CityInfo) -> None:
        if not city.has_coordinates:
            logger.debug("Not caching city %s: no usable coordinates", city.id)
            return

        record = {
            "city_id": city.id,
            "name": city.name,
            "state": city.state,
            "latitude": city.latitude,
            "longitude": city.longitude,
            "saved_at": utc_now_iso(),
        }
        try:
            with closing(open_database(self.db_path)) as conn:
                state_repo.set_system_state(conn, self.key, json.dumps(record))
        except (sqlite3.Error, OSError):
            logger.exception("Could not persist location for city %s", city.id)
            return
        logger.info("Cached location %s (%s)", city.name, city.id)


def _decode(raw: str) -> CachedLocation | None:
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    latitude = parse_coordinate(data.get("latitude"))
    longitude = parse_coordinate(data.get("longitude"))
    city_id = data.get("city_id")
    if latitude is None or longitude is None or city_id is None:
        return None
    candidate = CityInfo(
        id=str(city_id),
        name=str(data.get("name") or ""),
        latitude=latitude,
        longitude=longitude,
    )
    if not candidate.has_coordinates:
        return None

    return CachedLocation(
        city_id=candidate.id,
        name=candidate.name,
        state=data.get("state"),
        latitude=latitude,
        longitude=longitude,
        saved_at=str(data.get("saved_at") or ""),
    )
