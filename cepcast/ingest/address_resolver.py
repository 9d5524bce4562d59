"""Address resolver: CEP -> structured address via BrasilAPI."""

import logging
from typing import Any

from cepcast.ingest.brasilapi_client import BrasilApiClient, BrasilApiError
from cepcast.ingest.postal_code import is_complete
from cepcast.models.address import Address

logger = logging.getLogger(__name__)

CEP_PATH = "/cep/v2/{cep}"


class AddressNotFoundError(Exception):
    """The CEP could not be resolved, for whatever reason."""

    def __init__(self, postal_code: str, reason: str = ""):
        super().__init__(f"CEP {postal_code!r} not found{': ' + reason if reason else ''}")
        self.postal_code = postal_code


class AddressResolver:
    def __init__(self, client: BrasilApiClient):
        self.client = client

    async def resolve_address(self, postal_code: str) -> Address:
        """Resolve a normalized CEP.

        Not-found, transport failures and malformed bodies all raise
        AddressNotFoundError.
        """
        if not is_complete(postal_code):
            raise AddressNotFoundError(postal_code, "incomplete postal code")

        try:
            raw = await self.client.get_json(CEP_PATH.format(cep=postal_code))
        except BrasilApiError as e:
            logger.info("Address lookup failed for %s: %s", postal_code, e)
            raise AddressNotFoundError(postal_code, str(e)) from e

        if not isinstance(raw, dict):
            raise AddressNotFoundError(
                postal_code, f"unexpected payload type {type(raw).__name__}"
            )

        address = Address(
            postal_code=postal_code,
            state=_as_text(raw.get("state")),
            city=_as_text(raw.get("city")),
            neighborhood=_as_text(raw.get("neighborhood")),
            street=_as_text(raw.get("street")),
        )
        if not any((address.state, address.city, address.neighborhood, address.street)):
            raise AddressNotFoundError(postal_code, "no address fields in payload")
        return address


def _as_text(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
