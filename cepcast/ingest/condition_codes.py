"""Decoder for CPTEC compact weather condition codes."""

import logging
from collections.abc import Mapping

from cepcast.models.forecast import ConditionSymbol

logger = logging.getLogger(__name__)

CONDITION_CODES: dict[str, ConditionSymbol] = {
    "c": ConditionSymbol.SUN,
    "ci": ConditionSymbol.PARTLY_CLOUDY,
    "pnt": ConditionSymbol.AFTERNOON_SHOWERS,
    "pn": ConditionSymbol.NIGHT_SHOWERS,
    "ps": ConditionSymbol.MORNING_SHOWERS,
    "e": ConditionSymbol.OVERCAST_ISOLATED_RAIN,
}


def decode(code: str | None) -> ConditionSymbol:
    """Map a condition code to its symbol. Unknown codes give UNKNOWN."""
    if not isinstance(code, str):
        return ConditionSymbol.UNKNOWN
    return CONDITION_CODES.get(code.strip().lower(), ConditionSymbol.UNKNOWN)


def register_condition(code: str, symbol: ConditionSymbol) -> None:
    """Add or replace a code in the decode table."""
    key = code.strip().lower()
    if not key:
        raise ValueError("Condition code must not be blank")
    previous = CONDITION_CODES.get(key)
    if previous is not None and previous != symbol:
        logger.info("Condition code %r remapped: %s -> %s", key, previous, symbol)
    CONDITION_CODES[key] = symbol


def register_conditions(codes: Mapping[str, ConditionSymbol]) -> None:
    for code, symbol in codes.items():
        register_condition(code, symbol)
