"""CPTEC forecast data models."""

from dataclasses import dataclass
from enum import StrEnum


class ConditionSymbol(StrEnum):
    SUN = "sun"
    PARTLY_CLOUDY = "partly_cloudy"
    AFTERNOON_SHOWERS = "afternoon_showers"
    NIGHT_SHOWERS = "night_showers"
    MORNING_SHOWERS = "morning_showers"
    OVERCAST_ISOLATED_RAIN = "overcast_isolated_rain"
    UNKNOWN = "unknown"

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_EMOJI: dict[ConditionSymbol, str] = {
    ConditionSymbol.SUN: "☀️",
    ConditionSymbol.PARTLY_CLOUDY: "🌤️",
    ConditionSymbol.AFTERNOON_SHOWERS: "⛅",
    ConditionSymbol.NIGHT_SHOWERS: "🌧️",
    ConditionSymbol.MORNING_SHOWERS: "🌧️",
    ConditionSymbol.OVERCAST_ISOLATED_RAIN: "🌩️",
    ConditionSymbol.UNKNOWN: "❔",
}

_LABELS: dict[ConditionSymbol, str] = {
    ConditionSymbol.SUN: "Sol",
    ConditionSymbol.PARTLY_CLOUDY: "Parcialmente nublado",
    ConditionSymbol.AFTERNOON_SHOWERS: "Pancadas de chuva à tarde",
    ConditionSymbol.NIGHT_SHOWERS: "Pancadas de chuva à noite",
    ConditionSymbol.MORNING_SHOWERS: "Pancadas de chuva pela manhã",
    ConditionSymbol.OVERCAST_ISOLATED_RAIN: "Encoberto com chuvas isoladas",
    ConditionSymbol.UNKNOWN: "Condição desconhecida",
}


@dataclass(frozen=True)
class ForecastDay:
    date: str  # YYYY-MM-DD
    condition_code: str
    condition_symbol: ConditionSymbol
    condition_description: str
    min_temp: int
    max_temp: int
    uv_index: float | None = None
