"""Output formatters for lookup results and reminders."""

import json

from cepcast.models.address import Address, CachedLocation
from cepcast.models.common import NOT_INFORMED
from cepcast.models.forecast import ForecastDay
from cepcast.models.reporting import FailureKind, LookupResult

ADDRESS_NOT_FOUND_TEXT = "CEP não encontrado"
NO_FORECAST_TEXT = "Previsão do tempo indisponível"


def format_address(address: Address) -> str:
    lines = [
        f"Estado: {address.state or NOT_INFORMED}",
        f"Cidade: {address.city or NOT_INFORMED}",
        f"Bairro: {address.neighborhood or NOT_INFORMED}",
        f"Rua: {address.street or NOT_INFORMED}",
    ]
    return "\n".join(lines)


def format_forecast_day(day: ForecastDay) -> str:
    lines = [
        f"Data: {day.date}",
        f"Condição: {day.condition_symbol.emoji} {day.condition_description}",
        f"Mínima: {day.min_temp}°C, Máxima: {day.max_temp}°C",
    ]
    if day.uv_index is not None:
        lines.append(f"Índice UV: {day.uv_index:g}")
    return "\n".join(lines)


def format_result_text(result: LookupResult) -> str:
    """Plain text rendering of a lookup for the terminal."""
    if result.error == FailureKind.ADDRESS_NOT_FOUND or result.address is None:
        return f"Resultado do CEP {result.postal_code}:\n{ADDRESS_NOT_FOUND_TEXT}"

    parts = [
        f"Resultado do CEP {result.postal_code}:",
        format_address(result.address),
        "",
        "Resultado da Previsão do Tempo:",
    ]
    if not result.forecast:
        parts.append(NO_FORECAST_TEXT)
    for day in result.forecast:
        parts.append(format_forecast_day(day))
        parts.append("")
    return "\n".join(parts).rstrip()


def format_result_json(result: LookupResult) -> str:
    """JSON rendering for programmatic consumption."""
    address = result.address
    city = result.city
    data = {
        "run_id": result.run_id,
        "postal_code": result.postal_code,
        "state": result.state.value,
        "error": result.error.value if result.error else None,
        "address": None if address is None else {
            "state": address.state,
            "city": address.city,
            "neighborhood": address.neighborhood or NOT_INFORMED,
            "street": address.street or NOT_INFORMED,
        },
        "city": None if city is None else {
            "id": city.id,
            "name": city.name,
            "state": city.state,
            "latitude": city.latitude,
            "longitude": city.longitude,
        },
        "forecast": [
            {
                "date": d.date,
                "condition": d.condition_code,
                "symbol": d.condition_symbol.value,
                "description": d.condition_description,
                "min": d.min_temp,
                "max": d.max_temp,
                "uv_index": d.uv_index,
            }
            for d in result.forecast
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_reminder(city_name: str, tomorrow: ForecastDay) -> str:
    """Reminder text for tomorrow's forecast."""
    return (
        f"Amanhã em {city_name}: {tomorrow.condition_symbol.emoji} "
        f"{tomorrow.condition_description}, "
        f"mín. {tomorrow.min_temp}°C / máx. {tomorrow.max_temp}°C"
    )


def format_cached_location(location: CachedLocation) -> str:
    place = location.name
    if location.state:
        place = f"{place}/{location.state}"
    return (
        f"Última localização: {place} (id {location.city_id})\n"
        f"Coordenadas: {location.latitude:.4f}, {location.longitude:.4f}\n"
        f"Salva em: {location.saved_at}"
    )
