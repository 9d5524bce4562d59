"""Lookup state machine: pure transitions plus the side effects they request."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cepcast.models.address import Address, CityInfo
from cepcast.models.reporting import LookupResult, PipelineState

MIN_DAYS_FOR_REMINDER = 2


class Effect(StrEnum):
    CLEAR_RESULT = "clear_result"
    SAVE_LOCATION = "save_location"
    SCHEDULE_REMINDER = "schedule_reminder"
    PUBLISH_RESULT = "publish_result"


@dataclass(frozen=True)
class Transition:
    state: PipelineState
    effects: tuple[Effect, ...] = ()


TERMINAL_STATES = frozenset(
    {PipelineState.DONE, PipelineState.ADDRESS_FAILED, PipelineState.SUPERSEDED}
)


def transition(state: PipelineState, outcome: Any = None) -> Transition:
    """Next state for `state` given the stage outcome.

    Outcomes per state:
      RESOLVING_ADDRESS  an Address, or anything else for failure
      RESOLVING_CITY     a CityInfo, or None
      FETCHING_FORECAST  the (possibly empty) list of days
      AGGREGATING        the LookupResult being completed
    """
    if state == PipelineState.IDLE:
        return Transition(PipelineState.RESOLVING_ADDRESS)

    if state == PipelineState.RESOLVING_ADDRESS:
        if isinstance(outcome, Address):
            return Transition(PipelineState.RESOLVING_CITY)
        return Transition(
            PipelineState.ADDRESS_FAILED,
            (Effect.CLEAR_RESULT, Effect.PUBLISH_RESULT),
        )

    if state == PipelineState.RESOLVING_CITY:
        if isinstance(outcome, CityInfo):
            return Transition(PipelineState.FETCHING_FORECAST)
        return Transition(PipelineState.CITY_UNRESOLVED)

    if state in (PipelineState.CITY_UNRESOLVED, PipelineState.FETCHING_FORECAST):
        return Transition(PipelineState.AGGREGATING)

    if state == PipelineState.AGGREGATING:
        if not isinstance(outcome, LookupResult):
            raise TypeError("AGGREGATING expects the LookupResult being completed")
        return Transition(PipelineState.DONE, aggregation_effects(outcome))

    raise ValueError(f"No transition out of terminal state {state}")


def aggregation_effects(result: LookupResult) -> tuple[Effect, ...]:
    effects: list[Effect] = []
    if result.city is not None and result.city.has_coordinates:
        effects.append(Effect.SAVE_LOCATION)
    if result.city is not None and len(result.forecast) >= MIN_DAYS_FOR_REMINDER:
        effects.append(Effect.SCHEDULE_REMINDER)
    effects.append(Effect.PUBLISH_RESULT)
    return tuple(effects)
