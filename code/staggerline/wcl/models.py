from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from staggerline.pipeline.constants import (
    ADD_STAGGER,
    DAMAGE,
    DEATH,
    HEAL,
    PLAYER_EVENT_TYPES,
    REMOVE_STAGGER,
    STAGGER_EVENT_TYPES,
)


class WCLBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Fight(WCLBaseModel):
    id: int
    name: str = ""
    start_time: int
    end_time: int


class Ability(WCLBaseModel):
    guid: int
    name: str | None = None


class Trigger(WCLBaseModel):
    """The event that caused a stagger removal (a cast, a tick, ...)."""

    type: str | None = None
    timestamp: int | None = None
    ability: Ability | None = None


class CombatEventBase(WCLBaseModel):
    timestamp: int
    source_id: int | None = Field(default=None, alias="sourceID")
    target_id: int | None = Field(default=None, alias="targetID")


class AddStaggerEvent(CombatEventBase):
    type: Literal["addstagger"] = ADD_STAGGER
    amount: float = 0
    new_pooled_damage: float | None = None


class RemoveStaggerEvent(CombatEventBase):
    type: Literal["removestagger"] = REMOVE_STAGGER
    amount: float
    new_pooled_damage: float
    trigger: Trigger | None = None

    @property
    def trigger_ability_id(self) -> int | None:
        if self.trigger is None or self.trigger.ability is None:
            return None
        return self.trigger.ability.guid


class DamageEvent(CombatEventBase):
    type: Literal["damage"] = DAMAGE
    amount: float = 0
    hit_points: int | None = None
    max_hit_points: int | None = None


class HealEvent(CombatEventBase):
    type: Literal["heal"] = HEAL
    amount: float = 0
    hit_points: int | None = None
    max_hit_points: int | None = None


class DeathEvent(CombatEventBase):
    type: Literal["death"] = DEATH


CombatEvent = Annotated[
    AddStaggerEvent | RemoveStaggerEvent | DamageEvent | HealEvent | DeathEvent,
    Field(discriminator="type"),
]

_combat_event_adapter: TypeAdapter[CombatEvent] = TypeAdapter(CombatEvent)

KNOWN_EVENT_TYPES: frozenset[str] = STAGGER_EVENT_TYPES | PLAYER_EVENT_TYPES


def parse_event(raw: dict) -> CombatEvent | None:
    """Validate a raw WCL event dict into one of the five stagger-relevant kinds.

    Returns None for event types the stagger analysis does not consume
    (casts, buffs, absorbs, ...). Malformed events of a known type raise
    pydantic.ValidationError.
    """
    if raw.get("type") not in KNOWN_EVENT_TYPES:
        return None
    return _combat_event_adapter.validate_python(raw)
