"""Stateful fold over a single player's stagger/health/death event stream.

The accumulator is created once per fight, fed every event in stream
order, then handed to ``stagger_series.project_series`` for plotting.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from staggerline.pipeline.constants import PURIFYING_BREW
from staggerline.wcl.models import (
    AddStaggerEvent,
    DamageEvent,
    DeathEvent,
    HealEvent,
    RemoveStaggerEvent,
)

logger = logging.getLogger(__name__)


class NoPriorPoolStateError(ValueError):
    """A purification arrived before any stagger event was recorded."""

    def __init__(self, timestamp: int):
        super().__init__(
            f"Purify at {timestamp} has no preceding stagger event"
        )
        self.timestamp = timestamp


@dataclass(frozen=True)
class StaggerRecord:
    timestamp: int
    kind: Literal["add", "remove"]
    new_pooled_damage: float | None
    hit_points: int
    max_hit_points: int


@dataclass(frozen=True)
class PurifyRecord:
    # Timestamp of the stagger record preceding the purify, so the marker
    # sits on the peak it drained.
    previous_timestamp: int
    new_pooled_damage: float
    amount: float


@dataclass(frozen=True)
class HpRecord:
    timestamp: int
    hit_points: int | None
    max_hit_points: int | None


@dataclass(frozen=True)
class DeathRecord:
    timestamp: int


@dataclass(frozen=True)
class MalformedStreamIssue:
    timestamp: int
    message: str


class StaggerPoolAccumulator:
    def __init__(
        self,
        purify_ability_id: int = PURIFYING_BREW.id,
        *,
        strict: bool = False,
    ):
        self.purify_ability_id = purify_ability_id
        self.strict = strict
        self.last_hp = 0
        self.last_max_hp = 0
        self._stagger_events: list[StaggerRecord] = []
        self._purify_events: list[PurifyRecord] = []
        self._hp_events: list[HpRecord] = []
        self._death_events: list[DeathRecord] = []
        self._issues: list[MalformedStreamIssue] = []

    @property
    def stagger_events(self) -> tuple[StaggerRecord, ...]:
        return tuple(self._stagger_events)

    @property
    def purify_events(self) -> tuple[PurifyRecord, ...]:
        return tuple(self._purify_events)

    @property
    def hp_events(self) -> tuple[HpRecord, ...]:
        return tuple(self._hp_events)

    @property
    def death_events(self) -> tuple[DeathRecord, ...]:
        return tuple(self._death_events)

    @property
    def issues(self) -> tuple[MalformedStreamIssue, ...]:
        return tuple(self._issues)

    def ingest(self, event) -> None:
        """Classify one event and update the matching buffer.

        Damage, heal and death events are assumed to already be filtered
        to the tracked player by the caller.
        """
        if isinstance(event, AddStaggerEvent):
            self._on_add_stagger(event)
        elif isinstance(event, RemoveStaggerEvent):
            self._on_remove_stagger(event)
        elif isinstance(event, DamageEvent | HealEvent):
            self._on_hp_change(event)
        elif isinstance(event, DeathEvent):
            self._death_events.append(DeathRecord(timestamp=event.timestamp))
        else:
            logger.debug("Ignoring unsupported event %r", type(event).__name__)

    def ingest_all(self, events: Iterable) -> None:
        for event in events:
            self.ingest(event)

    def _on_add_stagger(self, event: AddStaggerEvent) -> None:
        self._stagger_events.append(StaggerRecord(
            timestamp=event.timestamp,
            kind="add",
            new_pooled_damage=event.new_pooled_damage,
            hit_points=self.last_hp,
            max_hit_points=self.last_max_hp,
        ))

    def _on_remove_stagger(self, event: RemoveStaggerEvent) -> None:
        if event.trigger_ability_id == self.purify_ability_id:
            self._record_purify(event)

        self._stagger_events.append(StaggerRecord(
            timestamp=event.timestamp,
            kind="remove",
            new_pooled_damage=event.new_pooled_damage,
            hit_points=self.last_hp,
            max_hit_points=self.last_max_hp,
        ))

    def _record_purify(self, event: RemoveStaggerEvent) -> None:
        if not self._stagger_events:
            if self.strict:
                raise NoPriorPoolStateError(event.timestamp)
            message = (
                f"Purify at {event.timestamp} has no preceding stagger event; "
                "marker skipped"
            )
            logger.warning(message)
            self._issues.append(
                MalformedStreamIssue(timestamp=event.timestamp, message=message)
            )
            return

        self._purify_events.append(PurifyRecord(
            previous_timestamp=self._stagger_events[-1].timestamp,
            new_pooled_damage=event.new_pooled_damage,
            amount=event.amount,
        ))

    def _on_hp_change(self, event: DamageEvent | HealEvent) -> None:
        self._hp_events.append(HpRecord(
            timestamp=event.timestamp,
            hit_points=event.hit_points,
            max_hit_points=event.max_hit_points,
        ))
        # Missing or zero snapshots keep the last known value
        self.last_hp = event.hit_points or self.last_hp
        self.last_max_hp = event.max_hit_points or self.last_max_hp
