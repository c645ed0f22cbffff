"""Tests for routing raw WCL events into the stagger accumulator."""

import pytest
from pydantic import ValidationError

from staggerline.config import StaggerConfig
from staggerline.pipeline.constants import PURIFYING_BREW
from staggerline.pipeline.dispatch import (
    accumulate_player_events,
    build_stagger_series,
)
from staggerline.pipeline.stagger_pool import NoPriorPoolStateError

PLAYER = 7


def _raw_stream():
    return [
        {"timestamp": 100, "type": "addstagger", "amount": 20, "newPooledDamage": 20},
        {"timestamp": 120, "type": "cast", "sourceID": PLAYER,
         "ability": {"guid": PURIFYING_BREW.id}},
        {"timestamp": 150, "type": "damage", "targetID": PLAYER,
         "hitPoints": 80, "maxHitPoints": 100},
        {"timestamp": 160, "type": "damage", "targetID": 99,
         "hitPoints": 5, "maxHitPoints": 10},
        {"timestamp": 200, "type": "removestagger", "amount": 15,
         "newPooledDamage": 5,
         "trigger": {"type": "cast", "ability": {"guid": PURIFYING_BREW.id}}},
        {"timestamp": 240, "type": "death", "targetID": 99},
        {"timestamp": 250, "type": "death", "targetID": PLAYER},
    ]


class TestAccumulatePlayerEvents:
    def test_filters_to_player(self):
        acc = accumulate_player_events(_raw_stream(), PLAYER)

        assert len(acc.stagger_events) == 2
        assert [r.timestamp for r in acc.hp_events] == [150]
        assert [d.timestamp for d in acc.death_events] == [250]
        assert acc.purify_events[0].previous_timestamp == 100

    def test_custom_purify_ability(self):
        acc = accumulate_player_events(
            _raw_stream(), PLAYER, StaggerConfig(purify_ability_id=1),
        )
        assert acc.purify_events == ()

    def test_malformed_known_event_raises(self):
        with pytest.raises(ValidationError):
            accumulate_player_events([{"type": "damage"}], PLAYER)

    def test_strict_config_raises_on_orphan_purify(self):
        events = [
            {"timestamp": 10, "type": "removestagger", "amount": 5,
             "newPooledDamage": 0,
             "trigger": {"ability": {"guid": PURIFYING_BREW.id}}},
        ]
        with pytest.raises(NoPriorPoolStateError):
            accumulate_player_events(
                events, PLAYER, StaggerConfig(strict_stream=True),
            )


class TestBuildStaggerSeries:
    def test_scenario(self):
        series, acc = build_stagger_series(_raw_stream(), PLAYER, fight_start_time=50)

        assert series.start_time == 50
        assert [(p.x, p.y) for p in series.stagger] == [(100, 20), (200, 5)]
        assert [(p.x, p.y, p.amount) for p in series.purifies] == [(100, 20, 15)]
        assert [(p.x, p.y) for p in series.hp] == [(150, 80)]
        assert [p.x for p in series.deaths] == [250]
        assert acc.issues == ()

    def test_empty_stream(self):
        series, _ = build_stagger_series([], PLAYER)
        assert series.stagger == []
        assert series.deaths == []

    def test_purify_missing_pool_level_raises(self):
        """Missing newPooledDamage on a purify is never plotted as a drop to 0."""
        events = [
            {"timestamp": 100, "type": "addstagger", "newPooledDamage": 50},
            {"timestamp": 200, "type": "removestagger",
             "trigger": {"ability": {"guid": PURIFYING_BREW.id}}},
        ]
        with pytest.raises(ValidationError):
            build_stagger_series(events, PLAYER)
