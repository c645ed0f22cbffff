"""Route raw WCL events for one player into the stagger accumulator."""

import logging

from staggerline.config import StaggerConfig
from staggerline.pipeline.constants import PLAYER_EVENT_TYPES
from staggerline.pipeline.stagger_pool import StaggerPoolAccumulator
from staggerline.pipeline.stagger_series import StaggerSeries, project_series
from staggerline.wcl.models import parse_event

logger = logging.getLogger(__name__)


def accumulate_player_events(
    raw_events: list[dict],
    player_id: int,
    config: StaggerConfig | None = None,
) -> StaggerPoolAccumulator:
    """Feed a player's events, in stream order, into a fresh accumulator.

    Stagger add/remove events are forwarded as-is (the stagger fabricator
    only emits them for the tracked monk). Damage, heal and death events
    are forwarded only when targeted at ``player_id``.

    Raises:
        pydantic.ValidationError: a known event type is malformed.
        NoPriorPoolStateError: strict mode and a purify precedes any stagger.
    """
    config = config or StaggerConfig()
    accumulator = StaggerPoolAccumulator(
        config.purify_ability_id, strict=config.strict_stream,
    )

    fed = 0
    skipped = 0
    for raw in raw_events:
        event = parse_event(raw)
        if event is None:
            skipped += 1
            continue
        if event.type in PLAYER_EVENT_TYPES and event.target_id != player_id:
            skipped += 1
            continue
        accumulator.ingest(event)
        fed += 1

    logger.info(
        "Accumulated %d stagger-relevant events for player %d (%d skipped)",
        fed, player_id, skipped,
    )
    if accumulator.issues:
        logger.warning(
            "%d malformed-stream issues for player %d",
            len(accumulator.issues), player_id,
        )
    return accumulator


def build_stagger_series(
    raw_events: list[dict],
    player_id: int,
    fight_start_time: int = 0,
    config: StaggerConfig | None = None,
) -> tuple[StaggerSeries, StaggerPoolAccumulator]:
    """Accumulate and project in one step; returns the accumulator for its issues."""
    accumulator = accumulate_player_events(raw_events, player_id, config)
    return project_series(accumulator, start_time=fight_start_time), accumulator
