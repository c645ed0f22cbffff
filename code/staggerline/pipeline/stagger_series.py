"""Project a StaggerPoolAccumulator's buffers into plot-ready series."""

from dataclasses import dataclass, field

from staggerline.pipeline.constants import (
    DEFAULT_PURIFY_TOLERANCE_MS,
    DEFAULT_ZOOM_WINDOW_MS,
)
from staggerline.pipeline.stagger_pool import StaggerPoolAccumulator


@dataclass(frozen=True)
class PoolPoint:
    x: int
    y: float | None
    hp: int
    max_hp: int


@dataclass(frozen=True)
class PurifyPoint:
    x: int
    y: float
    amount: float


@dataclass(frozen=True)
class SeriesPoint:
    x: int
    y: float


@dataclass(frozen=True)
class DeathPoint:
    x: int


@dataclass(frozen=True)
class StaggerSeries:
    start_time: int = 0
    stagger: list[PoolPoint] = field(default_factory=list)
    purifies: list[PurifyPoint] = field(default_factory=list)
    hp: list[SeriesPoint] = field(default_factory=list)
    max_hp: list[SeriesPoint] = field(default_factory=list)
    deaths: list[DeathPoint] = field(default_factory=list)


def project_series(
    accumulator: StaggerPoolAccumulator, start_time: int = 0,
) -> StaggerSeries:
    """Materialize the pool, purify, health, max-health and death series.

    Pure with respect to the accumulator: repeated calls on unchanged state
    return equal results. The series are independent; correspondence
    between them is by ``x`` (timestamp) only.
    """
    stagger = [
        PoolPoint(
            x=rec.timestamp,
            y=rec.new_pooled_damage,
            hp=rec.hit_points,
            max_hp=rec.max_hit_points,
        )
        for rec in accumulator.stagger_events
    ]

    # Pre-purify height = post-removal level + amount purified
    purifies = [
        PurifyPoint(
            x=rec.previous_timestamp,
            y=rec.new_pooled_damage + rec.amount,
            amount=rec.amount,
        )
        for rec in accumulator.purify_events
    ]

    hp = [
        SeriesPoint(x=rec.timestamp, y=rec.hit_points)
        for rec in accumulator.hp_events
        if rec.hit_points is not None
    ]
    max_hp = [
        SeriesPoint(x=rec.timestamp, y=rec.max_hit_points)
        for rec in accumulator.hp_events
        if rec.max_hit_points is not None
    ]

    deaths = [DeathPoint(x=rec.timestamp) for rec in accumulator.death_events]

    return StaggerSeries(
        start_time=start_time,
        stagger=stagger,
        purifies=purifies,
        hp=hp,
        max_hp=max_hp,
        deaths=deaths,
    )


def find_purify_near(
    purifies: list[PurifyPoint],
    x: int,
    tolerance_ms: int = DEFAULT_PURIFY_TOLERANCE_MS,
) -> PurifyPoint | None:
    """Return the first purify marker strictly within ``tolerance_ms`` of x."""
    for purify in purifies:
        if abs(purify.x - x) < tolerance_ms:
            return purify
    return None


def zoom_domain(
    purify: PurifyPoint, window_ms: int = DEFAULT_ZOOM_WINDOW_MS,
) -> tuple[int, int]:
    """Time-axis domain centred on a purify marker."""
    return purify.x - window_ms, purify.x + window_ms
