"""JSON-ready chart payload for the stagger pool graph.

Rendering happens elsewhere; this module only decides labels, colors and
tooltip contents from an already projected StaggerSeries.
"""

from dataclasses import asdict
from typing import Any

from staggerline.pipeline.constants import (
    DEFAULT_PURIFY_TOLERANCE_MS,
    DEFAULT_ZOOM_WINDOW_MS,
    STAGGER,
)
from staggerline.pipeline.stagger_series import (
    PoolPoint,
    PurifyPoint,
    StaggerSeries,
    find_purify_near,
    zoom_domain,
)

COLORS = {
    "death": "red",
    "purify": "#00ff96",
    "stagger": "rgb(240, 234, 214)",
    "hp": "rgb(255, 139, 45)",
    "maxHp": "rgb(183, 76, 75)",
}

LEGEND: tuple[tuple[str, str], ...] = (
    (STAGGER.name, "stagger"),
    ("Purify", "purify"),
    ("Health", "hp"),
    ("Max Health", "maxHp"),
    ("Player Death", "death"),
)


def format_duration(ms: int) -> str:
    """Format elapsed milliseconds as 'M:SS' (negative values clamp to 0)."""
    seconds = max(ms, 0) // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_number(value: float | None) -> str:
    """Compact number for axis ticks and tooltips: 1.23m, 45k, 9,876."""
    if value is None:
        return "-"
    if value > 1_000_000:
        return f"{value / 1_000_000:.2f}m"
    if value > 10_000:
        return f"{round(value / 1000)}k"
    return f"{round(value):,}"


def tooltip_entries(
    point: PoolPoint,
    purifies: list[PurifyPoint],
    tolerance_ms: int = DEFAULT_PURIFY_TOLERANCE_MS,
) -> dict[str, Any]:
    """Crosshair contents for the pool point nearest the cursor."""
    items = [
        {
            "title": "Health",
            "value": f"{format_number(point.hp)} / {format_number(point.max_hp)}",
        },
    ]
    purify = find_purify_near(purifies, point.x, tolerance_ms)
    if purify is not None:
        items.append({"title": "Purified", "value": format_number(purify.amount)})
    return {"title": STAGGER.name, "value": format_number(point.y), "items": items}


def build_chart_payload(
    series: StaggerSeries,
    tolerance_ms: int = DEFAULT_PURIFY_TOLERANCE_MS,
    zoom_window_ms: int = DEFAULT_ZOOM_WINDOW_MS,
) -> dict[str, Any]:
    """Bundle series, legend, colors and per-point tooltips for a renderer."""
    return {
        "start_time": series.start_time,
        "legend": [
            {"title": title, "color": COLORS[key]} for title, key in LEGEND
        ],
        "colors": COLORS,
        "series": asdict(series),
        "tooltips": [
            {"x": p.x, **tooltip_entries(p, series.purifies, tolerance_ms)}
            for p in series.stagger
        ],
        "purify_zoom": [
            {"x": p.x, "domain": list(zoom_domain(p, zoom_window_ms))}
            for p in series.purifies
        ],
        "death_labels": [
            format_duration(d.x - series.start_time) for d in series.deaths
        ],
    }
