"""Build stagger pool series (or a chart payload) from an exported WCL events file."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from staggerline.config import get_settings
from staggerline.pipeline.chart import build_chart_payload
from staggerline.pipeline.dispatch import build_stagger_series
from staggerline.wcl.models import Fight

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Derive stagger, health, purify and death series for one player",
    )
    parser.add_argument("events_file", type=Path, help="JSON events export")
    parser.add_argument(
        "--player-id", dest="player_id", type=int, required=True,
        help="WCL actor ID of the tracked monk",
    )
    parser.add_argument(
        "--start-time", dest="start_time", type=int, default=None,
        help="Fight start timestamp (ms); overrides the export's fight.startTime",
    )
    parser.add_argument(
        "--chart", action="store_true",
        help="Emit the full chart payload instead of bare series",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Fail when a purify precedes any stagger event",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write JSON here instead of stdout",
    )
    return parser.parse_args(argv)


def load_export(path: Path) -> tuple[list[dict], int]:
    """Read ``{"fight": {...}, "events": [...]}`` or a bare event list."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        return data, 0
    fight = Fight.model_validate(data["fight"]) if data.get("fight") else None
    return data.get("events", []), fight.start_time if fight else 0


def run(
    events_file: Path,
    player_id: int,
    start_time: int | None = None,
    chart: bool = False,
    strict: bool = False,
) -> dict:
    settings = get_settings()
    config = settings.stagger.model_copy(
        update={"strict_stream": strict or settings.stagger.strict_stream},
    )

    events, export_start = load_export(events_file)
    fight_start = start_time if start_time is not None else export_start
    series, accumulator = build_stagger_series(events, player_id, fight_start, config)
    logger.info(
        "Built %d stagger points, %d purifies, %d deaths from %s",
        len(series.stagger), len(series.purifies), len(series.deaths), events_file,
    )

    if chart:
        result = build_chart_payload(
            series,
            tolerance_ms=config.purify_match_tolerance_ms,
            zoom_window_ms=config.zoom_window_ms,
        )
    else:
        result = asdict(series)
    result["issues"] = [asdict(issue) for issue in accumulator.issues]
    return result


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=get_settings().log_level)
    result = run(
        args.events_file,
        args.player_id,
        start_time=args.start_time,
        chart=args.chart,
        strict=args.strict,
    )
    text = json.dumps(result, indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")


if __name__ == "__main__":
    main()
