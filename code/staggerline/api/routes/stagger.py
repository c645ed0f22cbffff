"""Stagger pool endpoints: projected series and chart payload."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from staggerline.api.deps import get_app_settings
from staggerline.api.models import StaggerSeriesRequest, StaggerSeriesResponse
from staggerline.config import Settings
from staggerline.pipeline.chart import build_chart_payload
from staggerline.pipeline.dispatch import build_stagger_series
from staggerline.pipeline.stagger_pool import NoPriorPoolStateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stagger", tags=["stagger"])


def _build(body: StaggerSeriesRequest, settings: Settings):
    try:
        return build_stagger_series(
            body.events, body.player_id, body.fight.start_time, settings.stagger,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422, detail=f"Malformed event: {e.errors()[0]['msg']}",
        ) from None
    except NoPriorPoolStateError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None
    except Exception:
        logger.exception("Failed to build stagger series for fight %d", body.fight.id)
        raise HTTPException(status_code=500, detail="Internal server error") from None


@router.post("/series", response_model=StaggerSeriesResponse)
async def stagger_series(
    body: StaggerSeriesRequest,
    settings: Settings = Depends(get_app_settings),
):
    series, accumulator = _build(body, settings)
    return StaggerSeriesResponse(
        **asdict(series),
        issues=[asdict(issue) for issue in accumulator.issues],
    )


@router.post("/chart")
async def stagger_chart(
    body: StaggerSeriesRequest,
    settings: Settings = Depends(get_app_settings),
):
    series, accumulator = _build(body, settings)
    payload = build_chart_payload(
        series,
        tolerance_ms=settings.stagger.purify_match_tolerance_ms,
        zoom_window_ms=settings.stagger.zoom_window_ms,
    )
    payload["issues"] = [asdict(issue) for issue in accumulator.issues]
    return payload
