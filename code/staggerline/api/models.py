"""Pydantic request/response models for the stagger API."""

from typing import Any

from pydantic import BaseModel, Field

from staggerline.wcl.models import Fight


class StaggerSeriesRequest(BaseModel):
    fight: Fight
    player_id: int = Field(alias="playerId")
    events: list[dict[str, Any]] = []

    model_config = {"populate_by_name": True}


class PoolPointResponse(BaseModel):
    x: int
    y: float | None
    hp: int
    max_hp: int


class PurifyPointResponse(BaseModel):
    x: int
    y: float
    amount: float


class SeriesPointResponse(BaseModel):
    x: int
    y: float


class DeathPointResponse(BaseModel):
    x: int


class StreamIssueResponse(BaseModel):
    timestamp: int
    message: str


class StaggerSeriesResponse(BaseModel):
    start_time: int
    stagger: list[PoolPointResponse]
    purifies: list[PurifyPointResponse]
    hp: list[SeriesPointResponse]
    max_hp: list[SeriesPointResponse]
    deaths: list[DeathPointResponse]
    issues: list[StreamIssueResponse] = []
