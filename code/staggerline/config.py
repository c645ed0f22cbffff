from functools import lru_cache

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from staggerline.pipeline.constants import (
    DEFAULT_PURIFY_TOLERANCE_MS,
    DEFAULT_ZOOM_WINDOW_MS,
    PURIFYING_BREW,
)


class StaggerConfig(BaseModel):
    purify_ability_id: int = PURIFYING_BREW.id
    purify_match_tolerance_ms: int = DEFAULT_PURIFY_TOLERANCE_MS
    zoom_window_ms: int = DEFAULT_ZOOM_WINDOW_MS
    strict_stream: bool = False  # raise instead of skipping orphan purifies


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    api_key: str = ""  # empty = auth disabled
    stagger: StaggerConfig = StaggerConfig()

    @model_validator(mode="after")
    def _check_cross_field_deps(self):
        if self.stagger.purify_match_tolerance_ms <= 0:
            raise ValueError(
                "STAGGER__PURIFY_MATCH_TOLERANCE_MS must be > 0"
            )
        if self.stagger.zoom_window_ms <= 0:
            raise ValueError("STAGGER__ZOOM_WINDOW_MS must be > 0")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
