"""Runtime settings, read from CALENDRIX_* environment variables."""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "CALENDRIX_"

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # zone used by the api facade when the caller passes none
    default_zone: str = "UTC"
    # 0=Sunday..6=Saturday
    week_starts_on: int = Field(0, ge=0, le=6)
    # wrap the zone resolver in a CachingResolver
    cache_resolutions: bool = True
    log_level: LogLevel = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in env:
                values[name] = env[key]
        return cls(**values)
