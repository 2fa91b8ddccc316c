"""Environment-driven settings.

Every setting can be given as a ``BUMPGATE_*`` environment variable; the
command line overrides the environment where it has a matching flag.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BumpGateSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BUMPGATE_", extra="ignore")

    java: str = Field(default="java", description="Java executable used to run japicmp")
    japicmp_jar: Optional[Path] = Field(default=None, description="Path to the japicmp jar-with-dependencies")
    http_timeout_seconds: Optional[float] = Field(default=None, description="Remote fetch timeout; unset means no timeout")
    user_agent: str = "bumpgate"
    staging_dir: Optional[Path] = Field(default=None, description="Directory for fetched artifacts (system temp dir if unset)")
