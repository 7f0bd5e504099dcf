from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DIPLOMACY_")

    # "dispatch" visits each edge once, "table" scans per category
    CLASSIFIER: Literal["dispatch", "table"] = "dispatch"

    # Raise on corrupted edges instead of skipping them
    FAIL_FAST: bool = False

    VIEW_CACHE_SIZE: int = 64  # (viewpoint, snapshot) entries
    LOG_INTEGRITY_FAULTS: bool = True


settings = Settings()
