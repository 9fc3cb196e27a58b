from __future__ import annotations
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    hash_algorithm: str = Field(default="sha256", alias="MERKLE_HASH_ALGORITHM")

    # Optional upper bound on leaves accepted by build(); unset means no cap
    max_leaves: Optional[int] = Field(default=None, alias="MERKLE_MAX_LEAVES")

    log_level: str = Field(default="INFO", alias="MERKLE_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()  # load at import
