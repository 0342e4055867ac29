from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    jwt_secret: str = Field(default="your-secret-key")
    jwt_algorithm: str = Field(default="HS256")
    token_expire_minutes: int = Field(default=60)
    allow_truncated_creator_match: bool = Field(default=True)
    seed_demo_votings: bool = Field(default=False)
    rate_limit_enabled: bool = Field(default=True)
    mutation_rate_limit: str = Field(default="60/minute")
    token_rate_limit: str = Field(default="10/minute")
    notification_outbox_size: int = Field(default=50)
    log_file: str = Field(default="voting.log")
    log_level: str = Field(default="INFO")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default) == "1"


def _load_settings() -> Settings:
    env = os.getenv
    jwt_secret = env("JWT_SECRET", "your-secret-key") or "your-secret-key"
    jwt_algorithm = env("JWT_ALGORITHM", "HS256") or "HS256"
    outbox_size = int(env("NOTIFICATION_OUTBOX_SIZE", "50"))
    return Settings(
        jwt_secret=jwt_secret,
        jwt_algorithm=jwt_algorithm,
        token_expire_minutes=int(env("TOKEN_EXPIRE_MINUTES", "60")),
        allow_truncated_creator_match=_flag("ALLOW_TRUNCATED_CREATOR_MATCH", "1"),
        seed_demo_votings=_flag("SEED_DEMO_VOTINGS", "0"),
        rate_limit_enabled=_flag("RATE_LIMIT_ENABLED", "1"),
        mutation_rate_limit=env("MUTATION_RATE_LIMIT", "60/minute") or "60/minute",
        token_rate_limit=env("TOKEN_RATE_LIMIT", "10/minute") or "10/minute",
        notification_outbox_size=max(1, outbox_size),
        log_file=env("VOTING_LOG_FILE", "voting.log") or "voting.log",
        log_level=(env("VOTING_LOG_LEVEL", "INFO") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()


__all__ = ["Settings", "get_settings", "reload_settings"]
