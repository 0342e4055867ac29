from slowapi import Limiter
from slowapi.util import get_remote_address

from minivote.core.settings import get_settings

# If later behind a proxy, parse X-Forwarded-For here.
limiter = Limiter(key_func=get_remote_address, enabled=get_settings().rate_limit_enabled)


def mutation_limit() -> str:
    return get_settings().mutation_rate_limit


def token_limit() -> str:
    return get_settings().token_rate_limit


__all__ = ["limiter", "mutation_limit", "token_limit"]
