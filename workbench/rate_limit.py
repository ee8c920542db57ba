"""Per-IP request limits.

One limiter serves the whole app: the middleware applies the default limit
to every route, and routes with their own budget are decorated with
`@limiter.limit(...)`.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from .settings import settings


def editor_save_limit() -> str:
    # resolved on every request
    return settings.rate_limit_editor_save


limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit_default])
