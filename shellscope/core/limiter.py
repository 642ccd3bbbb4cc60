"""SlowAPI rate limiter singleton.

Analysing a command can trigger several outbound requests (redirect
lookups plus one per relay route), so the analyze and fetch endpoints
are limited per client address.

Usage in route handlers:
    @router.post("/analyze")
    @limiter.limit(settings.analyze_rate_limit)
    async def handler(request: Request, ...):
        ...

The `Request` parameter is required by SlowAPI even if the handler doesn't
use it directly - it uses it to extract the key.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, default_limits=[])
