"""Rate limiting configuration using slowapi.

Provides a module-level Limiter instance that routers use to throttle the
write endpoints, and that main.py wires into the FastAPI app.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Write endpoints opt in with @limiter.limit(settings.WRITE_RATE_LIMIT).
limiter = Limiter(key_func=get_remote_address)
