"""Client-side authentication: token accessor, API client and its loader.

``betportal.auth.client`` is not imported here; ``ApiClientLoader`` loads it
on demand.
"""

from betportal.auth.loader import ApiClientLoader
from betportal.auth.token import UNINITIALIZED, Loaded, PersistedToken, Uninitialized

__all__ = [
    "ApiClientLoader",
    "Loaded",
    "PersistedToken",
    "UNINITIALIZED",
    "Uninitialized",
]
