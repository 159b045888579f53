import secrets
import string
from datetime import datetime, timezone

__all__ = (
    "now_utc",
    "random_base36",
)

_BASE36 = string.digits + string.ascii_lowercase


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def random_base36(length: int) -> str:
    """Return `length` random characters drawn from [0-9a-z]."""
    return "".join(secrets.choice(_BASE36) for _ in range(length))
