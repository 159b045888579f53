from ._json import json_dumpb, json_dumps, json_loads
from ._utils import now_utc, random_base36

__all__ = (
    "json_dumpb",
    "json_dumps",
    "json_loads",
    "now_utc",
    "random_base36",
)
