from typing import Any

import orjson

__all__ = (
    "json_dumpb",
    "json_dumps",
    "json_loads",
)


def json_dumpb(
    obj: Any,
    *,
    sort_keys: bool = False,
    indent: bool = False,
) -> bytes:
    """Serialize `obj` to JSON bytes with orjson.

    Non-string dict keys are allowed; naive datetimes are treated as UTC.
    """
    option = orjson.OPT_NON_STR_KEYS | orjson.OPT_NAIVE_UTC
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    if indent:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=option)


def json_dumps(obj: Any, **kw) -> str:
    return json_dumpb(obj, **kw).decode("utf-8")


def json_loads(data: str | bytes | bytearray) -> Any:
    return orjson.loads(data)
