"""Query-string encoding for trend request parameters."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

# Characters encodeURIComponent leaves untouched besides alphanumerics.
UNRESERVED = "-_.!~*'()"


def encode_value(value: Any) -> str:
    """Percent-encode one parameter value.

    Dicts and lists are sent as compact JSON text. Booleans use the JSON
    spelling so the server sees ``true``/``false``.

    Args:
        value: Parameter value; None only occurs inside exploded arrays.

    Returns:
        Percent-encoded string.
    """
    if value is None or isinstance(value, (dict, list, tuple)):
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return quote(text, safe=UNRESERVED)


def to_query_string(params: Mapping[str, Any], explode_arrays: bool = False) -> str:
    """Encode a parameter mapping as a URL query string.

    Keys whose value is None are omitted. Arrays are either sent as a single
    JSON-encoded value (``a=%5B1%2C2%5D``) or, with ``explode_arrays``,
    repeated once per element (``a=1&a=2``).

    Args:
        params: Parameters in the order they should appear.
        explode_arrays: Repeat the key for each element of list values.

    Returns:
        Query string without the leading ``?``.
    """
    if not params:
        return ""

    pairs: list[tuple[str, Any]] = []
    for key, value in params.items():
        if value is None:
            continue
        if explode_arrays and isinstance(value, (list, tuple)):
            pairs.extend((key, item) for item in value)
        else:
            pairs.append((key, value))

    return "&".join(f"{key}={encode_value(value)}" for key, value in pairs)
