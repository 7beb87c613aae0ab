"""Query parameters, number formatting and payload helpers."""

from __future__ import annotations

import gzip
import json
import uuid
import zlib
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping
from urllib.parse import quote_plus

from tradex.model import OptionParameter

_CLIENT_ID_PREFIX = "trdx-"

_JSON_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class Values:
    """An ordered multi-map of query parameters, encoded with sorted keys."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, list[str]] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Replace every value of key with value."""
        self._data[key] = [_text(value)]

    def add(self, key: str, value: Any) -> None:
        """Append value to the values of key."""
        self._data.setdefault(key, []).append(_text(value))

    def get(self, key: str) -> str:
        """Return the first value of key, or an empty string."""
        values = self._data.get(key)
        return values[0] if values else ""

    def delete(self, key: str) -> None:
        """Remove key and all its values."""
        self._data.pop(key, None)

    def encode(self) -> str:
        """URL-encode as key=value pairs joined by '&', sorted by key."""
        return "&".join(
            f"{quote_plus(key, safe='')}={quote_plus(value, safe='')}"
            for key in sorted(self._data)
            for value in self._data[key]
        )

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, key: str) -> list[str]:
        return list(self._data[key])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Values):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Values({self._data!r})"


def float_to_string(value: float, precision: int) -> str:
    """Round to precision decimals and strip trailing zeros."""
    if precision < 0:
        rounded = float(value)
    else:
        rounded = float(f"{value:.{precision}f}")
    return format(Decimal(repr(rounded)).normalize(), "f")


def values_to_json(params: Values) -> bytes:
    """Encode params as a JSON object; keys with one value map to a string."""
    obj = {key: (vals[0] if len(vals) == 1 else vals) for key in params for vals in [params[key]]}
    text = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    for char, escaped in _JSON_HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text.encode()


def gzip_uncompress(data: bytes) -> bytes:
    """Decompress gzip data; raise ValueError if it is not valid gzip."""
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise ValueError(f"invalid gzip data: {exc}") from exc


def flate_uncompress(data: bytes) -> bytes:
    """Decompress raw deflate data; raise ValueError if it is invalid."""
    try:
        return zlib.decompress(data, -zlib.MAX_WBITS)
    except zlib.error as exc:
        raise ValueError(f"invalid deflate data: {exc}") from exc


def generate_order_client_id(size: int) -> str:
    """Return a random client order id of exactly size characters."""
    hex_len = size - len(_CLIENT_ID_PREFIX)
    if not 0 <= hex_len <= 32:
        raise ValueError(f"client id size must be between {len(_CLIENT_ID_PREFIX)} and {len(_CLIENT_ID_PREFIX) + 32}")
    return _CLIENT_ID_PREFIX + uuid.uuid4().hex[:hex_len]


def merge_option_params(params: Values, *args: OptionParameter) -> None:
    """Set every option parameter on params, overriding existing keys."""
    for opt in args:
        params.set(opt.key, opt.value)


def _cast_float(value: Any) -> float:
    """Lenient conversion of a decoded JSON value to float; 0.0 when impossible."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _cast_int(value: Any) -> int:
    """Lenient conversion of a decoded JSON value to int; 0 when impossible."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str):
        try:
            return int(value, 10)
        except ValueError:
            pass
        try:
            number = float(value)
        except ValueError:
            return 0
        return int(number) if number.is_integer() else 0
    return 0


def _cast_str(value: Any) -> str:
    """Text of a decoded JSON value as it appeared on the wire."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _iter_list(value: Any) -> Iterable[Any]:
    return value if isinstance(value, list) else ()