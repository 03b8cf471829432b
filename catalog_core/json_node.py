"""Total, typed access to loosely structured JSON values."""
from __future__ import annotations

import math
from typing import Any, List, Optional, Union
from urllib.parse import urlparse

_TRUE_STRINGS = {"true", "yes", "y", "t", "1"}

PathStep = Union[str, int]


def is_valid_url(value: Optional[str]) -> bool:
    """Return ``True`` when ``value`` parses into an absolute URL."""

    if not value or not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


class JsonNode:
    """Wrapper around a decoded JSON value that never raises on access.

    Missing keys, out of range indexes and type mismatches all produce a node
    wrapping ``None``. Readers come in two flavours: optional readers
    (``string``, ``integer``...) return ``None`` when the value has another type,
    ``*_value`` readers fall back to a neutral default.
    """

    __slots__ = ("raw",)

    def __init__(self, raw: Any = None) -> None:
        if isinstance(raw, JsonNode):
            raw = raw.raw
        self.raw = raw

    def __repr__(self) -> str:
        return f"JsonNode({self.raw!r})"

    def __getitem__(self, step: PathStep) -> "JsonNode":
        return self.get(step)

    def get(self, *path: PathStep) -> "JsonNode":
        """Follow ``path`` through objects and arrays."""

        current = self.raw
        for step in path:
            if isinstance(current, dict) and isinstance(step, str):
                current = current.get(step)
            elif (
                isinstance(current, list)
                and isinstance(step, int)
                and not isinstance(step, bool)
                and -len(current) <= step < len(current)
            ):
                current = current[step]
            else:
                return JsonNode(None)
        return JsonNode(current)

    @property
    def exists(self) -> bool:
        return self.raw is not None

    @property
    def is_empty(self) -> bool:
        """Only non-empty objects and arrays count as content."""

        if isinstance(self.raw, (dict, list)):
            return len(self.raw) == 0
        return True

    # Optional readers

    @property
    def string(self) -> Optional[str]:
        return self.raw if isinstance(self.raw, str) else None

    @property
    def integer(self) -> Optional[int]:
        if isinstance(self.raw, bool):
            return None
        if isinstance(self.raw, int):
            return self.raw
        if isinstance(self.raw, float) and self.raw.is_integer():
            return int(self.raw)
        return None

    @property
    def number(self) -> Optional[float]:
        if isinstance(self.raw, bool):
            return None
        if isinstance(self.raw, (int, float)):
            return float(self.raw)
        return None

    @property
    def boolean(self) -> Optional[bool]:
        return self.raw if isinstance(self.raw, bool) else None

    @property
    def array(self) -> Optional[List["JsonNode"]]:
        if isinstance(self.raw, list):
            return [JsonNode(item) for item in self.raw]
        return None

    @property
    def url(self) -> Optional[str]:
        value = self.string
        if value is None or not is_valid_url(value):
            return None
        return value.strip()

    # Defaulting readers

    @property
    def string_value(self) -> str:
        raw = self.raw
        if isinstance(raw, str):
            return raw
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, (int, float)):
            return str(raw)
        return ""

    @property
    def int_value(self) -> int:
        raw = self.raw
        if isinstance(raw, bool):
            return int(raw)
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            return int(raw) if math.isfinite(raw) else 0
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                pass
            try:
                return int(float(raw.strip()))
            except (ValueError, OverflowError):
                return 0
        return 0

    @property
    def bool_value(self) -> bool:
        raw = self.raw
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, (int, float)):
            return raw != 0
        if isinstance(raw, str):
            return raw.strip().lower() in _TRUE_STRINGS
        return False

    @property
    def array_value(self) -> List["JsonNode"]:
        return self.array or []
