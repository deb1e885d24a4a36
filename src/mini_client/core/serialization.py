"""
Wire format: JSON.
canonicalize(value) passes a value through the wire format so local calls return
exactly what a remote call of the same operation would.
"""
from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import io
import json
import uuid
from typing import Any

from pydantic import BaseModel


def _default(value: Any) -> Any:
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, decimal.Decimal):
        return float(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any, ensure_ascii: bool = True) -> str:
    """Compact JSON, the form sent over HTTP."""
    return json.dumps(value, default=_default, separators=(",", ":"), allow_nan=False, ensure_ascii=ensure_ascii)


def loads(payload: str | bytes) -> Any:
    return json.loads(payload)


def canonicalize(value: Any) -> Any:
    """Serialize then parse back. None stays None (absence, not null)."""
    if value is None:
        return None
    return loads(dumps(value))


def is_binary(value: Any) -> bool:
    """Bytes-like values and readable streams travel as raw payloads."""
    return isinstance(value, (bytes, bytearray, memoryview, io.IOBase)) or hasattr(value, "__aiter__")
