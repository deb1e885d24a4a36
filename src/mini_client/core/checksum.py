"""Compatibility checksum shared by clients and servers."""
from __future__ import annotations

import zlib
from typing import Any

from mini_client.core.serialization import dumps

CHECKSUM_HEADER = "x-service-compat"


def compute_checksum(apis: list[Any]) -> str:
    """CRC-32 (hex) of the compact JSON form of an exposed API list, non-ASCII left unescaped."""
    return format(zlib.crc32(dumps(apis, ensure_ascii=False).encode("utf-8")), "x")


def array_to_obj(values: list[Any] | tuple[Any, ...], names: list[str]) -> dict[str, Any]:
    """
    Map positional values to named fields.
    Values beyond the known names are keyed by their position ("1", "2"...).
    """
    return {
        (names[index] if index < len(names) else str(index)): value
        for index, value in enumerate(values)
    }
