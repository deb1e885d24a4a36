from __future__ import annotations

from typing import Any

from mini_client.core.errors import ConfigurationError
from mini_client.transports.http import HttpTransport
from mini_client.transports.local import LocalTransport
from mini_client.transports.protocol import Transport

TRANSPORTS: dict[str, type[Any]] = {
    "local": LocalTransport,
    "http": HttpTransport,
}


def load_transport(options: dict[str, Any]) -> Transport:
    """Instantiate (and validate options of) the transport named by options["transport"]["type"]."""
    kind = (options.get("transport") or {}).get("type")
    try:
        cls = TRANSPORTS[kind]
    except KeyError:
        raise ConfigurationError(f"Unsupported transport type {kind!r} (expects one of: {', '.join(TRANSPORTS)})") from None
    return cls(options)


__all__ = [
    "HttpTransport",
    "LocalTransport",
    "Transport",
    "TRANSPORTS",
    "load_transport",
]
