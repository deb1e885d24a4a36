"""Transport protocol: validate options at construction, register operations into a client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mini_client.client import Client


@runtime_checkable
class Transport(Protocol):
    """
    One per client. register() sets client.version and client.exposed and installs one
    published operation per exposed API. It may run several times (explicit init, resync).
    """

    options: dict[str, Any]

    async def register(self, client: Client) -> None:
        ...
