"""
Compatibility check run after every remote call.

The server sends a checksum of its exposed API list with each response. When it differs
from the one captured at discovery time, the server changed:
- every known operation is replaced by one that fails (RemoteIncompatibilityError)
- discovery runs again, installing fresh operations
- the invoked operation is replayed once against the fresh installation
"""
from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING, Any, Callable

import httpx

from mini_client.core.checksum import CHECKSUM_HEADER
from mini_client.core.errors import ProtocolError, RemoteIncompatibilityError

if TYPE_CHECKING:
    from mini_client.client import Client

# set while an operation is replayed after a resync: a second change within it is not retried
_replaying: contextvars.ContextVar[bool] = contextvars.ContextVar("mini_client_replaying", default=False)


def _deprecated(previous_version: str) -> Callable[..., Any]:
    async def incompatible(*args: Any) -> Any:
        raise RemoteIncompatibilityError(
            f"Remote server isn't compatible with current client (expects {previous_version})"
        )

    return incompatible


async def check_compatibility(
    response: httpx.Response,
    body: Any,
    checksum: str,
    client: Client,
    group: str,
    id: str,
    args: tuple[Any, ...],
) -> Any:
    """Return body when the server is unchanged, otherwise resync and replay the call."""
    logger = client.options["logger"]
    actual = response.headers.get(CHECKSUM_HEADER)
    if not actual:
        raise ProtocolError(f"Couldn't find checksum for API {id} of {group}")
    if actual == checksum:
        return body

    previous_version = client.version
    if _replaying.get():
        raise RemoteIncompatibilityError(
            f"Remote server isn't compatible with current client (expects {previous_version})"
        )
    logger.info("Remote server change detected")
    stale = client.exposed
    for api in stale.apis:
        client._registry.install(api.group, stale.name, api.id, _deprecated(previous_version))
        logger.debug("API %s from %s deprecated", api.id, api.group)

    await client._transport.register(client)

    token = _replaying.set(True)
    try:
        operation = client._registry.lookup(group, client.exposed.name, id)
        if operation is None:
            raise TypeError(f"{id} is not a function")
        return await operation(*args)
    finally:
        _replaying.reset(token)
