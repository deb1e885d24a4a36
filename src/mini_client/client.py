"""
Client: exposes the operations of a local or remote service as coroutine functions.

No operation is known at construction. Until the first registration succeeds, reading an
unknown name returns a LazyOperation: calling it (or one of its members) registers the
service APIs through the transport, then calls the real operation with the same arguments.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from mini_client.core.config import build_options, merge_options
from mini_client.core.descriptor import ServiceDescriptor
from mini_client.core.registry import Namespace, Registry
from mini_client.transports import load_transport


class LazyOperation:
    """Stand-in for client.<name> or client.<name>.<sub> before registration."""

    def __init__(self, client: Client, name: str, sub: str | None = None) -> None:
        self._client = client
        self._name = name
        self._sub = sub

    def __getattr__(self, sub: str) -> LazyOperation:
        # dunders stay undefined, so the stand-in never looks awaitable or iterable
        if sub.startswith("__") or self._sub is not None:
            raise AttributeError(sub)
        return LazyOperation(self._client, self._name, sub)

    def __getitem__(self, sub: str) -> LazyOperation:
        if self._sub is not None:
            raise KeyError(sub)
        return LazyOperation(self._client, self._name, sub)

    async def __call__(self, *args: Any) -> Any:
        client = self._client
        client.options["logger"].debug("during %s, fetch exposed apis", self)
        await client._register()
        return await client._resolve(self._name, self._sub)(*args)

    def __str__(self) -> str:
        return self._name if self._sub is None else f"{self._name}.{self._sub}"

    def __repr__(self) -> str:
        return f"<LazyOperation {self}>"


class Client:
    """
    Generic client to a local or remote service.
    Options: see mini_client.transports (local: name, version, init/groups, group_opts;
    http: transport.uri, transport.timeout). version is "unknown" until registration.
    """

    def __init__(self, options: Mapping[str, Any] | None = None, **overrides: Any) -> None:
        self.options = build_options(merge_options(options, overrides))
        self.version = "unknown"
        self.exposed = ServiceDescriptor()
        self._registry = Registry()
        self._initialized = False
        self._transport = load_transport(self.options)

    async def init(self) -> None:
        """Register exposed APIs as methods, even if already done: refreshes version, exposed and operations."""
        await self._register()

    async def _register(self) -> None:
        await self._transport.register(self)
        self._initialized = True
        self.options["logger"].debug("client ready (%s)", self.version)

    def _resolve(self, name: str, sub: str | None = None) -> Callable[..., Any]:
        entry = self._registry.get(name)
        if entry is None:
            if sub is None:
                raise TypeError(f"{name} is not a function")
            raise TypeError(f"Cannot read property '{sub}' of undefined")
        if sub is None:
            if isinstance(entry, Namespace):
                raise TypeError(f"{name} is not a function")
            return entry
        if not isinstance(entry, Namespace) or sub not in entry:
            raise TypeError(f"{name}.{sub} is not a function")
        return entry[sub]

    def _lookup(self, name: str) -> Callable[..., Any] | Namespace | LazyOperation | None:
        entry = self._registry.get(name)
        if entry is not None:
            return entry
        if self._initialized:
            return None
        return LazyOperation(self, name)

    def __getattr__(self, name: str) -> Any:
        # only reached for names that are not real attributes
        if name.startswith("_"):
            raise AttributeError(name)
        entry = self._lookup(name)
        if entry is None:
            raise AttributeError(f"{name} is not a function")
        return entry

    def __getitem__(self, name: str) -> Any:
        entry = self._lookup(name)
        if entry is None:
            raise KeyError(name)
        return entry

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._registry.names()})

    def __repr__(self) -> str:
        return f"<Client {self.version} ({self.options['transport']['type']})>"


def get_client(options: Mapping[str, Any] | None = None, **overrides: Any) -> Client:
    """Creates a client that exposes remote or local service APIs."""
    return Client(options, **overrides)
