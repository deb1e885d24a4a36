"""Registry of installed operations, owned by one client."""
from __future__ import annotations

from typing import Any, Callable


class Namespace:
    """Read-only view on one group's operations: namespace.op or namespace["op"]."""

    def __init__(self, name: str, operations: dict[str, Callable[..., Any]]) -> None:
        self._name = name
        self._operations = operations

    def __getattr__(self, id: str) -> Callable[..., Any]:
        if id.startswith("__"):
            raise AttributeError(id)
        try:
            return self._operations[id]
        except KeyError:
            raise AttributeError(f"{self._name}.{id} is not a function") from None

    def __getitem__(self, id: str) -> Callable[..., Any]:
        return self._operations[id]

    def __contains__(self, id: object) -> bool:
        return id in self._operations

    def __iter__(self):
        return iter(self._operations)

    def __dir__(self) -> list[str]:
        return sorted(self._operations)

    def __repr__(self) -> str:
        return f"<Namespace {self._name}: {', '.join(self._operations)}>"


class Registry:
    """
    Root operations and group namespaces.
    Operations of the group named after the service live at the root, others under their group.
    """

    def __init__(self) -> None:
        self._root: dict[str, Callable[..., Any]] = {}
        self._groups: dict[str, dict[str, Callable[..., Any]]] = {}

    def namespace(self, group: str, service_name: str | None) -> dict[str, Callable[..., Any]]:
        """Mapping to install group's operations into, created on first use."""
        if group == service_name:
            return self._root
        return self._groups.setdefault(group, {})

    def install(self, group: str, service_name: str | None, id: str, operation: Callable[..., Any]) -> None:
        self.namespace(group, service_name)[id] = operation

    def lookup(self, group: str, service_name: str | None, id: str) -> Callable[..., Any] | None:
        """Installed operation, without creating its group."""
        if group == service_name:
            return self._root.get(id)
        return self._groups.get(group, {}).get(id)

    def get(self, name: str) -> Callable[..., Any] | Namespace | None:
        """Root operation or group namespace named name."""
        if name in self._root:
            return self._root[name]
        if name in self._groups:
            return Namespace(name, self._groups[name])
        return None

    def __contains__(self, name: object) -> bool:
        return name in self._root or name in self._groups

    def names(self) -> list[str]:
        return [*self._root, *(group for group in self._groups if group not in self._root)]
