"""Group resolution: turn client options into an ordered list of API groups."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from mini_client.core.errors import ConfigurationError


@dataclass(frozen=True)
class Group:
    """Unit of initialization: init(options) resolves to a mapping of operation id -> callable."""

    name: str
    init: Callable[..., Any]


def _as_group(raw: Any, position: int) -> Group:
    if isinstance(raw, Group):
        name, init = raw.name, raw.init
    elif isinstance(raw, Mapping):
        name, init = raw.get("name"), raw.get("init")
    else:
        raise ConfigurationError(f"group #{position} must be a mapping with name and init")
    if not isinstance(name, str) or not name:
        raise ConfigurationError(f'group #{position}: "name" is required')
    if not callable(init):
        raise ConfigurationError(f'group {name}: "init" is required')
    return Group(name=name, init=init)


def extract_groups(options: Mapping[str, Any]) -> tuple[list[Group], dict[str, dict[str, Any]]]:
    """
    Return (groups, group_opts).
    A single `init` wins over `groups` and becomes one implicit group named after the
    service, configured with the whole options. Otherwise each declared group gets its
    entry of `group_opts` (or an empty dict).
    """
    init = options.get("init")
    if init is not None:
        group = _as_group({"name": options.get("name"), "init": init}, 0)
        group_opts = {k: v for k, v in options.items() if k not in ("init", "groups", "group_opts")}
        return [group], {group.name: group_opts}

    declared = options.get("groups") or []
    if isinstance(declared, (str, bytes)) or not isinstance(declared, (list, tuple)):
        raise ConfigurationError('"groups" must be a list')
    groups = [_as_group(raw, position) for position, raw in enumerate(declared)]
    configured = options.get("group_opts") or {}
    group_opts = {group.name: dict(configured.get(group.name) or {}) for group in groups}
    return groups, group_opts
