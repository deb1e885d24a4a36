"""
API enrichment: turn the raw operations returned by a group init into published operations.
A published operation validates its arguments, canonicalizes them and its result through
the wire format, and reports failures with the operation id.
"""
from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, Callable

import pydantic
from pydantic import ConfigDict, Field, create_model

from mini_client.core.checksum import array_to_obj
from mini_client.core.descriptor import OperationDescriptor
from mini_client.core.errors import OperationError, ValidationError
from mini_client.core.serialization import canonicalize, is_binary

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)


def api(
    validate: list[Any] | None = None,
    *,
    has_buffer_input: bool = False,
    has_stream_input: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach operation metadata: per-parameter validation rules, raw input flags."""

    def decorate(fn: Callable[..., Any]) -> Callable[..., Any]:
        if validate is not None:
            fn.validate = list(validate)  # type: ignore[attr-defined]
        fn.has_buffer_input = has_buffer_input  # type: ignore[attr-defined]
        fn.has_stream_input = has_stream_input  # type: ignore[attr-defined]
        return fn

    return decorate


def is_api(candidate: Any) -> bool:
    """Mapping of string ids to callables. Anything else (None, str, list...) is skipped."""
    if not isinstance(candidate, Mapping):
        return False
    return all(isinstance(key, str) and callable(value) for key, value in candidate.items())


def get_param_names(fn: Callable[..., Any]) -> list[str]:
    """Names of the parameters that can be passed positionally (including *args)."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return []
    return [name for name, param in signature.parameters.items() if param.kind in _POSITIONAL]


def build_schema(id: str, validate: list[Any], params: list[str]) -> type[pydantic.BaseModel]:
    """
    Strict model for an operation's named arguments.
    A rule is a type (required) or a (type, default) tuple (optional).
    Fields are named p0..pn and aliased to the parameter names, so any name (even "_private") is accepted.
    """
    fields: dict[str, Any] = {}
    for position, (name, rule) in enumerate(array_to_obj(validate, params).items()):
        annotation, default = rule if isinstance(rule, tuple) else (rule, ...)
        fields[f"p{position}"] = (annotation, Field(default, alias=name))
    return create_model(f"{id}_parameters", __config__=ConfigDict(extra="forbid"), **fields)


def _describe(error: dict[str, Any]) -> str:
    field = ".".join(str(part) for part in error["loc"]) or "value"
    if error["type"] == "missing":
        return f'"{field}" is required'
    if error["type"] == "extra_forbidden":
        return f'"{field}" is not allowed'
    message = error["msg"]
    return f'"{field}" {message[:1].lower()}{message[1:]}'


def validate_arguments(schema: type[pydantic.BaseModel], id: str, arguments: dict[str, Any]) -> None:
    try:
        schema.model_validate(arguments)
    except pydantic.ValidationError as exc:
        detail = ", ".join(_describe(error) for error in exc.errors())
        raise ValidationError(f"Incorrect parameters for API {id}: {detail}") from None


def publish(
    group: str,
    id: str,
    fn: Callable[..., Any],
) -> tuple[OperationDescriptor, Callable[..., Any]]:
    """Describe fn and wrap it into a published coroutine function."""
    descriptor = OperationDescriptor(
        group=group,
        id=id,
        params=get_param_names(fn),
        has_buffer_input=bool(getattr(fn, "has_buffer_input", False)),
        has_stream_input=bool(getattr(fn, "has_stream_input", False)),
    )
    serialized = descriptor.serialized
    validate = getattr(fn, "validate", None)
    schema = build_schema(id, validate, descriptor.params) if serialized and validate else None

    async def published(*args: Any) -> Any:
        if schema is not None:
            validate_arguments(schema, id, array_to_obj(args, descriptor.params))
        try:
            if serialized:
                result = fn(*canonicalize(list(args)))
            else:
                result = fn(args[0] if args else None)
            if inspect.isawaitable(result):
                result = await result
            if result is None or is_binary(result):
                return result
            return canonicalize(result)
        except OperationError as exc:
            raise exc.prefixed(f"Error while calling API {id}: ") from exc
        except Exception as exc:
            raise OperationError(f"Error while calling API {id}: {exc}") from exc

    published.__name__ = id
    published.__qualname__ = f"{group}.{id}"
    return descriptor, published
