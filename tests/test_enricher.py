from __future__ import annotations

import io

import pytest

from mini_client import OperationError, ValidationError, api
from mini_client.core.enricher import build_schema, get_param_names, is_api, publish, validate_arguments


def test_param_names():
    def plain(a, b=1, *rest, key=None, **extra):
        pass

    class Service:
        def method(self, first, second):
            pass

    assert get_param_names(plain) == ["a", "b", "rest"]
    assert get_param_names(Service().method) == ["first", "second"]
    assert get_param_names(lambda: None) == []


@pytest.mark.parametrize("candidate, expected", [
    ({"op": lambda: None}, True),
    ({}, True),
    (None, False),
    ("initialized", False),
    (True, False),
    ([{"worked": True}], False),
    ({"op": "not callable"}, False),
])
def test_is_api(candidate, expected):
    assert is_api(candidate) is expected


def test_api_decorator_metadata():
    @api([int], has_stream_input=True)
    def op(value):
        pass

    assert op.validate == [int]
    assert op.has_stream_input
    assert not op.has_buffer_input


def test_validation_messages():
    schema = build_schema("add", [int, (int, 0)], ["a", "b"])
    validate_arguments(schema, "add", {"a": 1})
    with pytest.raises(ValidationError) as info:
        validate_arguments(schema, "add", {"b": 1, "2": 3})
    assert info.value.message.startswith("Incorrect parameters for API add: ")
    assert '"a" is required' in info.value.message
    assert '"2" is not allowed' in info.value.message
    assert info.value.status_code == 400


def test_describe_operation():
    @api(has_buffer_input=True)
    async def upload(buffer):
        return buffer

    descriptor, operation = publish("files", "upload", upload)
    assert descriptor.group == "files"
    assert descriptor.params == ["buffer"]
    assert descriptor.has_buffer_input
    assert not descriptor.serialized
    assert operation.__name__ == "upload"


@pytest.mark.asyncio
async def test_validation_runs_before_operation():
    calls = []

    @api([str])
    async def greeting(name):
        calls.append(name)

    _, operation = publish("sample", "greeting", greeting)
    with pytest.raises(ValidationError, match='"name" is required'):
        await operation()
    assert calls == []


@pytest.mark.asyncio
async def test_raw_inputs_skip_validation_and_serialization():
    stream = io.BytesIO(b"raw")

    @api([int], has_stream_input=True)
    async def consume(payload):
        return payload

    _, operation = publish("sample", "consume", consume)
    assert await operation(stream) is stream


@pytest.mark.asyncio
async def test_wrap_failures():
    def errored():
        raise ValueError("bad value")

    _, operation = publish("sample", "errored", errored)
    with pytest.raises(OperationError) as info:
        await operation()
    assert info.value.message == "Error while calling API errored: bad value"
    assert info.value.status_code is None
    assert isinstance(info.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_underscore_parameter_names():
    @api([str])
    async def hello(_name):
        return _name

    _, operation = publish("sample", "hello", hello)
    assert await operation("x") == "x"
    with pytest.raises(ValidationError, match='"_name" is required'):
        await operation()
    with pytest.raises(ValidationError, match='"1" is not allowed'):
        await operation("x", "y")


def test_schema_keeps_parameter_names_in_errors():
    schema = build_schema("move", [int, (int, 0)], ["x", "y"])
    validate_arguments(schema, "move", {"x": 1, "y": 2})
    with pytest.raises(ValidationError, match='"y" input should be a valid integer'):
        validate_arguments(schema, "move", {"x": 1, "y": "far"})
    with pytest.raises(ValidationError, match='"p0" is not allowed'):
        validate_arguments(schema, "move", {"x": 1, "p0": 1})
