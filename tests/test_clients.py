"""Behaviour shared by local and remote clients of the sample service."""
from __future__ import annotations

import io
from datetime import datetime

import pytest

from mini_client import OperationError, get_client
from tests.fixtures import sample


@pytest.fixture(params=["local", "remote"])
def client(request, logger):
    if request.param == "local":
        return get_client(
            name="sample-service",
            version="1.0.0",
            logger=logger,
            groups=[{"name": "sample", "init": sample.init}],
            group_opts={"sample": {"greetings": " nice to meet you"}},
        )
    return get_client(request.getfixturevalue("remote_options"))


def test_unknown_version_before_first_call(client):
    assert client.version == "unknown"


@pytest.mark.asyncio
async def test_respond_to_ping(client):
    result = await client.sample.ping()
    assert isinstance(result["time"], str)
    assert datetime.fromisoformat(result["time"])
    assert client.version == "sample-service@1.0.0"


@pytest.mark.asyncio
async def test_greet_people(client):
    assert await client.sample.greeting("Jane") == "Hello Jane nice to meet you !"


@pytest.mark.asyncio
async def test_api_errors(client):
    with pytest.raises(OperationError, match="really bad"):
        await client.sample.failing()


@pytest.mark.asyncio
async def test_validate_parameter_existence(client):
    with pytest.raises(OperationError) as info:
        await client.sample.greeting()
    assert "Incorrect parameters for API greeting" in info.value.message
    assert '"name" is required' in info.value.message
    assert info.value.status_code == 400


@pytest.mark.asyncio
async def test_validate_parameter_type(client):
    with pytest.raises(OperationError, match="valid string"):
        await client.sample.greeting(18)


@pytest.mark.asyncio
async def test_no_extra_parameters(client):
    with pytest.raises(OperationError, match='"1" is not allowed'):
        await client.sample.greeting("Jane", "Peter")


@pytest.mark.asyncio
async def test_undefined_result(client):
    assert await client.sample.get_undefined() is None


@pytest.mark.asyncio
async def test_keep_error_status(client):
    with pytest.raises(OperationError, match="Custom authorization error") as info:
        await client.sample.unauthorized()
    assert info.value.status_code == 401


@pytest.mark.asyncio
async def test_exotic_parameters(client):
    result = await client.sample.with_exotic_parameters([1, 2], {"c": {"d": 3}}, 4, 5)
    assert result == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_buffer_input(client):
    assert await client.sample.buffer_handling(bytes([1, 2])) == bytes([1, 2, 3, 4])


@pytest.mark.asyncio
async def test_stream_input(client):
    result = await client.sample.stream_handling(io.BytesIO(b"streamed content"))
    assert result.read() == b"here is a prefix -- streamed content"


@pytest.mark.asyncio
async def test_exposed_descriptor(client):
    await client.init()
    apis = {api.id: api for api in client.exposed.apis}
    assert client.exposed.name == "sample-service"
    assert apis["greeting"].params == ["name"]
    assert apis["buffer_handling"].has_buffer_input
    assert apis["stream_handling"].has_stream_input
    assert not apis["ping"].has_buffer_input
