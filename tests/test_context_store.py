import pytest
from pydantic import ValidationError

from http_log_middleware.context_store import MemoryContextStore
from http_log_middleware.exceptions import DuplicateTransactionError
from http_log_middleware.models import RequestRecord


@pytest.fixture
def request_record() -> RequestRecord:
    return RequestRecord(
        method="GET",
        uri="https://example.com/",
        protocol_version="1.1",
        headers={"X-Foo": ["bar"]},
    )


@pytest.mark.asyncio
async def test_create_and_get(request_record):
    store = MemoryContextStore()

    context = await store.create("abc", request_record)
    stored = await store.get("abc")

    assert stored is context
    assert stored.transaction_id == "abc"
    assert stored.request.uri == "https://example.com/"


@pytest.mark.asyncio
async def test_get_unknown_returns_none():
    store = MemoryContextStore()

    assert await store.get("missing") is None


@pytest.mark.asyncio
async def test_duplicate_create_fails(request_record):
    store = MemoryContextStore()
    await store.create("abc", request_record)

    with pytest.raises(DuplicateTransactionError) as exc_info:
        await store.create("abc", request_record)

    assert exc_info.value.transaction_id == "abc"


@pytest.mark.asyncio
async def test_retire_is_idempotent(request_record):
    store = MemoryContextStore()
    await store.create("abc", request_record)

    await store.retire("abc")
    await store.retire("abc")
    await store.retire("never-created")

    assert await store.get("abc") is None


@pytest.mark.asyncio
async def test_id_can_be_reused_after_retire(request_record):
    store = MemoryContextStore()
    await store.create("abc", request_record)
    await store.retire("abc")

    context = await store.create("abc", request_record)

    assert await store.get("abc") is context


@pytest.mark.asyncio
async def test_stores_are_isolated(request_record):
    first = MemoryContextStore()
    second = MemoryContextStore()

    await first.create("abc", request_record)

    assert await second.get("abc") is None
    await second.create("abc", request_record)


def test_request_record_is_frozen(request_record):
    with pytest.raises(ValidationError):
        request_record.uri = "https://other.example/"


def test_request_record_headers_are_read_only(request_record):
    with pytest.raises(TypeError):
        request_record.headers["X-Foo"] = ["baz"]
    with pytest.raises(AttributeError):
        request_record.headers["X-Foo"].append("baz")

    assert request_record.headers["X-Foo"] == ("bar",)
    assert request_record.model_dump()["headers"] == {"X-Foo": ["bar"]}


def test_request_record_default_headers_are_read_only():
    record = RequestRecord(method="GET", uri="/", protocol_version="1.1")

    with pytest.raises(TypeError):
        record.headers["X-Foo"] = ("bar",)
