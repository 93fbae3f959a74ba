import httpx
import pytest

from cat_cache.entities import Found, NotFound, TransientError
from cat_cache.repositories import HttpImageFetcher, ImageFetcher


def make_fetcher(handler) -> HttpImageFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpImageFetcher(base_url="https://http.cat/", client=client)


def test_satisfies_protocol():
    assert isinstance(HttpImageFetcher(base_url="https://http.cat"), ImageFetcher)


def test_url_for_strips_trailing_slash():
    fetcher = HttpImageFetcher(base_url="https://http.cat/")
    assert fetcher.url_for("418") == "https://http.cat/418.jpg"


@pytest.mark.asyncio
async def test_found():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, content=b"\xff\xd8cat")

    fetcher = make_fetcher(handler)
    result = await fetcher.fetch("200")
    await fetcher.close()

    assert result == Found(b"\xff\xd8cat")
    assert requested == ["https://http.cat/200.jpg"]


@pytest.mark.asyncio
async def test_not_found():
    fetcher = make_fetcher(lambda request: httpx.Response(404, text="Not Found"))
    assert isinstance(await fetcher.fetch("999999"), NotFound)


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 500, 503])
async def test_other_status_is_transient(status_code):
    fetcher = make_fetcher(lambda request: httpx.Response(status_code))
    result = await fetcher.fetch("200")
    assert isinstance(result, TransientError)
    assert str(status_code) in str(result.cause)


@pytest.mark.asyncio
async def test_network_failure_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await make_fetcher(handler).fetch("200")
    assert isinstance(result, TransientError)
    assert isinstance(result.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_is_transient():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    assert isinstance(await make_fetcher(handler).fetch("200"), TransientError)


@pytest.mark.asyncio
async def test_single_request_no_retry():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(502)

    await make_fetcher(handler).fetch("200")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_close_resets_client():
    fetcher = HttpImageFetcher(base_url="https://http.cat")
    first = fetcher.client
    await fetcher.close()
    assert fetcher.client is not first
    await fetcher.close()
