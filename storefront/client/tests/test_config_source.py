import asyncio

import requests

from storefront.client.config_source import RemoteConfigSource

STORE_DATA_URL = "https://shop.example.com/data/store-data.json"


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_initial_load_happens_once():
    session = FakeSession(FakeResponse(payload={"ordersApiUrl": " https://api.example.com/orders "}))
    source = RemoteConfigSource(STORE_DATA_URL, session=session)

    async def scenario():
        await source.wait_ready()
        await source.wait_ready()

    asyncio.run(scenario())
    assert session.calls == [STORE_DATA_URL]
    assert source.get_endpoint_url() == "https://api.example.com/orders"


def test_refresh_fetches_again():
    session = FakeSession(
        FakeResponse(payload={"products": []}),
        FakeResponse(payload={"ordersApiUrl": "https://api.example.com/orders"}),
    )
    source = RemoteConfigSource(STORE_DATA_URL, session=session)

    asyncio.run(source.wait_ready())
    assert source.get_endpoint_url() is None

    asyncio.run(source.refresh())
    assert source.get_endpoint_url() == "https://api.example.com/orders"
    assert len(session.calls) == 2


def test_failed_loads_keep_previous_values():
    session = FakeSession(
        FakeResponse(payload={"ordersApiUrl": "https://api.example.com/orders"}),
        requests.ConnectionError("offline"),
        FakeResponse(status_code=404),
        FakeResponse(payload=ValueError("not json")),
        FakeResponse(payload=["not", "an", "object"]),
    )
    source = RemoteConfigSource(STORE_DATA_URL, session=session)
    asyncio.run(source.wait_ready())

    for _ in range(4):
        asyncio.run(source.refresh())
        assert source.get_endpoint_url() == "https://api.example.com/orders"


def test_first_load_failure_still_reports_ready():
    session = FakeSession(requests.ConnectionError("offline"))
    source = RemoteConfigSource(STORE_DATA_URL, session=session)

    asyncio.run(source.wait_ready())
    assert source.get_endpoint_url() is None


def test_without_url_nothing_is_fetched():
    session = FakeSession()
    source = RemoteConfigSource("", session=session)

    asyncio.run(source.wait_ready())
    asyncio.run(source.refresh())
    assert session.calls == []
    assert source.get_endpoint_url() is None
