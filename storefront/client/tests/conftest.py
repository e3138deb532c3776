import asyncio

import pytest

from storefront.models import CartItem


class FakeCart:
    def __init__(self, items=None, total=0):
        self._items = list(items or [])
        self._total = total
        self.total_error = None
        self.total_calls = 0
        self.cleared = False

    def items(self):
        return list(self._items)

    def total(self):
        self.total_calls += 1
        if self.total_error:
            raise self.total_error
        return self._total

    def clear(self):
        self.cleared = True
        self._items = []


class MemoryDraftStore:
    def __init__(self, checkout=None):
        self.checkout = list(checkout or [])
        self.orders = []
        self.append_error = None

    def load_checkout_cart(self):
        return list(self.checkout)

    def save_checkout_cart(self, items):
        self.checkout = list(items)

    def clear_checkout_cart(self):
        self.checkout = []

    def append_order(self, order):
        if self.append_error:
            raise self.append_error
        self.orders.insert(0, order)


class AsyncDraftStore(MemoryDraftStore):
    async def append_order(self, order):
        await asyncio.sleep(0)
        super().append_order(order)


class FakePresenter:
    def __init__(self):
        self.alerts = []
        self.controls = []
        self.views = []

    def alert(self, message):
        self.alerts.append(message)

    def set_submit_control(self, enabled, label):
        self.controls.append((enabled, label))

    def navigate(self, view):
        self.views.append(view)


class FakeResolver:
    def __init__(self, url=None, error=None):
        self.url = url
        self.error = error
        self.calls = 0

    async def resolve(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.url


class FakeSubmitter:
    def __init__(self, result=True):
        self.result = result
        self.calls = []
        self.gate = None

    async def submit(self, url, order):
        self.calls.append((url, order))
        if self.gate is not None:
            await self.gate.wait()
        return self.result


@pytest.fixture
def cart_items():
    return [
        CartItem(name="Linen shirt", size="M", color="white", quantity=2, price=150),
        CartItem(name="Scarf", size="One size", color="blue", quantity=1, price=80),
    ]


@pytest.fixture
def cart(cart_items):
    return FakeCart(cart_items, total=380)


@pytest.fixture
def drafts(cart_items):
    return MemoryDraftStore(checkout=cart_items)


@pytest.fixture
def async_drafts(cart_items):
    return AsyncDraftStore(checkout=cart_items)


@pytest.fixture
def presenter():
    return FakePresenter()


@pytest.fixture
def resolver():
    return FakeResolver(url="https://orders.example.com/api/orders")


@pytest.fixture
def submitter():
    return FakeSubmitter(result=True)


@pytest.fixture
def empty_drafts():
    return MemoryDraftStore()


@pytest.fixture
def failing_resolver():
    return FakeResolver(error=RuntimeError("config source exploded"))
