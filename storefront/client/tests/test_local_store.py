import json

from storefront.client.local_store import JsonFileDraftStore
from storefront.models import OrderDraft, OrderForm


def _order(name):
    return OrderDraft.build(OrderForm(full_name=name, phone="0612345678", city="Rabat"), [], 0)


def test_missing_file_is_empty(tmp_path):
    store = JsonFileDraftStore(tmp_path / "drafts.json")
    assert store.load_checkout_cart() == []
    assert store.list_orders() == []


def test_orders_are_prepended(tmp_path):
    store = JsonFileDraftStore(tmp_path / "nested" / "drafts.json")
    store.append_order(_order("First"))
    store.append_order(_order("Second"))

    orders = store.list_orders()
    assert [o["fullName"] for o in orders] == ["Second", "First"]
    assert store.list_orders(limit=1)[0]["fullName"] == "Second"


def test_checkout_snapshot_round_trip(tmp_path, cart_items):
    store = JsonFileDraftStore(tmp_path / "drafts.json")
    store.save_checkout_cart(cart_items)
    store.append_order(_order("Amal"))

    assert store.load_checkout_cart() == cart_items

    store.clear_checkout_cart()
    assert store.load_checkout_cart() == []
    assert len(store.list_orders()) == 1, "clearing the snapshot keeps saved orders"


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "drafts.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileDraftStore(path)

    assert store.load_checkout_cart() == []
    store.append_order(_order("Amal"))
    assert json.loads(path.read_text(encoding="utf-8"))["orders"][0]["fullName"] == "Amal"


def test_invalid_snapshot_is_ignored(tmp_path):
    path = tmp_path / "drafts.json"
    path.write_text(json.dumps({"checkoutCart": [{"name": "Shirt", "quantity": 0, "price": 10}]}), encoding="utf-8")

    assert JsonFileDraftStore(path).load_checkout_cart() == []


def test_non_list_orders_field_is_reset(tmp_path):
    path = tmp_path / "drafts.json"
    path.write_text(json.dumps({"orders": "oops"}), encoding="utf-8")
    store = JsonFileDraftStore(path)

    store.append_order(_order("Amal"))
    assert len(store.list_orders()) == 1
