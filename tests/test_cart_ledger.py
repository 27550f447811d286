# tests/test_cart_ledger.py
from decimal import Decimal

import pytest

from textile_shop.core.exceptions import InvalidLineItem, InvalidQuantity, ItemNotFound
from textile_shop.schemas.cart import CartLineItem, CartState
from textile_shop.services.cart_ledger import CartLedger


def line(**overrides) -> CartLineItem:
    fields = dict(
        id="p1",
        name="Bazin riche bleu",
        unit_price="10.00",
        quantity=3,
        fabric_type="bazin",
        fabric_subtype="Riche",
        unit="meter",
    )
    fields.update(overrides)
    return CartLineItem(**fields)


@pytest.fixture
def ledger():
    return CartLedger()


def recomputed_total(ledger: CartLedger) -> Decimal:
    return sum((it.unit_price * it.quantity for it in ledger.items()), Decimal(0))


def test_add_then_readd_replaces_quantity(ledger):
    ledger.add_item(line())
    assert ledger.total() == Decimal("30.00")

    ledger.add_item(line(quantity=5))
    assert ledger.total() == Decimal("50.00")
    assert ledger.line_count() == 1
    assert ledger.get_item("p1").quantity == Decimal(5)


def test_invalid_subtype_is_rejected_without_mutation(ledger):
    ledger.add_item(line())
    before = ledger.items()

    with pytest.raises(InvalidLineItem) as excinfo:
        ledger.add_item(line(id="p2", fabric_subtype="Invalide"))

    assert excinfo.value.fields == ("fabric_subtype",)
    assert ledger.items() == before
    assert ledger.line_count() == 1


def test_clear_empties_a_three_item_cart(ledger):
    ledger.add_item(line(id="p1"))
    ledger.add_item(line(id="p2", fabric_subtype="Getzner"))
    ledger.add_item(line(id="p3", fabric_type="soie", fabric_subtype="Organza", unit_price="24.50"))
    assert ledger.state is CartState.NON_EMPTY

    ledger.clear()

    assert ledger.items() == ()
    assert ledger.total() == Decimal("0.00")
    assert ledger.state is CartState.EMPTY


def test_add_then_remove_restores_previous_content(ledger):
    ledger.add_item(line(id="p1"))
    ledger.add_item(line(id="p2", quantity="1.5"))
    before = ledger.items()

    ledger.add_item(line(id="p9", fabric_type="kente", fabric_subtype="Asasia", unit="roll"))
    ledger.remove_item("p9")

    assert ledger.items() == before


def test_replace_keeps_insertion_position(ledger):
    for pid in ("a", "b", "c"):
        ledger.add_item(line(id=pid))

    ledger.add_item(line(id="a", quantity=7))

    assert [it.id for it in ledger.items()] == ["a", "b", "c"]


def test_collects_every_failing_field(ledger):
    with pytest.raises(InvalidLineItem) as excinfo:
        ledger.add_item(line(unit_price="0", quantity="0.5", unit="roll"))

    assert set(excinfo.value.reasons) == {"unit_price", "quantity", "unit"}
    assert ledger.state is CartState.EMPTY


def test_unknown_fabric_type_is_an_invalid_line(ledger):
    with pytest.raises(InvalidLineItem) as excinfo:
        ledger.add_item(line(fabric_type="tweed"))

    assert "fabric_type" in excinfo.value.reasons
    assert ledger.line_count() == 0


@pytest.mark.parametrize("price", ["-1", "0", "0.00"])
def test_price_must_be_positive(ledger, price):
    with pytest.raises(InvalidLineItem):
        ledger.add_item(line(unit_price=price))


def test_decimal_quantities_above_one_are_accepted(ledger):
    ledger.add_item(line(quantity="2.5", unit_price="12.40"))
    assert ledger.total() == Decimal("31.00")


def test_update_quantity_only_touches_quantity(ledger):
    original = ledger.add_item(line())

    updated = ledger.update_quantity("p1", 4)

    assert updated.quantity == Decimal(4)
    assert updated.model_copy(update={"quantity": original.quantity}) == original
    assert ledger.total() == Decimal("40.00")


def test_update_quantity_accepts_floats_without_binary_drift(ledger):
    ledger.add_item(line(unit_price="0.10"))
    ledger.update_quantity("p1", 1.1)
    assert ledger.total() == Decimal("0.110")


def test_update_absent_item_fails_and_keeps_total(ledger):
    ledger.add_item(line())
    total = ledger.total()

    with pytest.raises(ItemNotFound):
        ledger.update_quantity("nope", 2)

    assert ledger.total() == total


@pytest.mark.parametrize("bad", [0, "0.99", -3, float("nan"), float("inf"), "abc", None, True])
def test_update_rejects_bad_quantities(ledger, bad):
    ledger.add_item(line())

    with pytest.raises(InvalidQuantity):
        ledger.update_quantity("p1", bad)

    assert ledger.get_item("p1").quantity == Decimal(3)


def test_remove_is_idempotent(ledger):
    ledger.add_item(line())

    assert ledger.remove_item("p1") is True
    assert ledger.remove_item("p1") is False
    assert ledger.state is CartState.EMPTY


def test_items_is_a_snapshot(ledger):
    ledger.add_item(line(id="p1"))
    snapshot = ledger.items()

    ledger.update_quantity("p1", 9)
    ledger.add_item(line(id="p2"))

    assert len(snapshot) == 1
    assert snapshot[0].quantity == Decimal(3)
    # restartable
    assert list(snapshot) == list(snapshot)


def test_total_tracks_any_sequence_of_operations(ledger):
    ledger.add_item(line(id="p1", unit_price="3.33", quantity=3))
    assert ledger.total() == recomputed_total(ledger)

    ledger.add_item(line(id="p2", unit_price="19.99", quantity="2.25"))
    assert ledger.total() == recomputed_total(ledger)

    ledger.update_quantity("p1", "7")
    assert ledger.total() == recomputed_total(ledger)

    ledger.remove_item("p2")
    ledger.add_item(line(id="p3", fabric_type="pagne", fabric_subtype="Wax", unit="roll", unit_price="45"))
    assert ledger.total() == recomputed_total(ledger)
    assert ledger.total() == Decimal("3.33") * 7 + Decimal("45") * 3


def test_line_total_is_derived():
    item = line(unit_price="8.25", quantity=4)
    assert item.line_total == Decimal("33.00")
    assert item.model_dump()["line_total"] == Decimal("33.00")


def test_ledgers_do_not_share_state():
    first, second = CartLedger(), CartLedger()
    first.add_item(line())
    assert second.state is CartState.EMPTY
    assert "p1" in first and "p1" not in second
