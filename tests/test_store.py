from datetime import date

import pytest

from maizebiz.models import Purchase, SalePaymentMethod
from maizebiz.store import UnknownCollection


def test_create_purchase_applies_total(store, user_id, purchase_data):
    record = store.create("purchases", user_id, purchase_data)

    assert isinstance(record, Purchase)
    assert record.id is not None
    assert record.user_id == user_id
    assert record.total_amount_paid == 20000
    assert record.weight_loss == 10


def test_create_sale_applies_derived_fields(store, user_id, sale_data):
    record = store.create("sales", user_id, sale_data)

    assert record.number_of_bags == 5.0
    assert record.expected_amount == 20000.0
    assert record.total_amount_received == 18500.0
    assert record.payment_method_sale is SalePaymentMethod.CHEQUE


def test_create_laborer_applies_price(store, user_id, laborer_data):
    record = store.create("laborers", user_id, laborer_data)
    assert record.price_per_laborer == 500.0


def test_client_supplied_derived_values_are_ignored(store, user_id, purchase_data):
    purchase_data["total_amount_paid"] = 1.0
    record = store.create("purchases", user_id, purchase_data)
    assert record.total_amount_paid == 20000


def test_update_recomputes_from_merged_state(store, user_id, sale_data):
    record = store.create("sales", user_id, sale_data)

    updated = store.update("sales", user_id, record.id, {"quantity_sold": 900.0})

    assert updated.number_of_bags == 10.0
    assert updated.expected_amount == 40000.0
    # cheque and deposit untouched
    assert updated.total_amount_received == 18500.0

    updated = store.update("sales", user_id, record.id, {"deposited_amount": 25000.0})
    assert updated.total_amount_received == -5000.0


def test_list_is_newest_first_and_user_scoped(store, user_id, other_user_id, purchase_data):
    store.create("purchases", user_id, dict(purchase_data, date_of_purchase=date(2024, 3, 1)))
    store.create("purchases", user_id, dict(purchase_data, date_of_purchase=date(2024, 3, 20)))
    store.create("purchases", other_user_id, purchase_data)

    records = store.list("purchases", user_id)

    assert [r.date_of_purchase for r in records] == [date(2024, 3, 20), date(2024, 3, 1)]
    assert len(store.list("purchases", other_user_id)) == 1


def test_other_users_records_are_invisible(store, user_id, other_user_id, laborer_data):
    record = store.create("laborers", user_id, laborer_data)

    assert store.get("laborers", other_user_id, record.id) is None
    assert store.update("laborers", other_user_id, record.id, {"total_labour": 1}) is None
    assert store.delete("laborers", other_user_id, record.id) is False
    assert store.get("laborers", user_id, record.id) is not None


def test_delete(store, user_id, laborer_data):
    record = store.create("laborers", user_id, laborer_data)

    assert store.delete("laborers", user_id, record.id) is True
    assert store.get("laborers", user_id, record.id) is None
    assert store.delete("laborers", user_id, record.id) is False


def test_unknown_collection(store, user_id):
    with pytest.raises(UnknownCollection):
        store.list("receipts", user_id)
    with pytest.raises(KeyError):
        store.create("receipts", user_id, {})


def test_to_dict_serializes_enums_and_dates(store, user_id, sale_data):
    data = store.create("sales", user_id, sale_data).to_dict()

    assert data["date_of_sale"] == "2024-03-11"
    assert data["payment_method_sale"] == "Cheque"
    assert data["delivery_method"] == "Delivery"
    assert data["comment"] == "Good"
    assert data["user_id"] == user_id
