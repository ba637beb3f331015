from datetime import date

from maizebiz.core.search import (
    LABORER_SEARCH_FIELDS,
    PURCHASE_SEARCH_FIELDS,
    SALE_SEARCH_FIELDS,
    filter_records,
    matches,
)
from maizebiz.models import DeliveryMethod, PaymentMethod


def test_empty_query_matches_everything():
    assert matches({}, "", PURCHASE_SEARCH_FIELDS)
    assert matches({"supplier_name": "Acme"}, "   ", PURCHASE_SEARCH_FIELDS)
    assert matches({"supplier_name": "Acme"}, None, PURCHASE_SEARCH_FIELDS)


def test_case_insensitive_substring():
    assert matches({"supplier_name": "Acme"}, "acm", ["supplier_name"])
    assert matches({"supplier_name": "acme"}, "ACME", ["supplier_name"])
    assert not matches({"supplier_name": "Acme"}, "zeta", ["supplier_name"])


def test_absent_fields_are_skipped():
    record = {"supplier_name": "Kiprono Farm", "truck_number_plate": None}
    assert matches(record, "farm", PURCHASE_SEARCH_FIELDS)
    assert not matches(record, "kca", PURCHASE_SEARCH_FIELDS)


def test_enum_fields_match_on_their_label():
    assert matches({"payment_method": PaymentMethod.MPESA}, "m-pesa", PURCHASE_SEARCH_FIELDS)
    assert matches({"delivery_method": DeliveryMethod.PICK_UP}, "pick", SALE_SEARCH_FIELDS)


def test_numbers_match_without_separators():
    record = {"date": date(2024, 3, 11), "number_of_laborers": 9,
              "total_labour": 4500.0, "price_per_laborer": 33.33}
    assert matches(record, "4500", LABORER_SEARCH_FIELDS)
    assert not matches(record, "4,500", LABORER_SEARCH_FIELDS)
    assert matches(record, "33.33", LABORER_SEARCH_FIELDS)
    assert matches(record, "2024-03", LABORER_SEARCH_FIELDS)


def test_only_configured_fields_are_searched():
    record = {"customer_name": "Unga Millers", "comment": "Good"}
    assert not matches(record, "good", SALE_SEARCH_FIELDS)


def test_filter_records_keeps_order():
    records = [
        {"customer_name": "Nakuru Feeds"},
        {"customer_name": "Unga Millers"},
        {"customer_name": "Nakuru Posho"},
    ]
    assert filter_records(records, "nakuru", SALE_SEARCH_FIELDS) == [records[0], records[2]]
    assert filter_records(records, "", SALE_SEARCH_FIELDS) == records
