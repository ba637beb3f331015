"""
Free-text filtering for the purchase, sale and laborer lists.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from maizebiz.core.aggregator import field_value

PURCHASE_SEARCH_FIELDS = (
    "supplier_name",
    "payment_method",
    "truck_number_plate",
    "location_of_origin",
)

SALE_SEARCH_FIELDS = (
    "customer_name",
    "driver_phone",
    "delivery_method",
    "small_comment",
)

LABORER_SEARCH_FIELDS = (
    "date",
    "number_of_laborers",
    "total_labour",
    "price_per_laborer",
)

SEARCH_FIELDS = {
    "purchases": PURCHASE_SEARCH_FIELDS,
    "sales": SALE_SEARCH_FIELDS,
    "laborers": LABORER_SEARCH_FIELDS,
}


def searchable_text(value):
    """
    Plain string used for matching, or None when the field is absent.

    Numbers use their shortest decimal form without thousands separators:
    500.0 -> "500", 33.33 -> "33.33".
    """
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def matches(record, query, field_selectors) -> bool:
    if query is None or not str(query).strip():
        return True

    needle = str(query).casefold()
    for selector in field_selectors:
        text = searchable_text(field_value(record, selector))
        if text is not None and needle in text.casefold():
            return True
    return False


def filter_records(records, query, field_selectors) -> list:
    return [r for r in records if matches(r, query, field_selectors)]
