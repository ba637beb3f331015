"""
Derived-field calculator for purchase, sale and laborer payment records.

Every function here is total: missing, blank or non-numeric input counts as 0
and nothing raises. Deciding whether a value is *valid* is the job of the
forms, not of this module.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

# One bag of maize weighs 90 kg
BAG_WEIGHT_KG = 90


def to_number(value) -> float:
    """
    Coerce a raw form/API value to a float.

    Examples:
    - None, "", "  "   -> 0.0
    - "abc", nan, inf  -> 0.0
    - "12.5"           -> 12.5
    - Decimal("3.10")  -> 3.1
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round2(x) -> float:
    """
    Round to 2 decimal places, half away from zero, working on x * 100.

    Examples:
    - 33.333... -> 33.33
    - 0.125     -> 0.13
    - -0.125    -> -0.13
    """
    scaled = Decimal(to_number(x) * 100)
    whole = scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(whole) / 100


def compute_purchase_total(quantity, price_per_unit) -> float:
    """Total paid for a purchase. No rounding beyond float precision."""
    return to_number(quantity) * to_number(price_per_unit)


def compute_bags_from_quantity(quantity_sold) -> float:
    """Number of 90 kg bags in a sale, or 0 when there is no positive quantity."""
    quantity = to_number(quantity_sold)
    if quantity <= 0:
        return 0.0
    return round2(quantity / BAG_WEIGHT_KG)


def compute_sale_expected_amount(bags, price_per_unit) -> float:
    bags = to_number(bags)
    price = to_number(price_per_unit)
    if bags <= 0 or price <= 0:
        return 0.0
    return round2(bags * price)


def compute_sale_net_amount(cheque_amount, deposited_amount) -> float:
    """Proceeds collected minus labor paid out of them. May be negative."""
    return to_number(cheque_amount) - to_number(deposited_amount)


def compute_laborer_price_per_unit(total_cost, laborer_count) -> float:
    count = to_number(laborer_count)
    if count <= 0:
        return 0.0
    return round2(to_number(total_cost) / count)


# ===========================================
# Record-level derivation (create and edit)
# ===========================================

def derive_purchase_fields(data) -> dict:
    return {
        "total_amount_paid": compute_purchase_total(
            data.get("quantity_bought"), data.get("price_per_unit")
        ),
    }


def derive_sale_fields(data) -> dict:
    """
    Derived sale fields.

    total_amount_received is the net proceeds (cheque - deposited), which is
    what the dashboard sums as sales.
    """
    bags = compute_bags_from_quantity(data.get("quantity_sold"))
    return {
        "number_of_bags": bags,
        "expected_amount": compute_sale_expected_amount(
            bags, data.get("selling_price_per_unit")
        ),
        "total_amount_received": compute_sale_net_amount(
            data.get("cheque_paid"), data.get("deposited_amount")
        ),
    }


def derive_laborer_fields(data) -> dict:
    return {
        "price_per_laborer": compute_laborer_price_per_unit(
            data.get("total_labour"), data.get("number_of_laborers")
        ),
    }


DERIVERS = {
    "purchases": derive_purchase_fields,
    "sales": derive_sale_fields,
    "laborers": derive_laborer_fields,
}
