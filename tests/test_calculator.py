from decimal import Decimal

import pytest

from maizebiz.core import calculator
from maizebiz.core.calculator import (
    compute_purchase_total,
    compute_bags_from_quantity,
    compute_sale_expected_amount,
    compute_sale_net_amount,
    compute_laborer_price_per_unit,
    round2,
    to_number,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("   ", 0.0),
        ("abc", 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (True, 0.0),
        ("12.5", 12.5),
        (" 7 ", 7.0),
        (Decimal("3.10"), 3.1),
        (4, 4.0),
    ],
)
def test_to_number(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (100 / 3, 33.33),
        (0.125, 0.13),
        (-0.125, -0.13),
        (5.0, 5.0),
        (None, 0.0),
    ],
)
def test_round2_is_half_away_from_zero(raw, expected):
    assert round2(raw) == expected


@pytest.mark.parametrize("quantity, price", [(0, 0), (500, 40), (12.5, 3.3), (1, 0)])
def test_purchase_total_is_plain_product(quantity, price):
    assert compute_purchase_total(quantity, price) == quantity * price


def test_purchase_total_treats_missing_values_as_zero():
    assert compute_purchase_total(None, 40) == 0
    assert compute_purchase_total("500", "") == 0


@pytest.mark.parametrize("quantity", [0, 1, 45, 90, 450, 1000, 12345.6])
def test_bags_from_quantity(quantity):
    assert compute_bags_from_quantity(quantity) == round2(quantity / 90)


def test_bags_from_non_positive_quantity_is_zero():
    assert compute_bags_from_quantity(0) == 0
    assert compute_bags_from_quantity(-90) == 0
    assert compute_bags_from_quantity(None) == 0


def test_sale_expected_amount():
    assert compute_sale_expected_amount(5.0, 4000) == 20000.0
    assert compute_sale_expected_amount(0, 4000) == 0
    assert compute_sale_expected_amount(5, None) == 0


def test_sale_net_amount_can_go_negative():
    assert compute_sale_net_amount(500, 700) == -200
    assert compute_sale_net_amount(20000, 1500) == 18500
    assert compute_sale_net_amount(None, None) == 0


def test_laborer_price_per_unit():
    assert compute_laborer_price_per_unit(1000, 4) == 250.0
    assert compute_laborer_price_per_unit(100, 3) == 33.33


def test_laborer_price_without_laborers_is_zero():
    assert compute_laborer_price_per_unit(1000, 0) == 0
    assert compute_laborer_price_per_unit(1000, None) == 0


def test_end_to_end_derivation():
    assert calculator.derive_purchase_fields(
        {"quantity_bought": 500, "price_per_unit": 40}
    ) == {"total_amount_paid": 20000}

    sale = calculator.derive_sale_fields(
        {
            "quantity_sold": 450,
            "selling_price_per_unit": 4000,
            "cheque_paid": 20000,
            "deposited_amount": 1500,
        }
    )
    assert sale["number_of_bags"] == 5.0
    assert sale["expected_amount"] == 20000.0
    assert sale["total_amount_received"] == 18500.0

    assert calculator.derive_laborer_fields(
        {"total_labour": 4500, "number_of_laborers": 9}
    ) == {"price_per_laborer": 500.0}


def test_derivers_accept_form_strings():
    sale = calculator.DERIVERS["sales"](
        {"quantity_sold": "900", "selling_price_per_unit": "4200", "cheque_paid": ""}
    )
    assert sale == {
        "number_of_bags": 10.0,
        "expected_amount": 42000.0,
        "total_amount_received": 0.0,
    }
