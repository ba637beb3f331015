from datetime import date, datetime, timedelta

import pytest

from maizebiz.core import aggregator
from maizebiz.core.aggregator import (
    bucket_by_day,
    filter_by_date_range,
    net_profit,
    stock_remaining,
    sum_field,
)

REFERENCE = date(2024, 3, 15)


def purchase(day, amount, quantity=0):
    return {"date_of_purchase": day, "total_amount_paid": amount, "quantity_bought": quantity}


def sale(day, amount, quantity=0):
    return {"date_of_sale": day, "total_amount_received": amount, "quantity_sold": quantity}


def test_sum_field_of_nothing_is_zero():
    assert sum_field([], "total_amount_paid") == 0


def test_sum_field_skips_missing_and_non_numeric():
    records = [{"x": 10}, {"x": None}, {}, {"x": "abc"}, {"x": "2.5"}]
    assert sum_field(records, "x") == 12.5


def test_sum_field_with_callable_and_objects():
    class Row:
        def __init__(self, amount):
            self.amount = amount

    rows = [Row(1), Row(2), Row(3)]
    assert sum_field(rows, "amount") == 6
    assert sum_field(rows, lambda r: r.amount * 2) == 12


def test_filter_by_date_range_is_inclusive():
    records = [
        purchase(date(2024, 3, 1), 1),
        purchase(date(2024, 3, 8), 2),
        purchase(datetime(2024, 3, 15, 23, 59), 3),
        purchase("2024-03-16", 4),
        {"total_amount_paid": 5},
    ]
    subset = filter_by_date_range(
        records, "date_of_purchase", date(2024, 3, 8), date(2024, 3, 15)
    )
    assert [r["total_amount_paid"] for r in subset] == [2, 3]


def test_bucket_by_day_over_empty_records():
    buckets = bucket_by_day([], "date_of_sale", "total_amount_received", 7, REFERENCE)
    assert len(buckets) == 7
    assert all(b.amount == 0 for b in buckets)
    assert [b.day for b in buckets] == [REFERENCE - timedelta(days=n) for n in range(6, -1, -1)]
    assert buckets[-1].day == REFERENCE
    assert buckets[-1].label == "Mar 15"


def test_bucket_by_day_sums_per_day_and_ignores_out_of_window():
    records = [
        sale(REFERENCE, 100),
        sale(REFERENCE, 50),
        sale(REFERENCE - timedelta(days=2), 30),
        sale(REFERENCE - timedelta(days=30), 999),
        sale(REFERENCE + timedelta(days=1), 999),
    ]
    buckets = bucket_by_day(records, "date_of_sale", "total_amount_received", 7, REFERENCE)
    amounts = [b.amount for b in buckets]
    assert amounts == [0, 0, 0, 0, 30, 0, 150]


def test_net_profit_and_stock_allow_negative():
    assert net_profit(1000, 1500) == -500
    assert stock_remaining(1000, 1200) == -200
    assert stock_remaining(None, None) == 0


def test_period_range():
    assert aggregator.period_range("today", REFERENCE) == (REFERENCE, REFERENCE)
    assert aggregator.period_range("week", REFERENCE) == (date(2024, 3, 8), REFERENCE)
    assert aggregator.period_range("month", REFERENCE) == (date(2024, 2, 14), REFERENCE)
    with pytest.raises(ValueError):
        aggregator.period_range("year", REFERENCE)


def test_summarize():
    purchases = [
        purchase(REFERENCE, 20000, 500),
        purchase(REFERENCE - timedelta(days=5), 10000, 250),
        purchase(REFERENCE - timedelta(days=20), 4000, 100),
    ]
    sales = [
        sale(REFERENCE - timedelta(days=1), 18500, 450),
        sale(REFERENCE - timedelta(days=60), 1000, 500),
    ]

    stats = aggregator.summarize(purchases, sales, REFERENCE)

    assert stats.total_purchases == 34000
    assert stats.total_sales == 19500
    assert stats.profit == -14500
    assert stats.stock_remaining == -100
    assert stats.today_purchases == 20000
    assert stats.today_sales == 0
    assert stats.weekly_purchases == 30000
    assert stats.weekly_sales == 18500
    assert stats.monthly_purchases == 34000
    assert stats.monthly_sales == 18500


def test_summarize_leaves_future_records_out_of_periods():
    purchases = [purchase(REFERENCE, 1000), purchase(REFERENCE + timedelta(days=3), 5000)]

    stats = aggregator.summarize(purchases, [], REFERENCE)

    assert stats.total_purchases == 6000
    assert stats.today_purchases == 1000
    assert stats.weekly_purchases == 1000
    assert stats.monthly_purchases == 1000


def test_summarize_with_no_records():
    stats = aggregator.summarize([], [], REFERENCE)
    assert stats.total_purchases == 0
    assert stats.profit == 0
    assert stats.stock_remaining == 0


@pytest.mark.parametrize("window", [7, 30, 90])
def test_daily_series_lengths(window):
    series = aggregator.daily_series([], [], window, REFERENCE)
    assert len(series) == window
    assert series[-1].day == REFERENCE


def test_daily_series_profit_per_day():
    series = aggregator.daily_series(
        [purchase(REFERENCE, 300)], [sale(REFERENCE, 500)], 7, REFERENCE
    )
    last = series[-1]
    assert (last.purchases, last.sales, last.profit) == (300, 500, 200)
    assert series[0].profit == 0


def test_daily_series_rejects_other_windows():
    with pytest.raises(ValueError):
        aggregator.daily_series([], [], 14, REFERENCE)


def test_laborer_summary():
    summary = aggregator.laborer_summary(
        [
            {"total_labour": 4500, "number_of_laborers": 9},
            {"total_labour": 1500, "number_of_laborers": 3},
        ]
    )
    assert summary.total_labour_cost == 6000
    assert summary.total_laborers == 12
    assert summary.average_price_per_laborer == 500


def test_laborer_summary_without_laborers():
    summary = aggregator.laborer_summary([])
    assert summary.average_price_per_laborer == 0
