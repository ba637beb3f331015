"""
Client-side aggregation over records that were already fetched.

Works on any mix of mappings and objects (model rows). Empty inputs degrade to
zero-valued results.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from maizebiz.core.calculator import to_number

CHART_WINDOWS = (7, 30, 90)
DAY_LABEL_FORMAT = "%b %d"

# Days counted back from the reference day for each dashboard period
PERIOD_DAYS = {
    "today": 0,
    "week": 7,
    "month": 30,
}


@dataclass(frozen=True)
class DayBucket:
    day: date
    label: str
    amount: float


@dataclass(frozen=True)
class ChartPoint:
    day: date
    label: str
    purchases: float
    sales: float
    profit: float


@dataclass(frozen=True)
class DashboardStats:
    total_purchases: float
    total_sales: float
    profit: float
    stock_remaining: float
    today_purchases: float
    today_sales: float
    weekly_purchases: float
    weekly_sales: float
    monthly_purchases: float
    monthly_sales: float


@dataclass(frozen=True)
class LaborerSummary:
    total_labour_cost: float
    total_laborers: float
    average_price_per_laborer: float


def field_value(record, selector):
    """Resolve a selector (key/attribute name or callable) against a record."""
    if callable(selector):
        return selector(record)
    if isinstance(record, dict):
        return record.get(selector)
    return getattr(record, selector, None)


def as_calendar_day(value) -> Optional[date]:
    """Calendar day of a date, datetime or ISO 'YYYY-MM-DD...' string."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def sum_field(records, selector) -> float:
    return sum((to_number(field_value(r, selector)) for r in records), 0.0)


def filter_by_date_range(records, date_selector, start, end) -> list:
    """Records whose calendar day lies in [start, end], bounds included."""
    start_day = as_calendar_day(start)
    end_day = as_calendar_day(end)
    subset = []
    for record in records:
        day = as_calendar_day(field_value(record, date_selector))
        if day is not None and start_day <= day <= end_day:
            subset.append(record)
    return subset


def bucket_by_day(
    records,
    date_selector,
    amount_selector,
    window_days: int,
    reference_instant,
) -> List[DayBucket]:
    """
    Gap-free daily series of ``window_days`` entries ending at the reference day.

    Ordered oldest to newest. Days without records still get a bucket with
    amount 0.
    """
    reference_day = as_calendar_day(reference_instant)

    totals = {}
    for record in records:
        day = as_calendar_day(field_value(record, date_selector))
        if day is None:
            continue
        totals[day] = totals.get(day, 0.0) + to_number(
            field_value(record, amount_selector)
        )

    series = []
    for offset in range(window_days - 1, -1, -1):
        day = reference_day - timedelta(days=offset)
        series.append(
            DayBucket(
                day=day,
                label=day.strftime(DAY_LABEL_FORMAT),
                amount=totals.get(day, 0.0),
            )
        )
    return series


def net_profit(sales_total, purchases_total) -> float:
    return to_number(sales_total) - to_number(purchases_total)


def stock_remaining(total_bought, total_sold) -> float:
    """Kilograms left in store. Negative means more was sold than bought."""
    return to_number(total_bought) - to_number(total_sold)


def period_range(period: str, reference):
    """(start, end) calendar days for 'today', 'week' or 'month'."""
    if period not in PERIOD_DAYS:
        raise ValueError(f"Unknown period '{period}'")
    end = as_calendar_day(reference)
    return end - timedelta(days=PERIOD_DAYS[period]), end


def _period_total(records, date_selector, amount_selector, period, reference):
    start, end = period_range(period, reference)
    return sum_field(
        filter_by_date_range(records, date_selector, start, end), amount_selector
    )


def summarize(purchases, sales, reference) -> DashboardStats:
    """Dashboard cards for one user's purchases and sales."""
    purchases = list(purchases)
    sales = list(sales)

    total_purchases = sum_field(purchases, "total_amount_paid")
    total_sales = sum_field(sales, "total_amount_received")

    def purchases_in(period):
        return _period_total(
            purchases, "date_of_purchase", "total_amount_paid", period, reference
        )

    def sales_in(period):
        return _period_total(
            sales, "date_of_sale", "total_amount_received", period, reference
        )

    return DashboardStats(
        total_purchases=total_purchases,
        total_sales=total_sales,
        profit=net_profit(total_sales, total_purchases),
        stock_remaining=stock_remaining(
            sum_field(purchases, "quantity_bought"),
            sum_field(sales, "quantity_sold"),
        ),
        today_purchases=purchases_in("today"),
        today_sales=sales_in("today"),
        weekly_purchases=purchases_in("week"),
        weekly_sales=sales_in("week"),
        monthly_purchases=purchases_in("month"),
        monthly_sales=sales_in("month"),
    )


def daily_series(purchases, sales, window_days: int, reference) -> List[ChartPoint]:
    if window_days not in CHART_WINDOWS:
        raise ValueError(
            f"Unsupported chart window {window_days}; expected one of {CHART_WINDOWS}"
        )

    purchase_days = bucket_by_day(
        purchases, "date_of_purchase", "total_amount_paid", window_days, reference
    )
    sale_days = bucket_by_day(
        sales, "date_of_sale", "total_amount_received", window_days, reference
    )

    return [
        ChartPoint(
            day=p.day,
            label=p.label,
            purchases=p.amount,
            sales=s.amount,
            profit=net_profit(s.amount, p.amount),
        )
        for p, s in zip(purchase_days, sale_days)
    ]


def laborer_summary(laborers) -> LaborerSummary:
    laborers = list(laborers)
    total_cost = sum_field(laborers, "total_labour")
    total_count = sum_field(laborers, "number_of_laborers")
    average = total_cost / total_count if total_count > 0 else 0.0
    return LaborerSummary(
        total_labour_cost=total_cost,
        total_laborers=total_count,
        average_price_per_laborer=average,
    )
