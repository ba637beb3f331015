import math
from dataclasses import dataclass
from datetime import date, datetime

import pytz
from flask import current_app, request, url_for

from maizebiz.core import aggregator
from maizebiz.store import get_store

# Chart range selector values -> number of days
RANGE_OPTIONS = {
    "7days": 7,
    "30days": 30,
    "90days": 90,
}
DEFAULT_RANGE = "7days"


def get_app_timezone():
    return pytz.timezone(current_app.config.get("APP_TIMEZONE", "Africa/Nairobi"))


def get_local_today() -> date:
    """
    Today's calendar date in the app's timezone.

    Records carry plain calendar dates, so "today" must be the local day and
    not the server's UTC day.
    """
    utc_now = datetime.now(pytz.utc)
    return utc_now.astimezone(get_app_timezone()).date()


def parse_range_param(range_str):
    """
    Turns '7days' / '30days' / '90days' into (key, days).
    Unknown or missing values fall back to the 7-day window.
    """
    if not range_str:
        return DEFAULT_RANGE, RANGE_OPTIONS[DEFAULT_RANGE]
    if range_str not in RANGE_OPTIONS:
        current_app.logger.warning(
            f"Invalid chart range received: {range_str}. Using default."
        )
        return DEFAULT_RANGE, RANGE_OPTIONS[DEFAULT_RANGE]
    return range_str, RANGE_OPTIONS[range_str]


@dataclass
class ListPage:
    """One page of an in-memory list, with the attributes templates expect."""
    items: list
    page: int
    per_page: int
    total: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.per_page)) if self.per_page else 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def prev_num(self):
        return self.page - 1 if self.has_prev else None

    @property
    def next_num(self):
        return self.page + 1 if self.has_next else None


def get_paginated_results(items, endpoint_name, per_page_config_key, **extra_args):
    """
    Handles standard pagination for an already-filtered list of records.

    Args:
        items (list): Records to paginate.
        endpoint_name (str): The view to link to (e.g., 'main_bp.sales').
        per_page_config_key (str): Config key for items per page (e.g., 'SALES_PER_PAGE').
        **extra_args: Additional query parameters to keep in the links (e.g., q='acme').

    Returns:
        tuple: (page_object, next_url, prev_url)
    """
    page = request.args.get("page", 1, type=int)
    per_page = current_app.config.get(per_page_config_key, 10)

    total = len(items)
    pages = max(1, math.ceil(total / per_page))
    page = min(max(page, 1), pages)

    start = (page - 1) * per_page
    page_obj = ListPage(
        items=items[start:start + per_page],
        page=page,
        per_page=per_page,
        total=total,
    )

    def generate_url(page_num):
        if page_num:
            return url_for(endpoint_name, page=page_num, **extra_args)
        return None

    return page_obj, generate_url(page_obj.next_num), generate_url(page_obj.prev_num)


def get_dashboard_data(user_id: int, window_days: int, reference: date = None) -> dict:
    """Stats, chart series and recent records for one user's dashboard."""
    store = get_store()
    reference = reference or get_local_today()

    purchases = store.list("purchases", user_id)
    sales = store.list("sales", user_id)

    return {
        "reference_date": reference,
        "stats": aggregator.summarize(purchases, sales, reference),
        "series": aggregator.daily_series(purchases, sales, window_days, reference),
        "recent_purchases": purchases[:5],
        "recent_sales": sales[:5],
    }
