"""Seller dashboard statistics over settled orders."""

import calendar
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from ordering.order.order import PaymentType

MONTHS_SHOWN = 6
UNKNOWN_CATEGORY = "Unknown"


@dataclass(frozen=True)
class CategorySales:
    name: str
    units: int
    revenue: int


@dataclass(frozen=True)
class MonthlySales:
    year: int
    month: str
    orders: int
    revenue: int


@dataclass(frozen=True)
class DashboardStatistics:
    total_orders: int = 0
    total_revenue: int = 0
    total_products: int = 0
    total_customers: int = 0
    paid_orders: int = 0
    pending_orders: int = 0
    cod_orders: int = 0
    online_orders: int = 0
    categories: list[CategorySales] = field(default_factory=list)
    monthly: list[MonthlySales] = field(default_factory=list)


def _last_months(today: date, count: int) -> list[tuple[int, int]]:
    months = []
    year, month = today.year, today.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def dashboard_statistics(orders, product_count: int, today: date | None = None) -> DashboardStatistics:
    """Aggregate settled orders into the figures shown on the seller dashboard.

    Category revenue uses the unit price captured on each order line, so a
    later price change does not rewrite past sales. Monthly figures cover the
    current month and the five before it, oldest first, with empty months
    reported as zero.
    """
    orders = list(orders)
    today = today or datetime.now(UTC).date()

    category_units = defaultdict(int)
    category_revenue = defaultdict(int)
    for order in orders:
        for item in order.items:
            name = item.category or UNKNOWN_CATEGORY
            category_units[name] += item.quantity
            category_revenue[name] += item.line_total

    categories = sorted(
        (
            CategorySales(name=name, units=category_units[name], revenue=category_revenue[name])
            for name in category_units
        ),
        key=lambda c: c.revenue,
        reverse=True,
    )

    window = _last_months(today, MONTHS_SHOWN)
    month_orders = dict.fromkeys(window, 0)
    month_revenue = dict.fromkeys(window, 0)
    for order in orders:
        if order.created_at is None:
            continue
        key = (order.created_at.year, order.created_at.month)
        if key in month_orders:
            month_orders[key] += 1
            month_revenue[key] += order.amount

    monthly = [
        MonthlySales(
            year=year,
            month=calendar.month_abbr[month],
            orders=month_orders[(year, month)],
            revenue=month_revenue[(year, month)],
        )
        for year, month in window
    ]

    return DashboardStatistics(
        total_orders=len(orders),
        total_revenue=sum(order.amount for order in orders),
        total_products=product_count,
        total_customers=len({str(order.customer_id) for order in orders}),
        paid_orders=sum(1 for order in orders if order.is_paid),
        pending_orders=sum(1 for order in orders if not order.is_paid),
        cod_orders=sum(1 for order in orders if order.payment_type == PaymentType.COD.value),
        online_orders=sum(1 for order in orders if order.payment_type == PaymentType.ONLINE.value),
        categories=categories,
        monthly=monthly,
    )
