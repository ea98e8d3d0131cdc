#!/usr/bin/env python3
"""
Synthetic Test Data Generators

Generates completely synthetic daily store records for unit and integration
tests. Product names, amounts and counts are all made up.

Note: Uses standard random module for test data generation (not cryptographic use).
"""

import random
from datetime import date, timedelta
from typing import Any

from storefin.metrics.models import DailyRecord

SYNTHETIC_PRODUCTS = [
    "Test Sneaker",
    "Sample Backpack",
    "Mock Water Bottle",
    "Demo Hoodie",
    "Example Cap",
]


def card_only_day(
    day: date,
    revenue: float,
    orders: int,
    cost_ratio: float = 0.30,
    marketing: float = 100.0,
    sessions: float = 1000.0,
    product: str = "Test Sneaker",
) -> DailyRecord:
    """One day where every sale was an approved card payment."""
    return DailyRecord.from_dict(
        {
            "date": day.isoformat(),
            "sessions": sessions,
            "revenue": revenue,
            "marketing_spend": marketing,
            "new_customers": orders,
            "products": [{"name": product, "revenue": revenue, "cost": revenue * cost_ratio, "orders": orders}],
            "payment_breakdown": {"card": {"approved": {"value": revenue, "count": orders}}},
        }
    )


def generate_daily_record_dict(day: date, rng: random.Random) -> dict[str, Any]:
    """
    Generate one synthetic daily record in ingestion (camelCase) format.

    Product revenue adds up to the day's total revenue. Some of it is still
    pending on boleto/pix, the rest is approved across the three rails.
    """
    products = []
    for name in rng.sample(SYNTHETIC_PRODUCTS, k=rng.randint(1, 3)):
        orders = rng.randint(1, 8)
        unit_price = rng.choice([89.0, 129.0, 199.0, 249.0])
        products.append(
            {
                "name": name,
                "revenue": unit_price * orders,
                "cost": unit_price * orders * rng.uniform(0.25, 0.40),
                "orders": orders,
            }
        )

    revenue = sum(p["revenue"] for p in products)
    total_orders = sum(p["orders"] for p in products)
    pending_share = rng.choice([0.0, 0.05, 0.10])
    approved = revenue * (1 - pending_share)

    return {
        "date": day.isoformat(),
        "sessions": rng.randint(800, 2500),
        "revenue": revenue,
        "marketingSpend": round(revenue * rng.uniform(0.15, 0.30), 2),
        "newCustomers": rng.randint(0, total_orders),
        "products": products,
        "paymentBreakdown": {
            "card": {
                "approved": {"value": approved * 0.6, "count": max(1, round(total_orders * 0.6))},
                "in_analysis": {"value": 0.0, "count": rng.randint(0, 1)},
                "other": {"value": 0.0, "count": rng.randint(0, 2)},
            },
            "boleto": {
                "approved": {"value": approved * 0.1, "count": round(total_orders * 0.1)},
                "pending": {"value": revenue * pending_share / 2, "count": 1 if pending_share else 0},
            },
            "pix": {
                "approved": {"value": approved * 0.3, "count": round(total_orders * 0.3)},
                "pending": {"value": revenue * pending_share / 2, "count": 1 if pending_share else 0},
                "cancelled": {"value": 0.0, "count": rng.randint(0, 1)},
            },
        },
    }


def generate_daily_records(start: date, days: int, seed: int = 42) -> list[DailyRecord]:
    """Generate ``days`` consecutive synthetic records starting at ``start``."""
    rng = random.Random(seed)
    return [
        DailyRecord.from_dict(generate_daily_record_dict(start + timedelta(days=i), rng)) for i in range(days)
    ]
