"""
Collection metrics calculation.

Pure functions turning the raw denomination counts of a collection into
business metrics. Nothing here touches the database or the clock, except
``get_current_week_number`` which only reads the clock when no date is
passed in.

All amounts are in baht. The float beside each machine is expected to hold
exactly ``EXPECTED_EXCHANGE_TOTAL``; see ``is_exchange_balanced`` for the
tolerance.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, TypedDict

from django.utils import timezone

from apps.vending.constants import (
    POSTCARD_PRICE,
    COINS_PER_POSTCARD,
    MACHINE_COIN_VALUE,
    EXPECTED_EXCHANGE_TOTAL,
    EXCHANGE_DENOMINATIONS,
)


class CollectionCalculations(TypedDict):
    machine_total: int
    exchange_total: int
    postcards_sold: int
    revenue: int
    cost: Decimal
    profit: Decimal
    exchange_balanced: bool


def calculate_machine_total(machine_coins_10baht: int) -> int:
    """Gross value of the 10-baht coins taken out of the machine."""
    return machine_coins_10baht * MACHINE_COIN_VALUE


def calculate_exchange_total(collection) -> int:
    """Total value of the exchange float across all nine denominations."""
    return sum(
        getattr(collection, field) * face_value
        for field, face_value in EXCHANGE_DENOMINATIONS
    )


def calculate_postcards_sold(machine_coins_10baht: int) -> int:
    """Postcards dispensed; a partial set of coins never counts as a sale."""
    return machine_coins_10baht // COINS_PER_POSTCARD


def is_exchange_balanced(exchange_total) -> bool:
    """
    True when the float sits in the window [expected - 1, expected + 1).

    Sub-baht noise above the expected total is tolerated; a float two baht
    short or one baht over is not. With the 12000 baht float: 11999, 12000
    and 12000.9999 are balanced, 11998 and 12001 are not.
    """
    difference = exchange_total - EXPECTED_EXCHANGE_TOTAL
    return -1 <= difference < 1


def calculate_collection_metrics(collection) -> CollectionCalculations:
    """
    Compute the derived metrics of a collection.

    Args:
        collection: A ``Collection`` (saved or not) or any object exposing
            the same count attributes and a ``Decimal`` ``cost_per_postcard``.

    Returns:
        CollectionCalculations dict. Calling this twice on the same record
        gives equal results.
    """
    machine_coins = collection.machine_coins_10baht

    machine_total = calculate_machine_total(machine_coins)
    exchange_total = calculate_exchange_total(collection)
    postcards_sold = calculate_postcards_sold(machine_coins)
    revenue = postcards_sold * POSTCARD_PRICE
    cost = postcards_sold * collection.cost_per_postcard
    profit = revenue - cost

    return {
        'machine_total': machine_total,
        'exchange_total': exchange_total,
        'postcards_sold': postcards_sold,
        'revenue': revenue,
        'cost': cost,
        'profit': profit,
        'exchange_balanced': is_exchange_balanced(exchange_total),
    }


def get_current_week_number(today: Optional[date] = None) -> int:
    """
    Week of the year used to prefill the week field in forms.

    Week 1 starts on January 1st and every following week starts seven days
    later, regardless of weekday.

    Args:
        today: Reference date. Defaults to the local date of TIME_ZONE.
    """
    if today is None:
        today = timezone.localdate()
    return (today - date(today.year, 1, 1)).days // 7 + 1
