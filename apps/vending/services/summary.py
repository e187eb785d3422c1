"""Summary statistics over collections."""

from decimal import Decimal

from .calculations import calculate_collection_metrics


def summarize_collections(collections) -> dict:
    """
    Aggregate metrics over a set of collections.

    Metrics are not stored, so each record goes through the calculator.

    Args:
        collections: Iterable (or QuerySet) of Collection

    Returns:
        Dict with count, postcards_sold, machine_total, revenue, cost,
        profit and unbalanced_count (collections whose float is off)
    """
    summary = {
        'count': 0,
        'postcards_sold': 0,
        'machine_total': 0,
        'revenue': 0,
        'cost': Decimal('0'),
        'profit': Decimal('0'),
        'unbalanced_count': 0,
    }

    for collection in collections:
        metrics = calculate_collection_metrics(collection)
        summary['count'] += 1
        summary['postcards_sold'] += metrics['postcards_sold']
        summary['machine_total'] += metrics['machine_total']
        summary['revenue'] += metrics['revenue']
        summary['cost'] += metrics['cost']
        summary['profit'] += metrics['profit']
        if not metrics['exchange_balanced']:
            summary['unbalanced_count'] += 1

    return summary
