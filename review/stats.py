# review/stats.py
"""
Rating statistics for a product, computed from its current reviews.

The result is always a full recount (never an incremental delta), so writing
it back onto the product is idempotent.
"""
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from django.db import DatabaseError
from django.db.models import Count, Sum

from .exceptions import StoreUnavailableError
from .models import Review

ProductStats = namedtuple("ProductStats", ["avg_rating", "review_count"])

EMPTY_STATS = ProductStats(Decimal("0.0"), 0)
ONE_PLACE = Decimal("0.1")


def _stats_queryset(product_id):
    return Review.objects.filter(product_id=product_id)


def _aggregates():
    return {"rating_total": Sum("rating"), "review_count": Count("id")}


def _to_stats(result):
    count = result["review_count"] or 0
    if not count:
        return EMPTY_STATS
    mean = Decimal(result["rating_total"]) / Decimal(count)
    return ProductStats(mean.quantize(ONE_PLACE, rounding=ROUND_HALF_UP), count)


def compute_stats(product_id):
    """
    Return ``ProductStats(avg_rating, review_count)`` for ``product_id``.

    ``avg_rating`` is the mean rating rounded half-up to one decimal place,
    ``Decimal("0.0")`` when the product has no reviews.
    """
    try:
        result = _stats_queryset(product_id).aggregate(**_aggregates())
    except DatabaseError as exc:
        raise StoreUnavailableError(f"Could not read reviews of product {product_id}: {exc}") from exc
    return _to_stats(result)


async def acompute_stats(product_id):
    try:
        result = await _stats_queryset(product_id).aaggregate(**_aggregates())
    except DatabaseError as exc:
        raise StoreUnavailableError(f"Could not read reviews of product {product_id}: {exc}") from exc
    return _to_stats(result)
