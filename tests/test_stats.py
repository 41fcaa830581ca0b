"""Tests for rating statistics computed from a product's reviews."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from asgiref.sync import async_to_sync
from django.db import OperationalError

from review.exceptions import StoreUnavailableError
from review.models import Review
from review.stats import ProductStats, acompute_stats, compute_stats

pytestmark = pytest.mark.django_db


class TestComputeStats:
    def test_no_reviews_gives_zero(self, product):
        assert compute_stats(product.pk) == ProductStats(Decimal("0.0"), 0)

    def test_unknown_product_gives_zero(self):
        assert compute_stats(987654) == (0, 0)

    def test_single_review(self, product, make_review):
        make_review(product, rating=5)
        assert compute_stats(product.pk) == (Decimal("5.0"), 1)

    def test_mean_and_count(self, product, make_review):
        for rating in (5, 3, 4):
            make_review(product, rating=rating)
        stats = compute_stats(product.pk)
        assert stats.avg_rating == Decimal("4.0")
        assert stats.review_count == 3

    def test_rounds_to_one_decimal(self, product, make_review):
        for rating in (5, 4, 4):
            make_review(product, rating=rating)
        # 13 / 3 = 4.333...
        assert compute_stats(product.pk).avg_rating == Decimal("4.3")

    def test_rounds_half_up(self, product, make_review):
        for rating in (4, 4, 5, 4):
            make_review(product, rating=rating)
        # 17 / 4 = 4.25
        assert compute_stats(product.pk).avg_rating == Decimal("4.3")

    def test_ignores_other_products(self, product, make_product, make_review):
        other = make_product()
        make_review(product, rating=2)
        make_review(other, rating=5)
        make_review(other, rating=5)
        assert compute_stats(product.pk) == (Decimal("2.0"), 1)

    def test_is_a_pure_read(self, product, make_review):
        make_review(product, rating=1)
        compute_stats(product.pk)
        product.refresh_from_db()
        assert product.avg_rating == 0
        assert product.review_count == 0


class TestStoreFailures:
    def test_read_failure_raises_store_unavailable(self, product):
        with patch.object(Review, "objects") as objects:
            objects.filter.return_value.aggregate.side_effect = OperationalError("database is locked")
            with pytest.raises(StoreUnavailableError) as exc:
                compute_stats(product.pk)
        assert "database is locked" in str(exc.value)
        assert isinstance(exc.value.__cause__, OperationalError)


class TestAsyncComputeStats:
    def test_matches_sync_result(self, product, make_review):
        for rating in (5, 3):
            make_review(product, rating=rating)
        assert async_to_sync(acompute_stats)(product.pk) == compute_stats(product.pk)

    def test_empty(self, product):
        assert async_to_sync(acompute_stats)(product.pk) == (Decimal("0.0"), 0)
