"""Tests for RatingSync, the only writer of a product's rating fields."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from asgiref.sync import async_to_sync
from django.db import OperationalError

from product.models import Product
from review.exceptions import ResyncFailedError
from review.models import Review
from review.sync import RatingSync

pytestmark = pytest.mark.django_db


class TestResync:
    def test_writes_stats_onto_product(self, product, make_review):
        for rating in (5, 3, 4):
            make_review(product, rating=rating)

        stats = RatingSync().resync(product.pk)

        product.refresh_from_db()
        assert stats == (Decimal("4.0"), 3)
        assert product.avg_rating == Decimal("4.0")
        assert product.review_count == 3

    def test_resets_to_zero_without_reviews(self, product):
        Product.objects.filter(pk=product.pk).update(avg_rating=Decimal("3.5"), review_count=2)

        RatingSync().resync(product.pk)

        product.refresh_from_db()
        assert product.avg_rating == 0
        assert product.review_count == 0

    def test_is_idempotent(self, product, make_review):
        make_review(product, rating=2)
        make_review(product, rating=5)
        sync = RatingSync()

        first = sync.resync(product.pk)
        product.refresh_from_db()
        stored_first = (product.avg_rating, product.review_count)

        second = sync.resync(product.pk)
        product.refresh_from_db()

        assert first == second
        assert (product.avg_rating, product.review_count) == stored_first == (Decimal("3.5"), 2)

    def test_overwrites_instead_of_incrementing(self, product, make_review):
        make_review(product, rating=4)
        Product.objects.filter(pk=product.pk).update(avg_rating=Decimal("1.0"), review_count=40)

        RatingSync().resync(product.pk)

        product.refresh_from_db()
        assert (product.avg_rating, product.review_count) == (Decimal("4.0"), 1)

    def test_only_touches_target_product(self, product, make_product, make_review):
        other = make_product()
        make_review(product, rating=5)

        RatingSync().resync(product.pk)

        other.refresh_from_db()
        assert (other.avg_rating, other.review_count) == (0, 0)

    def test_uses_injected_product_store(self, product, make_review):
        make_review(product, rating=3)
        products = MagicMock()
        products.filter.return_value.update.return_value = 1

        RatingSync(products=products).resync(product.pk)

        products.filter.assert_called_once_with(pk=product.pk)
        products.filter.return_value.update.assert_called_once_with(
            avg_rating=Decimal("3.0"), review_count=1
        )


class TestResyncFailures:
    def test_missing_product(self):
        with pytest.raises(ResyncFailedError) as exc:
            RatingSync().resync(424242)
        assert exc.value.product_id == 424242
        assert "does not exist" in str(exc.value)

    def test_write_failure(self, product):
        products = MagicMock()
        products.filter.return_value.update.side_effect = OperationalError("disk I/O error")

        with pytest.raises(ResyncFailedError) as exc:
            RatingSync(products=products).resync(product.pk)

        assert exc.value.product_id == product.pk
        assert isinstance(exc.value.__cause__, OperationalError)


class TestResyncAll:
    def test_heals_every_product(self, make_product, make_review):
        first, second, empty = make_product(), make_product(), make_product()
        make_review(first, rating=1)
        make_review(second, rating=5)
        make_review(second, rating=4)
        Product.objects.filter(pk=empty.pk).update(avg_rating=Decimal("2.0"), review_count=7)

        assert RatingSync().resync_all() == (3, [])

        values = dict(
            (pk, (avg, n)) for pk, avg, n in Product.objects.values_list("pk", "avg_rating", "review_count")
        )
        assert values[first.pk] == (Decimal("1.0"), 1)
        assert values[second.pk] == (Decimal("4.5"), 2)
        assert values[empty.pk] == (0, 0)

    def test_failed_product_does_not_stop_the_rest(self, make_product, make_review, caplog):
        first, middle, last = make_product(), make_product(), make_product()
        for product in (first, middle, last):
            make_review(product, rating=4)
            Product.objects.filter(pk=product.pk).update(avg_rating=Decimal("1.1"), review_count=9)

        sync = RatingSync()
        original = RatingSync.resync

        def resync(product_id):
            if product_id == middle.pk:
                raise ResyncFailedError(product_id, "product does not exist")
            return original(sync, product_id)

        with patch.object(sync, "resync", side_effect=resync):
            report = sync.resync_all()

        assert report.resynced == 2
        assert report.failed == [middle.pk]
        assert f"Rating resync failed for product {middle.pk}" in caplog.text
        for product in (first, last):
            product.refresh_from_db()
            assert (product.avg_rating, product.review_count) == (Decimal("4.0"), 1)
        middle.refresh_from_db()
        assert middle.review_count == 9


class TestAsyncResync:
    def test_writes_stats(self, product, make_review):
        make_review(product, rating=2)
        make_review(product, rating=3)

        stats = async_to_sync(RatingSync().aresync)(product.pk)

        product.refresh_from_db()
        assert stats == (Decimal("2.5"), 2)
        assert product.avg_rating == Decimal("2.5")
        assert Review.objects.filter(product=product).count() == product.review_count

    def test_missing_product(self):
        with pytest.raises(ResyncFailedError):
            async_to_sync(RatingSync().aresync)(515151)
