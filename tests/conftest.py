from decimal import Decimal
from itertools import count

import pytest
from rest_framework.test import APIClient

from product.models import Product
from review.models import Review
from user.models import User

_seq = count(1)


@pytest.fixture
def make_user(db):
    def _make_user(**overrides):
        n = next(_seq)
        defaults = {"email": f"user{n}@example.com", "name": f"User {n}", "password": "s3cret-pass"}
        defaults.update(overrides)
        return User.objects.create_user(**defaults)

    return _make_user


@pytest.fixture
def make_product(db):
    def _make_product(**overrides):
        defaults = {"name": f"Product {next(_seq)}", "price": Decimal("19.99")}
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make_product


@pytest.fixture
def product(make_product):
    return make_product(name="Linen Shirt")


@pytest.fixture
def author(make_user):
    return make_user(name="Asha")


@pytest.fixture
def make_review(make_user):
    """Creates a review straight through the model, one new author per call."""

    def _make_review(product, **overrides):
        defaults = {
            "rating": 4,
            "title": "Nice fit",
            "comment": "Fits as expected and the fabric feels good.",
        }
        defaults.update(overrides)
        if "author" not in defaults:
            defaults["author"] = make_user()
        return Review.objects.create(product=product, **defaults)

    return _make_review


@pytest.fixture
def api_client():
    return APIClient()
