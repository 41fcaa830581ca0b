# review/services.py
"""
Review CRUD used by the API, the admin and anything else that writes reviews.

Every successful create/update/delete schedules a resync of the product's
rating stats once the write commits (see review.signals). A failed resync
never undoes the review change.
"""
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from product.models import Product
from .exceptions import DuplicateReviewError, ReviewNotFoundError, StoreUnavailableError
from .models import Review

EDITABLE_FIELDS = ("product", "rating", "title", "comment")


def _save(review):
    try:
        with transaction.atomic():
            review.save()
    except IntegrityError as exc:
        taken = Review.objects.filter(
            product_id=review.product_id, author_id=review.author_id
        ).exclude(pk=review.pk)
        if taken.exists():
            raise DuplicateReviewError(review.product_id, review.author_id) from exc
        # product or author removed after full_clean checked them
        raise ValidationError("The reviewed product or its author no longer exists.") from exc
    except DatabaseError as exc:
        raise StoreUnavailableError(f"Could not save review: {exc}") from exc
    return review


def get_review(review_id):
    try:
        return Review.objects.select_related("product", "author").get(pk=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError(review_id)
    except DatabaseError as exc:
        raise StoreUnavailableError(f"Could not load review {review_id}: {exc}") from exc


def get_product_reviews(product_id):
    return Review.objects.filter(product_id=product_id).select_related("author").order_by("-created_at")


def create_review(*, author, product, rating, title, comment):
    review = Review(author=author, product=product, rating=rating, title=title, comment=comment)
    return _save(review)


def update_review(review_id, **fields):
    if "author" in fields or "author_id" in fields:
        raise ValidationError({"author": "The author of a review cannot be changed."})
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError({name: "This field cannot be updated." for name in sorted(unknown)})

    review = get_review(review_id)
    for name, value in fields.items():
        # a plain id is accepted for product; full_clean checks it exists
        if name == "product" and not isinstance(value, Product):
            name = "product_id"
        setattr(review, name, value)
    return _save(review)


def delete_review(review_id):
    """Delete a review and return it. Its ``product_id`` stays readable."""
    try:
        with transaction.atomic():
            review = Review.objects.select_for_update().get(pk=review_id)
            pk = review.pk
            review.delete()
    except Review.DoesNotExist:
        raise ReviewNotFoundError(review_id)
    except DatabaseError as exc:
        raise StoreUnavailableError(f"Could not delete review {review_id}: {exc}") from exc
    review.pk = pk
    return review
