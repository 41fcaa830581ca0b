# review/exceptions.py
"""
Errors raised by the review services and the rating resync.

Field validation errors are Django's own ``django.core.exceptions.ValidationError``.
"""


class ReviewError(Exception):
    pass


class DuplicateReviewError(ReviewError):
    """The author already has a review for this product."""

    def __init__(self, product_id, author_id):
        self.product_id = product_id
        self.author_id = author_id
        super().__init__(
            f"User {author_id} has already reviewed product {product_id}; update that review instead."
        )


class ReviewNotFoundError(ReviewError):
    def __init__(self, review_id):
        self.review_id = review_id
        super().__init__(f"Review {review_id} does not exist.")


class ResyncFailedError(ReviewError):
    """The product aggregate could not be written. The review change itself stands."""

    def __init__(self, product_id, reason="rating resync failed"):
        self.product_id = product_id
        super().__init__(f"Could not resync ratings for product {product_id}: {reason}")


class StoreUnavailableError(ReviewError):
    pass
