# review/models.py
from django.conf import settings
from django.core.validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
)
from django.db import models

from product.models import Product

User = settings.AUTH_USER_MODEL


class Review(models.Model):
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="reviews")
    # set once on create, never reassigned
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name="reviews")
    rating = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(1, "Rating must be at least 1"),
            MaxValueValidator(5, "Rating must not exceed 5"),
        ]
    )
    title = models.CharField(
        max_length=30,
        validators=[
            MinLengthValidator(3, "Title must be at least 3 characters"),
            MaxLengthValidator(30, "Title must not exceed 30 characters"),
        ],
    )
    comment = models.TextField(
        max_length=400,
        validators=[
            MinLengthValidator(3, "Comment must be at least 3 characters"),
            MaxLengthValidator(400, "Comment must not exceed 400 characters"),
        ],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            # one review per user per product
            models.UniqueConstraint(fields=["product", "author"], name="unique_review_per_author"),
        ]

    def __str__(self):
        return f"Review {self.rating} by {self.author} for {self.product}"

    def clean_fields(self, exclude=None):
        for name in ("title", "comment"):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, value.strip())
        super().clean_fields(exclude=exclude)

    def save(self, *args, **kwargs):
        # The unique constraint is left to the database so a concurrent
        # duplicate surfaces as IntegrityError, see review.services.
        self.full_clean(validate_constraints=False)
        super().save(*args, **kwargs)
