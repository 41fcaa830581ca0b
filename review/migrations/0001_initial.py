import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("product", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1, "Rating must be at least 1"),
                            django.core.validators.MaxValueValidator(5, "Rating must not exceed 5"),
                        ]
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        max_length=30,
                        validators=[
                            django.core.validators.MinLengthValidator(3, "Title must be at least 3 characters"),
                            django.core.validators.MaxLengthValidator(30, "Title must not exceed 30 characters"),
                        ],
                    ),
                ),
                (
                    "comment",
                    models.TextField(
                        max_length=400,
                        validators=[
                            django.core.validators.MinLengthValidator(3, "Comment must be at least 3 characters"),
                            django.core.validators.MaxLengthValidator(400, "Comment must not exceed 400 characters"),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="product.product",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("product", "author"), name="unique_review_per_author"),
                ],
            },
        ),
    ]
