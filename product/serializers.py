from rest_framework import serializers
from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    avg_rating = serializers.DecimalField(max_digits=3, decimal_places=1, read_only=True)
    review_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = (
            "id", "name", "slug", "price",
            "avg_rating", "review_count", "created_at", "updated_at",
        )
        read_only_fields = ("slug", "avg_rating", "review_count", "created_at", "updated_at")
