from rest_framework import serializers

from user.serializers import AuthorSerializer
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)

    class Meta:
        model = Review
        fields = ("id", "product", "author", "rating", "title", "comment", "created_at", "updated_at")
        read_only_fields = ("author", "created_at", "updated_at")
