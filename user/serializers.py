# user/serializers.py
from rest_framework import serializers
from .models import User


class AuthorSerializer(serializers.ModelSerializer):
    # public shape of a review author, never exposes the email
    class Meta:
        model = User
        fields = ("id", "name")
        read_only_fields = fields
