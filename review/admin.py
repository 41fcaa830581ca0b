# review/admin.py
from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "author", "rating", "title", "created_at")
    list_filter = ("rating", "created_at")
    search_fields = ("product__name", "author__email", "title", "comment")
    readonly_fields = ("created_at", "updated_at")

    def get_readonly_fields(self, request, obj=None):
        # author is fixed once the review exists
        if obj is not None:
            return self.readonly_fields + ("author",)
        return self.readonly_fields
