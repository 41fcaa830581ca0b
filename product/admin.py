# product/admin.py
from django.contrib import admin, messages

from review.exceptions import ReviewError
from review.sync import RatingSync
from .models import Product


@admin.action(description="Resync ratings from reviews")
def resync_ratings(modeladmin, request, queryset):
    sync = RatingSync()
    done = 0
    for product in queryset:
        try:
            sync.resync(product.pk)
        except ReviewError as exc:
            modeladmin.message_user(request, str(exc), level=messages.ERROR)
            continue
        done += 1
    modeladmin.message_user(request, f"Resynced ratings for {done} product(s).")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "avg_rating", "review_count", "created_at")
    search_fields = ("name",)
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("avg_rating", "review_count")
    actions = [resync_ratings]
