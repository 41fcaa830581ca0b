# review/signals.py
import logging
from functools import partial

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import Signal, receiver

from product.models import Product
from .exceptions import ReviewError
from .models import Review
from .sync import RatingSync

logger = logging.getLogger(__name__)

# sent with product_id and error when a scheduled resync does not complete
resync_failed = Signal()

rating_sync = RatingSync(Product.objects)


def resync_enabled():
    return getattr(settings, "RATINGS", {}).get("RESYNC_ON_COMMIT", True)


def run_resync(product_id):
    try:
        rating_sync.resync(product_id)
    except ReviewError as exc:
        # the review change is already committed; the aggregate stays stale
        # until the next resync of this product
        logger.exception("Rating resync failed for product %s", product_id)
        resync_failed.send(sender=Review, product_id=product_id, error=exc)


def schedule_resync(product_id, using=None):
    if product_id is None:
        logger.warning("Skipping rating resync for a review without a product")
        return
    if not resync_enabled():
        return
    transaction.on_commit(partial(run_resync, product_id), using=using)


def _deleted_with_product(origin):
    model = origin.model if isinstance(origin, QuerySet) else type(origin)
    return issubclass(model, Product)


@receiver(pre_save, sender=Review)
def review_pre_save(sender, instance, raw=False, **kwargs):
    instance._previous_product_id = None
    if raw or instance.pk is None:
        return
    instance._previous_product_id = (
        Review.objects.filter(pk=instance.pk).values_list("product_id", flat=True).first()
    )


@receiver(post_save, sender=Review)
def review_post_save(sender, instance, created, raw=False, using=None, **kwargs):
    if raw:
        return
    schedule_resync(instance.product_id, using=using)

    # a review moved to another product leaves the old product's stats behind
    previous = getattr(instance, "_previous_product_id", None)
    if previous is not None and previous != instance.product_id:
        schedule_resync(previous, using=using)


@receiver(post_delete, sender=Review)
def review_post_delete(sender, instance, using=None, origin=None, **kwargs):
    # product is going away with its reviews, nothing to resync
    if origin is not None and _deleted_with_product(origin):
        return
    schedule_resync(instance.product_id, using=using)
