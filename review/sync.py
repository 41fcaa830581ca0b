# review/sync.py
import logging
from collections import namedtuple

from django.db import DatabaseError

from product.models import Product
from .exceptions import ResyncFailedError, ReviewError
from .stats import acompute_stats, compute_stats

logger = logging.getLogger(__name__)

ResyncReport = namedtuple("ResyncReport", ["resynced", "failed"])


class RatingSync:
    """
    Recomputes a product's rating stats and overwrites its cached fields.

    ``products`` is the product store (a manager or queryset of Product).
    Nothing else writes ``avg_rating`` / ``review_count``. Every call is a
    full overwrite, so concurrent or repeated resyncs converge and the last
    write wins.
    """

    def __init__(self, products=None):
        self.products = products if products is not None else Product.objects

    def _target(self, product_id):
        return self.products.filter(pk=product_id)

    def _values(self, stats):
        return {"avg_rating": stats.avg_rating, "review_count": stats.review_count}

    def resync(self, product_id):
        stats = compute_stats(product_id)
        try:
            updated = self._target(product_id).update(**self._values(stats))
        except DatabaseError as exc:
            raise ResyncFailedError(product_id, str(exc)) from exc
        return self._finish(product_id, stats, updated)

    async def aresync(self, product_id):
        stats = await acompute_stats(product_id)
        try:
            updated = await self._target(product_id).aupdate(**self._values(stats))
        except DatabaseError as exc:
            raise ResyncFailedError(product_id, str(exc)) from exc
        return self._finish(product_id, stats, updated)

    def _finish(self, product_id, stats, updated):
        if not updated:
            raise ResyncFailedError(product_id, "product does not exist")
        logger.debug(
            "Resynced product %s: avg_rating=%s review_count=%s",
            product_id, stats.avg_rating, stats.review_count,
        )
        return stats

    def resync_all(self):
        """
        Resync every product. A product that fails is logged and skipped so the
        rest still heal; returns ``ResyncReport(resynced, failed)``.
        """
        resynced, failed = 0, []
        for product_id in list(self.products.values_list("pk", flat=True)):
            try:
                self.resync(product_id)
            except ReviewError:
                logger.exception("Rating resync failed for product %s", product_id)
                failed.append(product_id)
                continue
            resynced += 1
        logger.info("Resynced ratings for %s products, %s failed", resynced, len(failed))
        return ResyncReport(resynced, failed)
