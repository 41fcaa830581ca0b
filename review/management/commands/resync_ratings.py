from django.core.management.base import BaseCommand, CommandError

from review.exceptions import ReviewError
from review.sync import RatingSync


class Command(BaseCommand):
    help = "Recompute avg_rating and review_count of products from their reviews."

    def add_arguments(self, parser):
        parser.add_argument(
            "--product",
            type=int,
            action="append",
            dest="products",
            help="Product id to resync. Repeat for several; omit to resync every product.",
        )

    def handle(self, *args, **options):
        sync = RatingSync()
        try:
            if not options["products"]:
                report = sync.resync_all()
                self.stdout.write(self.style.SUCCESS(f"Resynced {report.resynced} products"))
                if report.failed:
                    failed = ", ".join(str(pk) for pk in report.failed)
                    raise CommandError(f"Could not resync products: {failed}")
                return
            for product_id in options["products"]:
                stats = sync.resync(product_id)
                self.stdout.write(
                    f"Product {product_id}: avg_rating={stats.avg_rating} review_count={stats.review_count}"
                )
        except ReviewError as exc:
            raise CommandError(str(exc)) from exc
