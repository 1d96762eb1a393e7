from django.core.management.base import BaseCommand

from apps.pricing.application.tasks import resync_override_currencies


class Command(BaseCommand):
    help = 'Re-derive currency and symbol of every price override from its country'

    def handle(self, **options):
        self.stdout.write('Updating existing currency prices...')
        result = resync_override_currencies()
        self.stdout.write(
            self.style.SUCCESS(
                f"Updated {result['rows_updated']} currency price records"
            )
        )
