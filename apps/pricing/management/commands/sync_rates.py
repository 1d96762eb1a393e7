from django.core.management.base import BaseCommand, CommandError

from apps.pricing.application.tasks import sync_exchange_rates


class Command(BaseCommand):
    help = 'Refresh the exchange rate table from the active rate providers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--sync',
            action='store_true',
            help='Execute synchronously instead of using Celery task queue'
        )

    def handle(self, **options):
        if options['sync']:
            self.stdout.write('Running in synchronous mode...')
            result = sync_exchange_rates()

            if not result['success']:
                raise CommandError(f"Failed: {result.get('message') or 'Unknown error'}")

            self.stdout.write(
                self.style.SUCCESS(
                    f"Successfully synced {result['rates_synced']} rates"
                )
            )
            if result.get('errors'):
                self.stdout.write(
                    self.style.WARNING(
                        f"Errors: {len(result['errors'])}"
                    )
                )
        else:
            self.stdout.write('Dispatching Celery task...')
            task = sync_exchange_rates.delay()

            self.stdout.write(
                self.style.SUCCESS(
                    f'Task dispatched with ID: {task.id}'
                )
            )
            self.stdout.write(
                'Use "celery -A core inspect active" to check task status'
            )
