"""
Management command to create sample collections for trying out the API.

Usage:
    python manage.py create_sample_collections
    python manage.py create_sample_collections --weeks 8 --clear

This creates, for each of the last N weeks:
- Two rounds per machine location
- Mostly balanced exchange floats, with the occasional short float
"""

from datetime import timedelta
from decimal import Decimal
import random

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.vending.models import Collection
from apps.vending.services import get_current_week_number

LOCATIONS = [
    'Central World - Level 2',
    'Siam Paragon - Main Entrance',
    'Terminal 21 - Food Court',
    'MBK Center - Floor 3',
]

# A float of exactly 12000 baht
BALANCED_FLOAT = {
    'exchange_coins_1baht': 100,
    'exchange_coins_2baht': 50,
    'exchange_coins_5baht': 40,
    'exchange_coins_10baht': 50,
    'exchange_note_20baht': 20,
    'exchange_note_50baht': 10,
    'exchange_note_100baht': 12,
    'exchange_note_500baht': 6,
    'exchange_note_1000baht': 6,
}


class Command(BaseCommand):
    help = 'Create sample collections for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--weeks',
            type=int,
            default=4,
            help='Number of past weeks to fill (default: 4)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete all collections before creating new ones',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing collections...')
            Collection.objects.all().delete()

        collector = self.get_collector()

        self.stdout.write('Creating sample collections...')
        created = 0
        today = timezone.localdate()

        for weeks_ago in range(options['weeks']):
            collection_date = today - timedelta(weeks=weeks_ago)
            week_number = get_current_week_number(collection_date)

            for location in LOCATIONS:
                for round_number in (1, 2):
                    _, was_created = Collection.objects.get_or_create(
                        collection_date=collection_date,
                        round_number=round_number,
                        machine_location=location,
                        defaults=self.collection_values(week_number, collector),
                    )
                    created += int(was_created)

        self.stdout.write(self.style.SUCCESS(f'Created {created} collection(s)'))

    def get_collector(self):
        collector, was_created = User.objects.get_or_create(
            email='collector@example.com',
            defaults={'display_name': 'Sample Collector'},
        )
        if was_created:
            collector.set_password('password123')
            collector.save()
            self.stdout.write('  Collector account: collector@example.com / password123')
        return collector

    def collection_values(self, week_number, collector):
        exchange = dict(BALANCED_FLOAT)
        if random.random() < 0.2:
            # Short by a few 20 baht notes
            exchange['exchange_note_20baht'] -= random.randint(1, 5)

        return {
            'week_number': week_number,
            'machine_coins_10baht': random.randint(20, 150) * 4,
            'postcards_remaining': random.randint(10, 200),
            'cost_per_postcard': Decimal('13.766'),
            'created_by': collector,
            **exchange,
        }
