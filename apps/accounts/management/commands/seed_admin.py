"""
Management command to create the initial admin account.

Usage:
    python manage.py seed_admin
    python manage.py seed_admin --email boss@example.com --password s3cret

Running it again is harmless; an existing account is left untouched.
"""

from django.core.management.base import BaseCommand

from apps.accounts.services import ensure_admin_user


class Command(BaseCommand):
    help = 'Create the initial admin account'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            default='admin@minimystery.com',
            help='Admin email (default: admin@minimystery.com)',
        )
        parser.add_argument(
            '--password',
            default='admin123',
            help='Admin password (default: admin123)',
        )
        parser.add_argument(
            '--display-name',
            default='Admin User',
            help='Admin display name',
        )

    def handle(self, *args, **options):
        user, created = ensure_admin_user(
            email=options['email'],
            password=options['password'],
            display_name=options['display_name'],
        )

        if not created:
            self.stdout.write(self.style.WARNING(f'Admin account {user.email} already exists'))
            return

        self.stdout.write(self.style.SUCCESS(f'Created admin user: {user.email}'))
        self.stdout.write(f"  Password: {options['password']}")
        self.stdout.write(self.style.WARNING('  Change this password after first login!'))
