"""
Management command to create or reset an administrator account.

Usage:
    python manage.py create_admin --username Admin --password <password>

If the account exists its password is reset and it is re-activated.
"""

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.services import upsert_admin


class Command(BaseCommand):
    help = 'Create an administrator account, or reset its password if it exists'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='Admin', help='Administrator username')
        parser.add_argument('--password', required=True, help='Administrator password')

    def handle(self, *args, **options):
        username = options['username'].strip()
        password = options['password']

        if not username:
            raise CommandError('Username must not be empty')
        if not password:
            raise CommandError('Password must not be empty')

        user, created = upsert_admin(username=username, password=password)

        if created:
            self.stdout.write(self.style.SUCCESS(f'Created administrator "{user.username}"'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Updated password for administrator "{user.username}"'))
