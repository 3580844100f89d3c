"""
Bootstrap the Super Admin Account

Creates the system super admin when none exists yet. Intended for first
deployment; the same rule as POST /auth/super-admin/ applies.

Usage:
    python manage.py create_super_admin --email admin@example.com --password 'Str0ngPass!' --name "Admin"

Password may also be supplied through the HRM_SUPER_ADMIN_PASSWORD environment
variable.
"""
import os

from django.core.management.base import BaseCommand, CommandError

from core.base.exceptions import ConflictError
from core.user_accounts.dtos import SuperAdminCreateDTO
from core.user_accounts.services import AuthService


class Command(BaseCommand):
    help = 'Create the super admin account if none exists'

    def add_arguments(self, parser):
        parser.add_argument('--email', required=True)
        parser.add_argument('--password', default=os.environ.get('HRM_SUPER_ADMIN_PASSWORD'))
        parser.add_argument('--name', default='')
        parser.add_argument('--phone', default='')

    def handle(self, *args, **options):
        password = options['password']
        if not password or len(password) < 8:
            raise CommandError('A password of at least 8 characters is required')

        dto = SuperAdminCreateDTO(
            email=options['email'].lower(),
            password=password,
            name=options['name'],
            phone_number=options['phone'],
        )

        try:
            user = AuthService.create_super_admin(dto)
        except ConflictError as e:
            raise CommandError(str(e.detail))

        self.stdout.write(self.style.SUCCESS(f"✓ Super admin created: {user.email}"))
