from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from users.models import User


class Command(BaseCommand):
    help = 'Creates (or promotes) a portal admin account'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('--password', help='Defaults to DEFAULT_USER_PASSWORD')

    def handle(self, *args, **options):
        username = options['username'].strip()
        if not username:
            raise CommandError('Username is required')

        user, created = User.objects.get_or_create(username=username)
        user.role = User.Role.ADMIN
        user.is_staff = True

        if created:
            user.set_password(options.get('password') or settings.DEFAULT_USER_PASSWORD)
            user.save()
            self.stdout.write(self.style.SUCCESS(f'Created admin: {username}'))
        else:
            if options.get('password'):
                user.set_password(options['password'])
            user.save()
            self.stdout.write(self.style.WARNING(f'Updated admin: {username}'))
