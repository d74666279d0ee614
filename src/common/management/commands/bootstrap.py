"""Bootstrap the application: migrate, create a superuser and seed the folder tree."""

import typing as t

from decouple import config
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Bootstrap the application by creating a superuser and the questionnaire folder tree."

    def handle(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Migrate, create the default superuser if missing and seed the category folders."""
        call_command("migrate")
        User = get_user_model()
        default_username, default_password, default_email = "admin", "password", "admin@example.com"
        username = config("DEFAULT_SUPERUSER_USERNAME", default=default_username)
        password = config("DEFAULT_SUPERUSER_PASSWORD", default=default_password)
        email = config("DEFAULT_SUPERUSER_EMAIL", default=default_email)

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f"Superuser '{username}' already exists."))
        else:
            User.objects.create_superuser(
                username=username, password=password, email=email, role="super_administrator"
            )
            self.stdout.write(self.style.SUCCESS(f"Superuser '{username}' created successfully."))

            if password == default_password:
                self.stdout.write(
                    self.style.WARNING("The default password is being used. Please change it immediately.")
                )

        call_command("bootstrap_folders")
