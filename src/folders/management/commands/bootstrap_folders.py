import typing as t

from django.core.management.base import BaseCommand

from folders.service import bootstrap_folder_tree


class Command(BaseCommand):
    help = "Create the questionnaire category folder tree."

    def handle(self, *args: t.Any, **kwargs: t.Any) -> None:
        folders = bootstrap_folder_tree()
        self.stdout.write(self.style.SUCCESS(f"Folder tree ready with {len(folders)} categories."))
