from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from services.pricing import purge_expired_quotes


class Command(BaseCommand):
    help = "Delete fare quotes that have expired."

    def add_arguments(self, parser):
        parser.add_argument(
            "--grace-minutes",
            type=int,
            default=0,
            help="Keep quotes that expired less than this many minutes ago (default: 0).",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show what would be deleted without actually deleting.",
        )

    def handle(self, *args, **options):
        cutoff = timezone.now() - timedelta(minutes=options["grace_minutes"])
        dry_run = options["dry_run"]

        count = purge_expired_quotes(older_than=cutoff, dry_run=dry_run)

        if dry_run:
            self.stdout.write(self.style.WARNING(f"DRY RUN: Would delete {count} expired fare quote(s)."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Deleted {count} expired fare quote(s)."))
