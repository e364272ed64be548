from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from presence.models import OnlineStatus, RoomPresence
from presence.utils import get_online_threshold


class Command(BaseCommand):
    help = "Delete room presence rows past the retention window and flag stale global statuses offline"

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than",
            type=int,
            default=None,
            help="Retention window in seconds (defaults to PRESENCE_RETENTION_SECONDS)",
        )
        parser.add_argument("--dry-run", action="store_true", help="Print counts only; do not update")

    def handle(self, *args, **options):
        dry_run = options.get("dry_run")
        older_than = options.get("older_than")
        if older_than is None:
            older_than = getattr(settings, "PRESENCE_RETENTION_SECONDS", 24 * 3600)

        window = timedelta(seconds=older_than)
        if window < get_online_threshold():
            raise CommandError("--older-than must not be shorter than the online threshold")

        cutoff = timezone.now() - window
        stale_presence = RoomPresence.objects.filter(last_seen__lt=cutoff)
        stale_status = OnlineStatus.objects.filter(online=True, last_active__lt=cutoff)

        if dry_run:
            presence_count = stale_presence.count()
            status_count = stale_status.count()
        else:
            presence_count, _ = stale_presence.delete()
            status_count = stale_status.update(online=False)

        verb = "would be" if dry_run else "were"
        self.stdout.write(self.style.SUCCESS(f"Room presence rows that {verb} deleted: {presence_count}"))
        self.stdout.write(self.style.SUCCESS(f"Online statuses that {verb} flagged offline: {status_count}"))
