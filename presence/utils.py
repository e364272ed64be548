from datetime import timedelta

from django.conf import settings
from django.utils import timezone


def get_online_threshold():
    """The one freshness window shared by room and global presence."""
    return timedelta(seconds=getattr(settings, "PRESENCE_ONLINE_THRESHOLD_SECONDS", 30))


def online_cutoff(now=None):
    """Oldest timestamp that still counts as online at ``now`` (inclusive)."""
    return (now or timezone.now()) - get_online_threshold()


def is_online(timestamp, now=None):
    if timestamp is None:
        return False
    return timestamp >= online_cutoff(now)
