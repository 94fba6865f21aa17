import logging
from datetime import datetime

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Q
from django.utils import timezone

from apps.videomarkup.models import CacheEntry
from apps.videomarkup.services.exceptions import CacheStoreError

logger = logging.getLogger(__name__)


def prefix_for(owner: str) -> str:
    return f"{owner}__"


class CacheStore:
    """Key/value cache rows owned by a module, named `<owner>__<key>`."""

    def __init__(self, owner: str | None = None):
        self.owner = owner or settings.VIDEO_MARKUP_CACHE_OWNER

    def count_by_prefix(self, prefix: str) -> int:
        """Count cache rows whose name starts with `prefix`, expired ones included."""
        try:
            return CacheEntry.objects.filter(name__startswith=prefix).count()
        except DatabaseError as exc:
            logger.exception("Failed to count cache entries for prefix %s", prefix)
            raise CacheStoreError("Unable to read the cache table") from exc

    def clear_for(self, owner: str) -> None:
        """Delete every cache row belonging to `owner`."""
        try:
            deleted, _ = CacheEntry.objects.filter(
                name__startswith=prefix_for(owner)
            ).delete()
        except DatabaseError as exc:
            logger.exception("Failed to clear cache for %s", owner)
            raise CacheStoreError(f"Unable to clear the cache for {owner}") from exc
        logger.info("Cleared %d cache entries for %s", deleted, owner)

    def count(self) -> int:
        return self.count_by_prefix(prefix_for(self.owner))

    def clear(self) -> None:
        self.clear_for(self.owner)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the cached data for `key` unless it is missing or expired."""
        entry = (
            CacheEntry.objects.filter(name=prefix_for(self.owner) + key)
            .filter(Q(expires__isnull=True) | Q(expires__gt=timezone.now()))
            .values_list("data", flat=True)
            .first()
        )
        return default if entry is None else entry

    def set(self, key: str, data: str, expires: datetime | None = None) -> None:
        CacheEntry.objects.update_or_create(
            name=prefix_for(self.owner) + key,
            defaults={"data": data, "expires": expires},
        )
