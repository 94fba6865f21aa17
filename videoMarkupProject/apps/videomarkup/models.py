from django.db import models

from apps.common.models import TimeStampedModel


class ModuleSetting(TimeStampedModel):
    """A single persisted configuration value for a module."""

    module = models.CharField(max_length=128, db_index=True)
    key = models.CharField(max_length=128)
    value = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["module", "key"]
        constraints = [
            models.UniqueConstraint(
                fields=["module", "key"],
                name="uniq_module_setting_module_key",
            )
        ]

    def __str__(self):
        return f"{self.module}.{self.key}"


class CacheEntry(TimeStampedModel):
    """Key/value cache row; `name` is prefixed with `<owner>__`."""

    name = models.CharField(max_length=250, unique=True)
    data = models.TextField(blank=True, default="")
    expires = models.DateTimeField(null=True, blank=True, db_index=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "cache entries"

    def __str__(self):
        """Return the cache key for admin displays."""

        return self.name
