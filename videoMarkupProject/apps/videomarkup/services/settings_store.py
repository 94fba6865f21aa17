import logging
from typing import Any, Mapping

from django.conf import settings
from django.db import DatabaseError, transaction

from apps.videomarkup.models import ModuleSetting
from apps.videomarkup.services.exceptions import SettingsStoreError
from apps.videomarkup.services.fields import Toggle
from utils.utils import strip_namespace

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, Any] = {
    "emptyValue": "",
    "maxWidth": 1280,
    "maxHeight": 720,
}
INTEGER_SETTINGS = frozenset({"maxWidth", "maxHeight"})


def get_defaults() -> dict[str, Any]:
    """Return a fresh copy of the default module settings."""
    return dict(DEFAULTS)


class ModuleSettingsStore:
    """Reads and writes the persisted settings of one module.

    A value of None (or "") means unset: the row is removed so the default,
    if any, applies again. "0" is a real value and is stored as-is.
    """

    def __init__(self, module: str | None = None):
        self.module = module or settings.VIDEO_MARKUP_MODULE

    def _queryset(self):
        return ModuleSetting.objects.filter(module=self.module)

    def load(self) -> dict[str, str]:
        """Return the raw stored values, without defaults."""
        return dict(self._queryset().values_list("key", "value"))

    def values(self) -> dict[str, Any]:
        """Return the defaults overlaid with stored values."""
        data = get_defaults()
        for key, value in self.load().items():
            if key in INTEGER_SETTINGS:
                try:
                    value = int(value)
                except ValueError:
                    logger.warning(
                        "Ignoring non-integer %s.%s=%r", self.module, key, value
                    )
                    continue
            data[key] = value
        return data

    def toggle(self, name: str) -> Toggle:
        """Return the three-state value of a binary option such as `yt_autoplay`."""
        return Toggle(self.load().get(name, Toggle.UNSET.value))

    def provider_params(self, namespace: str) -> dict[str, str]:
        """Return the set options of a provider keyed without their namespace."""
        prefix = f"{namespace}_"
        return {
            strip_namespace(key, namespace): value
            for key, value in self.load().items()
            if key.startswith(prefix) and value != ""
        }

    def save(self, values: Mapping[str, Any]) -> list[str]:
        """Persist `values` and return the keys whose stored value changed."""
        changed: list[str] = []
        try:
            with transaction.atomic():
                stored = self.load()
                for key, value in values.items():
                    if isinstance(value, Toggle):
                        value = value.value
                    if value is None or value == "":
                        if key in stored:
                            self._queryset().filter(key=key).delete()
                            changed.append(key)
                        continue
                    value = str(value)
                    if stored.get(key) == value:
                        continue
                    ModuleSetting.objects.update_or_create(
                        module=self.module, key=key, defaults={"value": value}
                    )
                    changed.append(key)
        except DatabaseError as exc:
            logger.exception("Failed to save settings for %s", self.module)
            raise SettingsStoreError(f"Unable to save settings for {self.module}") from exc

        if changed:
            logger.info("Saved %s settings: %s", self.module, ", ".join(changed))
        return changed
