class VideoMarkupConfigError(Exception):
    """Base class for video markup configuration errors."""


class CacheStoreError(VideoMarkupConfigError):
    """Cache table could not be read or cleared."""


class SettingsStoreError(VideoMarkupConfigError):
    """Module settings could not be persisted."""
