from .settings import DEFAULT_SETTINGS
