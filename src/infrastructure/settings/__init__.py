"""settings.json解決"""

from infrastructure.settings.settings_resolver import (
    DEFAULT_IDENTITY,
    DEFAULT_PRINCIPAL,
    SettingsResolver,
    clear_settings_cache,
    get_identity,
    get_principal,
    get_settings_resolver,
)

__all__ = [
    "DEFAULT_IDENTITY",
    "DEFAULT_PRINCIPAL",
    "SettingsResolver",
    "clear_settings_cache",
    "get_identity",
    "get_principal",
    "get_settings_resolver",
]
