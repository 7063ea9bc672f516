"""Locale registry of the generated package.

The generator copies ``AppLocale`` into ``app_locale.py`` and injects one
member per compiled locale, ``DEFAULT`` first.
"""

from enum import Enum


class AppLocale(Enum):
    """Locales available in the application."""

    def __init__(self, token: str, code: str, display_name: str, native_name: str) -> None:
        self.code = code
        self.display_name = display_name
        self.native_name = native_name

    @classmethod
    def supported_locales(cls) -> dict[str, str]:
        """Language code -> English display name."""
        return {locale.code: locale.display_name for locale in cls}

    @classmethod
    def supported_native_locales(cls) -> dict[str, str]:
        """Language code -> native display name."""
        return {locale.code: locale.native_name for locale in cls}

    @classmethod
    def find_by_code(cls, code: str) -> "AppLocale":
        """First locale with ``code``, ``AppLocale.DEFAULT`` when there is none."""
        for locale in cls:
            if locale.code == code:
                return locale
        return cls.DEFAULT
