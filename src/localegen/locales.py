import logging
import re
from pathlib import Path

from localegen.classes import LocaleId
from localegen.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE_CODE = "en"
VALUES_DIR = "values"
VALUES_PREFIX = "values-"

# language code -> (English name, native name)
LANGUAGE_NAMES: dict[str, tuple[str, str]] = {
    "en": ("English", "English"),
    "es": ("Spanish", "Español"),
    "fr": ("French", "Français"),
    "de": ("German", "Deutsch"),
    "it": ("Italian", "Italiano"),
    "pt": ("Portuguese", "Português"),
    "ru": ("Russian", "Русский"),
    "ja": ("Japanese", "日本語"),
    "ko": ("Korean", "한국어"),
    "zh": ("Chinese", "中文"),
    "ar": ("Arabic", "العربية"),
    "hi": ("Hindi", "हिन्दी"),
    "tr": ("Turkish", "Türkçe"),
    "pl": ("Polish", "Polski"),
    "nl": ("Dutch", "Nederlands"),
    "sv": ("Swedish", "Svenska"),
    "da": ("Danish", "Dansk"),
    "no": ("Norwegian", "Norsk"),
    "fi": ("Finnish", "Suomi"),
    "el": ("Greek", "Ελληνικά"),
    "cs": ("Czech", "Čeština"),
    "hu": ("Hungarian", "Magyar"),
    "ro": ("Romanian", "Română"),
    "uk": ("Ukrainian", "Українська"),
    "he": ("Hebrew", "עברית"),
    "th": ("Thai", "ไทย"),
    "vi": ("Vietnamese", "Tiếng Việt"),
    "id": ("Indonesian", "Bahasa Indonesia"),
    "ms": ("Malay", "Bahasa Melayu"),
    "bg": ("Bulgarian", "Български"),
    "hr": ("Croatian", "Hrvatski"),
    "sr": ("Serbian", "Српски"),
    "sk": ("Slovak", "Slovenčina"),
    "sl": ("Slovenian", "Slovenščina"),
}

UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")
CODE_SEPARATORS = re.compile(r"[_-]")


def normalize_name(token: str) -> str:
    """Turn a directory token into an identifier-safe artifact suffix."""
    # no leading or trailing underscores: _X_ is a reserved Enum member name
    name = UNSAFE_CHARS.sub("_", token).strip("_")
    if name[:1].isdigit():
        name = f"L{name}"
    return name[:1].upper() + name[1:]


def display_names(token: str) -> tuple[str, str]:
    """Resolve (display name, native name) for a raw locale token such as ``de_AT``."""
    primary = CODE_SEPARATORS.split(token.lower(), maxsplit=1)[0]
    if primary not in LANGUAGE_NAMES:
        capitalized = token[:1].upper() + token[1:]
        return capitalized, capitalized
    display_name, native_name = LANGUAGE_NAMES[primary]
    if CODE_SEPARATORS.search(token):
        return f"{display_name} ({token})", f"{native_name} ({token})"
    return display_name, native_name


def default_locale(default_locale_name: str) -> LocaleId:
    name = normalize_name(default_locale_name) if default_locale_name else ""
    if not name.strip("_"):
        raise ConfigError(f"Invalid default locale name: {default_locale_name!r}")
    display_name, native_name = display_names(DEFAULT_LANGUAGE_CODE)
    return LocaleId(name, DEFAULT_LANGUAGE_CODE, display_name, native_name, is_default=True)


def locale_from_directory(directory_name: str) -> LocaleId:
    token = directory_name[len(VALUES_PREFIX):]
    display_name, native_name = display_names(token)
    return LocaleId(normalize_name(token), token.lower(), display_name, native_name)


def discover_locales(
    resources_dir: Path, default_locale_name: str, catalog_file: str = "strings.xml"
) -> dict[LocaleId, Path]:
    """Map every locale found under ``resources_dir`` to its catalog file.

    The default locale comes first and always maps to ``values/<catalog_file>``.
    Other locales follow in sorted ``values-*`` directory order. Files are not
    checked for existence here.
    """
    default = default_locale(default_locale_name)
    locales: dict[LocaleId, Path] = {default: resources_dir / VALUES_DIR / catalog_file}
    taken = {default.name.lower(), default.member_name.lower()}

    directories = sorted(resources_dir.iterdir()) if resources_dir.is_dir() else []
    for directory in directories:
        if not directory.is_dir() or not directory.name.startswith(VALUES_PREFIX):
            continue
        if directory.name == VALUES_PREFIX:
            logger.warning(f"Ignoring {directory}: no locale token after {VALUES_PREFIX!r}")
            continue
        locale = locale_from_directory(directory.name)
        if not locale.name.strip("_"):
            logger.warning(f"Ignoring {directory}: no usable locale name")
            continue
        if locale.name.lower() in taken:
            logger.warning(
                f"Ignoring {directory}: locale name {locale.name} is already in use"
            )
            continue
        taken.add(locale.name.lower())
        locales[locale] = directory / catalog_file

    logger.info(f"Found locales: {[locale.name for locale in locales]}")
    return locales
