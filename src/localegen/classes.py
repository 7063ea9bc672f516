from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

PLURAL_CATEGORIES = ("zero", "one", "two", "few", "many", "other")


@dataclass(frozen=True)
class LocaleId:
    name: str
    language_code: str
    display_name: str
    native_name: str
    is_default: bool = False

    @property
    def member_name(self) -> str:
        return "DEFAULT" if self.is_default else self.name.upper()

    @property
    def module_name(self) -> str:
        return f"strings_{self.name.lower()}"


@dataclass(frozen=True)
class SimpleString:
    key: str
    value: str


@dataclass(frozen=True)
class FormattedString:
    key: str
    value: str
    format_args: tuple[str, ...]


@dataclass(frozen=True)
class PluralString:
    key: str
    items: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))


@dataclass(frozen=True)
class StringArray:
    key: str
    items: tuple[str, ...]


ResourceEntry = SimpleString | FormattedString | PluralString | StringArray


@dataclass(frozen=True)
class Catalog:
    """Parsed resources of one locale, keys unique and in encounter order."""

    path: Path
    entries: tuple[ResourceEntry, ...] = ()

    def _of_kind(self, kind: type) -> dict[str, ResourceEntry]:
        return {entry.key: entry for entry in self.entries if isinstance(entry, kind)}

    @property
    def simple(self) -> dict[str, SimpleString]:
        return self._of_kind(SimpleString)

    @property
    def formatted(self) -> dict[str, FormattedString]:
        return self._of_kind(FormattedString)

    @property
    def plurals(self) -> dict[str, PluralString]:
        return self._of_kind(PluralString)

    @property
    def arrays(self) -> dict[str, StringArray]:
        return self._of_kind(StringArray)


@dataclass(frozen=True)
class SkippedLocale:
    locale: LocaleId
    path: Path
    reason: str


@dataclass(frozen=True)
class CompiledModel:
    default_locale: LocaleId
    catalogs: Mapping[LocaleId, Catalog]

    def __post_init__(self) -> None:
        object.__setattr__(self, "catalogs", MappingProxyType(dict(self.catalogs)))

    @property
    def locales(self) -> list[LocaleId]:
        return list(self.catalogs)


@dataclass
class CompileResult:
    model: CompiledModel
    output_dir: Path
    written: list[Path] = field(default_factory=list)
    skipped: list[SkippedLocale] = field(default_factory=list)
