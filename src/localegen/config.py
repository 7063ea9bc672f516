import copy
import keyword
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from localegen.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    },
    "localization": {
        "output_package": "org.localegen.resources",
        "resources_dir": "src/commonMain/composeResources",
        "default_locale_name": "Default",
        "output_dir": "build/generated/localegen",
        "catalog_file": "strings.xml",
        "max_workers": None,
    },
}

STRING_SETTINGS = (
    "output_package",
    "resources_dir",
    "default_locale_name",
    "output_dir",
    "catalog_file",
)


@dataclass(frozen=True)
class CompilerConfig:
    output_package: str
    resources_dir: Path
    default_locale_name: str
    output_dir: Path
    catalog_file: str = "strings.xml"
    max_workers: int | None = None

    @property
    def package_dir(self) -> Path:
        return self.output_dir.joinpath(*self.output_package.split("."))

    def validate(self) -> None:
        parts = self.output_package.split(".")
        if not all(part.isidentifier() and not keyword.iskeyword(part) for part in parts):
            raise ConfigError(f"Invalid output package: {self.output_package!r}")
        if not self.catalog_file:
            raise ConfigError("catalog_file must not be empty")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be positive, got {self.max_workers}")


def load_config(config_file_path: Path) -> dict[str, Any]:
    """Read config.yml on top of DEFAULT_CONFIG.

    A missing file is logged and yields the defaults; invalid YAML raises ConfigError.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(config_file_path, "r", encoding="utf-8") as file:
            loaded = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.error(f"Config file not found: {config_file_path}, using defaults.")
        return config
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid config file {config_file_path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Invalid config file {config_file_path}: expected a mapping")
    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def compiler_config(
    settings: dict[str, Any], project_dir: Path = Path("."), **overrides: Any
) -> CompilerConfig:
    """Build a validated CompilerConfig from the ``localization`` section.

    Relative directories resolve against ``project_dir``. Overrides that are
    None are ignored.
    """
    if not isinstance(settings, dict):
        raise ConfigError(f"localization settings must be a mapping, got {settings!r}")
    values = {
        **DEFAULT_CONFIG["localization"],
        **settings,
        **{key: value for key, value in overrides.items() if value is not None},
    }
    for key in STRING_SETTINGS:
        if not isinstance(values[key], str):
            raise ConfigError(f"{key} must be a string, got {values[key]!r}")
    max_workers = values["max_workers"]
    if max_workers is not None and (
        isinstance(max_workers, bool) or not isinstance(max_workers, int)
    ):
        raise ConfigError(f"max_workers must be an integer or null, got {max_workers!r}")

    config = CompilerConfig(
        output_package=values["output_package"],
        resources_dir=project_dir / values["resources_dir"],
        default_locale_name=values["default_locale_name"],
        output_dir=project_dir / values["output_dir"],
        catalog_file=values["catalog_file"],
        max_workers=max_workers,
    )
    config.validate()
    return config
