import logging
import os
import sys
from pathlib import Path
from typing import Any

import click
from localegen import compiler
from localegen.config import compiler_config, load_config
from localegen.errors import LocalegenError
from localegen.locales import discover_locales

logger = logging.getLogger(__name__)


def _setup(config_folder: str) -> dict[str, Any]:
    config_file_path = os.path.abspath(f"{config_folder}/config.yml")
    try:
        config = load_config(Path(config_file_path))
    except LocalegenError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )
    return config


def localization_options(function):
    for option in reversed(
        [
            click.option("--config-folder", default="config", help="Configuration folder path."),
            click.option("--project-dir", default=".", help="Directory relative paths resolve against."),
            click.option("--resources-dir", help="Folder holding values/ and values-*/ directories."),
            click.option("--default-locale-name", help="Artifact name of the default locale."),
            click.option("--output-package", help="Dotted package name of the generated code."),
            click.option("--output-dir", help="Root folder the generated package is written to."),
        ]
    ):
        function = option(function)
    return function


@click.group()
@click.version_option(package_name="localegen")
def cli() -> None:
    pass


@cli.command("generate")
@localization_options
def generate(
    config_folder: str,
    project_dir: str,
    resources_dir: str | None,
    default_locale_name: str | None,
    output_package: str | None,
    output_dir: str | None,
) -> None:
    """Compile strings.xml catalogs into a Python package."""
    config = _setup(config_folder)
    try:
        compiler_cfg = compiler_config(
            config["localization"],
            Path(project_dir),
            resources_dir=resources_dir,
            default_locale_name=default_locale_name,
            output_package=output_package,
            output_dir=output_dir,
        )
        result = compiler.run(compiler_cfg)
    except LocalegenError as exc:
        logger.error(str(exc))
        sys.exit(1)

    print(f"Generated {len(result.written)} files in {result.output_dir}")
    for skip in result.skipped:
        print(f"  Skipped {skip.locale.name}: {skip.reason} ({skip.path})")


@cli.command("locales")
@localization_options
def locales(
    config_folder: str,
    project_dir: str,
    resources_dir: str | None,
    default_locale_name: str | None,
    output_package: str | None,
    output_dir: str | None,
) -> None:
    """List the locales found in the resources folder."""
    config = _setup(config_folder)
    try:
        compiler_cfg = compiler_config(
            config["localization"],
            Path(project_dir),
            resources_dir=resources_dir,
            default_locale_name=default_locale_name,
            output_package=output_package,
            output_dir=output_dir,
        )
        found = discover_locales(
            compiler_cfg.resources_dir,
            compiler_cfg.default_locale_name,
            compiler_cfg.catalog_file,
        )
    except LocalegenError as exc:
        logger.error(str(exc))
        sys.exit(1)

    for locale, path in found.items():
        status = "ok" if path.exists() else "missing"
        print(
            f"{locale.member_name}\t{locale.language_code}\t{locale.display_name}"
            f"\t{locale.native_name}\t{path}\t{status}"
        )
