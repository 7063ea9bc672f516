import logging
from concurrent.futures import ThreadPoolExecutor

from localegen.classes import CompiledModel, CompileResult, SkippedLocale
from localegen.config import CompilerConfig
from localegen.errors import MissingDefaultCatalogError
from localegen.generator import render_artifacts, write_artifacts
from localegen.locales import discover_locales
from localegen.parser import parse_catalog

logger = logging.getLogger(__name__)


def compile_model(config: CompilerConfig) -> tuple[CompiledModel, list[SkippedLocale]]:
    """Discover and parse every locale under ``config.resources_dir``.

    Locales whose catalog file is missing are skipped, except the default
    locale, which raises MissingDefaultCatalogError. Parse failures propagate.
    """
    locales = discover_locales(
        config.resources_dir, config.default_locale_name, config.catalog_file
    )
    default_locale = next(iter(locales))

    present = {}
    skipped = []
    for locale, path in locales.items():
        if path.exists():
            present[locale] = path
        elif locale.is_default:
            raise MissingDefaultCatalogError(path)
        else:
            logger.warning(f"Locale file does not exist: {path}")
            skipped.append(SkippedLocale(locale, path, "catalog file does not exist"))

    # catalogs share nothing, so they are parsed concurrently and joined in discovery order
    with ThreadPoolExecutor(
        max_workers=config.max_workers, thread_name_prefix="localegen-parse"
    ) as executor:
        catalogs = list(executor.map(parse_catalog, present.values()))

    return CompiledModel(default_locale, dict(zip(present, catalogs))), skipped


def run(config: CompilerConfig) -> CompileResult:
    """Compile the resources described by ``config`` and write the generated package.

    Nothing is written unless every catalog parsed successfully.
    """
    model, skipped = compile_model(config)
    artifacts = render_artifacts(model)
    written = write_artifacts(artifacts, config.package_dir)

    logger.info(
        f"Generated {len(model.catalogs)} locale(s) into {config.package_dir}"
    )
    for skip in skipped:
        logger.warning(f"Skipped locale {skip.locale.name} ({skip.path}): {skip.reason}")
    return CompileResult(model, config.package_dir, written, skipped)
