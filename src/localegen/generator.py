"""Render a CompiledModel into the modules of a generated Python package.

Modules are assembled as ``ast`` trees and serialized with ``ast.unparse``,
so string escaping and ordering come from the tree, never from hand-built
text. Identical models always render to identical bytes.
"""

import ast
import inspect
import logging
from pathlib import Path

from localegen import registry, runtime
from localegen.classes import (
    Catalog,
    CompiledModel,
    FormattedString,
    LocaleId,
    PluralString,
    SimpleString,
    StringArray,
)

logger = logging.getLogger(__name__)

HEADER = "# Generated by localegen. Do not edit.\n"

FORMATTED_STRING_MODULE = "formatted_string"
REGISTRY_MODULE = "app_locale"
ACCESSOR_MODULE = "localized_strings"

ACCESSOR_FUNCTIONS = (
    "get",
    "get_formatted",
    "get_plural",
    "get_string_array",
    "current_locale",
    "set_current_locale",
)

FORMATTED_STRING_SOURCE = '''
"""Template text together with the placeholder tokens it contains."""
from typing import NamedTuple


class FormattedString(NamedTuple):
    value: str
    format_args: tuple[str, ...]
'''


def _name(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Load())


def _attribute(owner: str, attr: str) -> ast.Attribute:
    return ast.Attribute(value=_name(owner), attr=attr, ctx=ast.Load())


def _call(func: ast.expr, *args: ast.expr) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=[])


def _assign(target: str, value: ast.expr) -> ast.Assign:
    return ast.Assign(targets=[ast.Name(id=target, ctx=ast.Store())], value=value)


def _import_from(module: str | None, *names: str) -> ast.ImportFrom:
    return ast.ImportFrom(module=module, names=[ast.alias(name=name) for name in names], level=1)


def _docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(value=text))


def _strings(values) -> ast.Tuple:
    return ast.Tuple(elts=[ast.Constant(value=value) for value in values], ctx=ast.Load())


def _read_only(keys: list[str], values: list[ast.expr]) -> ast.Call:
    mapping = ast.Dict(keys=[ast.Constant(value=key) for key in keys], values=values)
    return _call(_name("MappingProxyType"), mapping)


def _is_docstring(node: ast.stmt) -> bool:
    return (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Constant)
        and isinstance(node.value.value, str)
    )


def _serialize(module: ast.Module) -> str:
    ast.fix_missing_locations(module)
    return HEADER + ast.unparse(module) + "\n"


def render_formatted_string() -> str:
    return _serialize(ast.parse(FORMATTED_STRING_SOURCE))


def render_locale_tables(locale: LocaleId, catalog: Catalog) -> str:
    simple: dict[str, ast.expr] = {}
    formatted: dict[str, ast.expr] = {}
    plurals: dict[str, ast.expr] = {}
    arrays: dict[str, ast.expr] = {}
    for entry in catalog.entries:
        if isinstance(entry, SimpleString):
            simple[entry.key] = ast.Constant(value=entry.value)
        elif isinstance(entry, FormattedString):
            formatted[entry.key] = _call(
                _name("FormattedString"),
                ast.Constant(value=entry.value),
                _strings(entry.format_args),
            )
        elif isinstance(entry, PluralString):
            plurals[entry.key] = _read_only(
                list(entry.items), [ast.Constant(value=text) for text in entry.items.values()]
            )
        elif isinstance(entry, StringArray):
            arrays[entry.key] = _strings(entry.items)
        else:
            raise TypeError(f"Unknown resource entry: {entry!r}")

    body: list[ast.stmt] = [
        _docstring(f"String tables for {locale.display_name} ({locale.language_code})."),
        ast.ImportFrom(module="types", names=[ast.alias(name="MappingProxyType")], level=0),
        _import_from(FORMATTED_STRING_MODULE, "FormattedString"),
    ]
    for target, table in (
        ("SIMPLE", simple),
        ("FORMATTED", formatted),
        ("PLURALS", plurals),
        ("ARRAYS", arrays),
    ):
        body.append(_assign(target, _read_only(list(table), list(table.values()))))
    return _serialize(ast.Module(body=body, type_ignores=[]))


def render_registry(locales: list[LocaleId]) -> str:
    module = ast.parse(inspect.getsource(registry))
    module.body[0] = _docstring("Locales compiled into this package.")
    app_locale = next(
        node for node in module.body if isinstance(node, ast.ClassDef) and node.name == "AppLocale"
    )
    members = [
        _assign(
            locale.member_name,
            _strings(
                (locale.module_name, locale.language_code, locale.display_name, locale.native_name)
            ),
        )
        for locale in locales
    ]
    insert_at = 1 if _is_docstring(app_locale.body[0]) else 0
    app_locale.body[insert_at:insert_at] = members
    return _serialize(module)


def render_accessor(locales: list[LocaleId], default_locale: LocaleId) -> str:
    module = ast.parse(inspect.getsource(runtime))
    last_import = max(
        index
        for index, node in enumerate(module.body)
        if isinstance(node, (ast.Import, ast.ImportFrom))
    )
    module.body[last_import + 1:last_import + 1] = [
        _import_from(None, *(locale.module_name for locale in locales)),
        _import_from(REGISTRY_MODULE, "AppLocale"),
    ]

    tables = ast.Dict(
        keys=[_attribute("AppLocale", locale.member_name) for locale in locales],
        values=[_name(locale.module_name) for locale in locales],
    )
    module.body.append(
        _assign(
            "_strings",
            _call(
                _name("LocalizedStrings"), tables, _attribute("AppLocale", default_locale.member_name)
            ),
        )
    )
    for function in ACCESSOR_FUNCTIONS:
        module.body.append(_assign(function, _attribute("_strings", function)))
    return _serialize(module)


def render_package_init() -> str:
    exported = ["AppLocale", "FormattedString", "SENTINEL", *ACCESSOR_FUNCTIONS]
    body: list[ast.stmt] = [
        _docstring("Localized strings compiled by localegen."),
        _import_from(REGISTRY_MODULE, "AppLocale"),
        _import_from(FORMATTED_STRING_MODULE, "FormattedString"),
        _import_from(ACCESSOR_MODULE, "SENTINEL", *ACCESSOR_FUNCTIONS),
        ast.Assign(
            targets=[ast.Name(id="__all__", ctx=ast.Store())],
            value=ast.List(elts=[ast.Constant(value=name) for name in exported], ctx=ast.Load()),
        ),
    ]
    return _serialize(ast.Module(body=body, type_ignores=[]))


def render_artifacts(model: CompiledModel) -> dict[str, str]:
    """Render every artifact of ``model`` as ``{file name: source}``, in a fixed order."""
    locales = model.locales
    artifacts = {f"{FORMATTED_STRING_MODULE}.py": render_formatted_string()}
    for locale, catalog in model.catalogs.items():
        artifacts[f"{locale.module_name}.py"] = render_locale_tables(locale, catalog)
    artifacts[f"{REGISTRY_MODULE}.py"] = render_registry(locales)
    artifacts[f"{ACCESSOR_MODULE}.py"] = render_accessor(locales, model.default_locale)
    artifacts["__init__.py"] = render_package_init()
    return artifacts


def _is_generated(path: Path) -> bool:
    with open(path, "r", encoding="utf-8", errors="replace") as file:
        return file.readline() == HEADER


def remove_stale_artifacts(artifacts: dict[str, str], output_dir: Path) -> list[Path]:
    """Delete modules written by an earlier run that ``artifacts`` no longer contains.

    Only files starting with HEADER are touched.
    """
    removed = []
    if not output_dir.is_dir():
        return removed
    for path in sorted(output_dir.glob("*.py")):
        if path.name in artifacts or not path.is_file() or not _is_generated(path):
            continue
        path.unlink()
        logger.info(f"Removed stale {path}")
        removed.append(path)
    return removed


def write_artifacts(artifacts: dict[str, str], output_dir: Path) -> list[Path]:
    """Write ``artifacts`` into ``output_dir`` so it holds exactly this run's modules."""
    remove_stale_artifacts(artifacts, output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, source in artifacts.items():
        path = output_dir / filename
        if path.is_file() and path.read_text(encoding="utf-8") == source:
            logger.debug(f"Unchanged {path}")
        else:
            path.write_text(source, encoding="utf-8", newline="\n")
            logger.info(f"Wrote {path}")
        written.append(path)
    return written
