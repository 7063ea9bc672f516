"""End-to-end tests: resource tree -> generated package -> lookups."""

import importlib
import logging
from pathlib import Path

import pytest

from localegen import compiler
from localegen.config import CompilerConfig
from localegen.errors import CatalogParseError, MissingDefaultCatalogError

from .conftest import write_catalog

DEFAULT_BODY = """
<string name="app_name">Demo</string>
<string name="welcome_message">Welcome!</string>
<string name="greeting">Hello, %1$s!</string>
<string name="quoted">It\\'s \\"quoted\\"</string>
<plurals name="items">
    <item quantity="one">%d item</item>
    <item quantity="other">%d items</item>
</plurals>
<string-array name="colors">
    <item>Red</item>
    <item>Green</item>
</string-array>
"""

GERMAN_BODY = """
<string name="app_name">Vorstellung</string>
<string name="greeting">Hallo, %1$s!</string>
<string-array name="colors">
    <item>Rot</item>
    <item>Grün</item>
</string-array>
"""


def make_config(resources_dir: Path, output_dir: Path, output_package: str) -> CompilerConfig:
    return CompilerConfig(
        output_package=output_package,
        resources_dir=resources_dir,
        default_locale_name="Default",
        output_dir=output_dir,
    )


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "generated"


@pytest.fixture
def demo_resources(resources_dir: Path) -> Path:
    write_catalog(resources_dir, "values", DEFAULT_BODY)
    write_catalog(resources_dir, "values-de", GERMAN_BODY)
    write_catalog(resources_dir, "values-de_AT", '<string name="app_name">Servus</string>')
    return resources_dir


class TestCompileModel:
    def test_model_contains_default_first(self, demo_resources: Path, output_dir: Path) -> None:
        model, skipped = compiler.compile_model(make_config(demo_resources, output_dir, "a.b"))

        assert [locale.name for locale in model.locales] == ["Default", "De", "De_AT"]
        assert model.default_locale is model.locales[0]
        assert skipped == []

    def test_missing_locale_file_is_skipped(
        self, demo_resources: Path, output_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (demo_resources / "values-fr").mkdir()

        with caplog.at_level(logging.WARNING):
            model, skipped = compiler.compile_model(make_config(demo_resources, output_dir, "a.b"))

        assert "Fr" not in [locale.name for locale in model.locales]
        assert [skip.locale.name for skip in skipped] == ["Fr"]
        assert skipped[0].path == demo_resources / "values-fr" / "strings.xml"
        assert "does not exist" in caplog.text

    def test_missing_default_file_is_fatal(self, resources_dir: Path, output_dir: Path) -> None:
        write_catalog(resources_dir, "values-de", GERMAN_BODY)

        with pytest.raises(MissingDefaultCatalogError):
            compiler.compile_model(make_config(resources_dir, output_dir, "a.b"))


class TestRun:
    def test_writes_all_artifacts(
        self, demo_resources: Path, output_dir: Path, output_package: str
    ) -> None:
        result = compiler.run(make_config(demo_resources, output_dir, output_package))

        package_dir = output_dir.joinpath(*output_package.split("."))
        assert result.output_dir == package_dir
        assert sorted(path.name for path in result.written) == [
            "__init__.py",
            "app_locale.py",
            "formatted_string.py",
            "localized_strings.py",
            "strings_de.py",
            "strings_de_at.py",
            "strings_default.py",
        ]
        assert all(path.is_file() for path in result.written)

    def test_output_is_reproducible(
        self, demo_resources: Path, tmp_path: Path, output_package: str
    ) -> None:
        first = compiler.run(make_config(demo_resources, tmp_path / "one", output_package))
        second = compiler.run(make_config(demo_resources, tmp_path / "two", output_package))
        again = compiler.run(make_config(demo_resources, tmp_path / "one", output_package))

        for left, right, third in zip(first.written, second.written, again.written):
            assert left.name == right.name
            assert left.read_bytes() == right.read_bytes() == third.read_bytes()

    def test_parse_failure_writes_nothing(
        self, demo_resources: Path, output_dir: Path, output_package: str
    ) -> None:
        write_catalog(demo_resources, "values-fr", '<string name="x">broken</strong>')

        with pytest.raises(CatalogParseError) as excinfo:
            compiler.run(make_config(demo_resources, output_dir, output_package))

        assert excinfo.value.path == demo_resources / "values-fr" / "strings.xml"
        assert not output_dir.exists()

    def test_skipped_locale_has_no_artifact(
        self, demo_resources: Path, output_dir: Path, output_package: str, import_generated
    ) -> None:
        (demo_resources / "values-fr").mkdir()

        result = compiler.run(make_config(demo_resources, output_dir, output_package))
        package = import_generated(output_dir, output_package)

        assert [skip.locale.name for skip in result.skipped] == ["Fr"]
        assert not (result.output_dir / "strings_fr.py").exists()
        assert [locale.name for locale in package.AppLocale] == ["DEFAULT", "DE", "DE_AT"]
        assert package.AppLocale.find_by_code("fr") is package.AppLocale.DEFAULT


class TestGeneratedPackage:
    @pytest.fixture
    def package(self, demo_resources: Path, output_dir: Path, output_package: str, import_generated):
        compiler.run(make_config(demo_resources, output_dir, output_package))
        return import_generated(output_dir, output_package)

    def test_simple_strings_with_fallback(self, package) -> None:
        locale = package.AppLocale

        assert package.get("app_name", locale.DE) == "Vorstellung"
        assert package.get("app_name", locale.DEFAULT) == "Demo"
        assert package.get("app_name", locale.DE_AT) == "Servus"
        assert package.get("welcome_message", locale.DE) == "Welcome!"
        assert package.get("quoted") == "It's \"quoted\""
        assert package.get("nope", locale.DE) == "???"

    def test_formatted_strings(self, package) -> None:
        assert package.get_formatted("greeting", "John") == "Hello, John!"
        assert package.get_formatted("greeting", "John", locale=package.AppLocale.DE) == "Hallo, John!"
        assert package.get_formatted("greeting") == "Hello, %1$s!"

    def test_plurals(self, package) -> None:
        assert package.get_plural("items", 1, 1) == "1 item"
        assert package.get_plural("items", 5, 5) == "5 items"
        assert package.get_plural("items", 0, 0) == "0 items"
        assert package.get_plural("items", 5, 5, locale=package.AppLocale.DE) == "5 items"

    def test_string_arrays(self, package) -> None:
        assert package.get_string_array("colors", package.AppLocale.DE) == ("Rot", "Grün")
        assert package.get_string_array("colors", package.AppLocale.DE_AT) == ("Red", "Green")
        assert package.get_string_array("nope") == ()

    def test_current_locale_selector(self, package) -> None:
        assert package.current_locale() is package.AppLocale.DEFAULT

        package.set_current_locale(package.AppLocale.DE)

        assert package.get("app_name") == "Vorstellung"
        assert package.get_formatted("greeting", "Ana") == "Hallo, Ana!"

    def test_registry(self, package) -> None:
        locale = package.AppLocale

        assert list(locale) == [locale.DEFAULT, locale.DE, locale.DE_AT]
        assert locale.DE_AT.code == "de_at"
        assert locale.DE_AT.display_name == "German (de_AT)"
        assert locale.DE.native_name == "Deutsch"
        assert locale.supported_locales() == {
            "en": "English",
            "de": "German",
            "de_at": "German (de_AT)",
        }
        assert locale.supported_native_locales()["de"] == "Deutsch"
        assert locale.find_by_code("de") is locale.DE
        assert locale.find_by_code("ll") is locale.DEFAULT

    def test_tables_are_read_only(self, package, output_package: str) -> None:
        tables = importlib.import_module(f"{output_package}.strings_default")

        assert tables.FORMATTED["greeting"] == package.FormattedString("Hello, %1$s!", ("%1$s",))
        assert tables.FORMATTED["greeting"].format_args == ("%1$s",)
        assert list(tables.SIMPLE) == ["app_name", "welcome_message", "quoted"]
        with pytest.raises(TypeError):
            tables.SIMPLE["app_name"] = "changed"
        with pytest.raises(TypeError):
            tables.PLURALS["items"]["one"] = "changed"


class TestRepeatedRuns:
    def test_removed_locale_leaves_no_table_behind(
        self, demo_resources: Path, output_dir: Path, output_package: str, import_generated
    ) -> None:
        write_catalog(demo_resources, "values-fr", '<string name="app_name">Démo</string>')
        config = make_config(demo_resources, output_dir, output_package)
        first = compiler.run(config)
        assert (first.output_dir / "strings_fr.py").is_file()

        (demo_resources / "values-fr" / "strings.xml").unlink()
        second = compiler.run(config)
        package = import_generated(output_dir, output_package)

        assert [skip.locale.name for skip in second.skipped] == ["Fr"]
        names = sorted(path.name for path in second.output_dir.iterdir() if path.is_file())
        assert names == sorted(path.name for path in second.written)
        assert "strings_fr.py" not in names
        assert package.AppLocale.find_by_code("fr") is package.AppLocale.DEFAULT

    def test_hand_written_files_are_kept(
        self, demo_resources: Path, output_dir: Path, output_package: str
    ) -> None:
        config = make_config(demo_resources, output_dir, output_package)
        config.package_dir.mkdir(parents=True)
        notes = config.package_dir / "notes.py"
        notes.write_text("# kept\n", encoding="utf-8")

        compiler.run(config)

        assert notes.read_text(encoding="utf-8") == "# kept\n"


class TestUnusualDirectoryNames:
    def test_underscored_token_imports(
        self, demo_resources: Path, output_dir: Path, output_package: str, import_generated
    ) -> None:
        write_catalog(demo_resources, "values-_x_", '<string name="app_name">Ex</string>')

        compiler.run(make_config(demo_resources, output_dir, output_package))
        package = import_generated(output_dir, output_package)

        assert package.get("app_name", package.AppLocale.X) == "Ex"
        assert package.AppLocale.X.code == "_x_"


class TestModelIsReadOnly:
    def test_catalogs_and_plural_items_reject_writes(
        self, demo_resources: Path, output_dir: Path
    ) -> None:
        model, _ = compiler.compile_model(make_config(demo_resources, output_dir, "a.b"))
        default_catalog = model.catalogs[model.default_locale]

        with pytest.raises(TypeError):
            model.catalogs[model.default_locale] = default_catalog
        with pytest.raises(TypeError):
            default_catalog.plurals["items"].items["one"] = "changed"
