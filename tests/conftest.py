"""Pytest configuration for the localegen test suite.

Hypothesis profiles:
- dev: local runs (200 examples)
- ci: CI=true in the environment (50 examples, derandomized)

Override with HYPOTHESIS_PROFILE=<name>.
"""

import importlib
import itertools
import os
import sys
from pathlib import Path

import pytest
from hypothesis import settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.load_profile(
    os.environ.get("HYPOTHESIS_PROFILE", "ci" if os.environ.get("CI") == "true" else "dev")
)

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'

_package_counter = itertools.count()


def write_catalog(resources_dir: Path, directory: str, body: str) -> Path:
    path = resources_dir / directory / "strings.xml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{XML_HEADER}<resources>\n{body}\n</resources>\n", encoding="utf-8")
    return path


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    path = tmp_path / "res"
    path.mkdir()
    return path


@pytest.fixture
def output_package() -> str:
    """A package name not used by any other test, so imports never collide."""
    return f"genapp{next(_package_counter)}.strings"


@pytest.fixture
def import_generated(monkeypatch: pytest.MonkeyPatch):
    """Import a generated package from an output folder."""
    imported: list[str] = []

    def _import(output_dir: Path, package: str):
        monkeypatch.syspath_prepend(str(output_dir))
        importlib.invalidate_caches()
        imported.append(package.split(".")[0])
        return importlib.import_module(package)

    yield _import

    for top_level in imported:
        for name in list(sys.modules):
            if name == top_level or name.startswith(f"{top_level}."):
                del sys.modules[name]
