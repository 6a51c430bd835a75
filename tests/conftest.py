"""Shared pytest fixtures for the UI5 library generator test suite.

Provides reusable fixtures for:
- Temporary output and template directories
- A silent Rich console and scripted prompt input
- Resolved library configurations
- Mocked registry responses
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from rich.console import Console

from ui5libgen.config import Framework
from ui5libgen.resolver.models import LibraryConfig, Namespace, RegistryPackage


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Directory libraries are generated into (auto-cleanup)."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def local_package(tmp_output_dir: Path) -> Path:
    """A sibling package ``../sibling`` next to ``<output>/demo.components``."""
    package_dir = tmp_output_dir / "sibling"
    package_dir.mkdir()
    (package_dir / "package.json").write_text(
        json.dumps({"name": "sib", "version": "1.0.0"}), encoding="utf-8"
    )
    return package_dir


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A small template tree exercising every renaming rule."""
    root = tmp_path / "templates"
    files = {
        "_.gitignore": "node_modules/\n",
        "_gitignore": "dist/\n",
        "package.json": '{\n  "name": "{{libId}}",\n  "author": "{{author}}"\n}\n',
        "_library_/index.js": "// {{author}}\n",
        "src/_library_/library.js": 'sap.ui.define([], function () { return "{{namespace}}"; });\n',
        "src/_library_/_.library": "<name>{{namespace}}</name>\n",
        "test/_library_/sub/_library_/page.html": "<base href=\"{{libBasePath}}\">\n",
        "docs/_internal/notes.md": "Missing: [{{doesNotExist}}]\n",
    }
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    (root / "src" / "_library_" / "img").mkdir(parents=True)
    (root / "src" / "_library_" / "img" / "logo.png").write_bytes(
        b"\x89PNG\r\n\x1a\n{{author}}\x00\x01"
    )
    (root / "empty_dir").mkdir()
    return root


# ---------------------------------------------------------------------------
# Console & prompt input
# ---------------------------------------------------------------------------

@pytest.fixture
def quiet_console() -> Console:
    """A Rich console that records output instead of printing it."""
    return Console(file=io.StringIO(), force_terminal=False, width=120)


@pytest.fixture
def scripted_input():
    """Build scripted prompt input: one answer per line."""

    def factory(*lines: str) -> io.StringIO:
        return io.StringIO("".join(f"{line}\n" for line in lines))

    return factory


# ---------------------------------------------------------------------------
# Library configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def library_config(tmp_output_dir: Path) -> LibraryConfig:
    """The configuration resolved for ``demo.components`` on OpenUI5 1.114.0."""
    return LibraryConfig(
        namespace=Namespace(segments=("demo", "components")),
        framework=Framework.OPENUI5,
        framework_version="1.114.0",
        web_components_package=RegistryPackage(name="my-pkg", version="2.0.0"),
        web_components_input="my-pkg@2.0.0",
        author="Jane Doe",
        newdir=True,
        initrepo=False,
        destination=tmp_output_dir / "demo.components",
    )


# ---------------------------------------------------------------------------
# Mock registry
# ---------------------------------------------------------------------------

def make_registry_document(versions: list[str]) -> dict[str, Any]:
    """A minimal npm package document listing *versions*."""
    return {
        "name": "@openui5/sap.ui.core",
        "dist-tags": {"latest": versions[-1] if versions else ""},
        "versions": {v: {"version": v} for v in versions},
    }


@pytest.fixture
def mock_registry():
    """Patch ``httpx.AsyncClient`` to serve a package document.

    Usage:
        def test_something(mock_registry):
            with mock_registry(["1.120.0", "1.121.0"]) as client_cls:
                ...
                client_cls.return_value.get.assert_awaited()
    """

    def factory(versions: list[str]):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = make_registry_document(versions)
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=mock_response)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        return patch("httpx.AsyncClient", return_value=mock_client)

    return factory


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing git invocations.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.kill = MagicMock()
        return mock_proc

    return factory
