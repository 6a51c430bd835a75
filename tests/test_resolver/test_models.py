"""Unit tests for the resolved configuration models (ui5libgen.resolver.models)."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from ui5libgen.config import Framework
from ui5libgen.resolver.models import (
    ErrorCode,
    InputValidationError,
    LibraryConfig,
    LocalPackage,
    Namespace,
    PackageReference,
    RegistryPackage,
)

pytestmark = pytest.mark.unit


class TestNamespace:
    def test_requires_two_segments(self):
        with pytest.raises(ValidationError):
            Namespace(segments=("components",))

    def test_is_frozen(self):
        ns = Namespace(segments=("demo", "components"))
        with pytest.raises(ValidationError):
            ns.segments = ("other", "lib")

    def test_str_is_dotted(self):
        assert str(Namespace(segments=("a", "b", "c"))) == "a.b.c"


class TestPackageReference:
    def test_discriminated_by_kind(self):
        adapter = TypeAdapter(PackageReference)
        registry = adapter.validate_python({"kind": "registry", "name": "pkg", "version": "1.0.0"})
        local = adapter.validate_python({"kind": "local", "path": "../x", "name": "x"})
        assert isinstance(registry, RegistryPackage)
        assert isinstance(local, LocalPackage)

    def test_registry_defaults_to_latest(self):
        assert RegistryPackage(name="pkg").version == "latest"


class TestInputValidationError:
    def test_carries_code_and_message(self):
        err = InputValidationError(ErrorCode.NOT_SEMVER, "bad version")
        assert err.code is ErrorCode.NOT_SEMVER
        assert str(err) == "bad version"
        assert isinstance(err, ValueError)

    def test_codes_use_descriptive_names(self):
        assert ErrorCode.TOO_FEW_SEGMENTS.value == "TooFewSegments"
        assert ErrorCode.PACKAGE_DESCRIPTOR_MISSING_NAME.value == "PackageDescriptorMissingName"


class TestLibraryConfig:
    def test_template_context_for_registry_package(self, library_config: LibraryConfig):
        context = library_config.template_context()
        assert context["namespace"] == "demo.components"
        assert context["libURI"] == "demo/components"
        assert context["libBasePath"] == "../.."
        assert context["libId"] == "demo-components"
        assert context["framework"] == "OpenUI5"
        assert context["frameworklowercase"] == "openui5"
        assert context["frameworkVersion"] == "1.114.0"
        assert context["cdnDomain"] == "sdk.openui5.org"
        assert context["webComponentsPackage"] == "my-pkg@2.0.0"
        assert context["webComponentsPackageName"] == "my-pkg"
        assert context["webComponentsPackageVersion"] == "2.0.0"
        assert context["author"] == "Jane Doe"
        assert context["newdir"] is True
        assert context["initrepo"] is False

    def test_template_context_for_local_package(self, library_config: LibraryConfig):
        config = library_config.model_copy(
            update={
                "web_components_package": LocalPackage(path="../sibling", name="sib"),
                "web_components_input": "../sibling",
            }
        )
        context = config.template_context()
        assert context["webComponentsPackageName"] == "sib"
        assert context["webComponentsPackageVersion"] == "../sibling"

    def test_sapui5_cdn(self, library_config: LibraryConfig):
        config = library_config.model_copy(update={"framework": Framework.SAPUI5})
        assert config.template_context()["cdnDomain"] == "ui5.sap.com"

    def test_is_frozen(self, library_config: LibraryConfig):
        with pytest.raises(ValidationError):
            library_config.author = "Someone Else"

    def test_context_is_a_fresh_copy(self, library_config: LibraryConfig):
        context = library_config.template_context()
        context["author"] = "changed"
        assert library_config.template_context()["author"] == "Jane Doe"
