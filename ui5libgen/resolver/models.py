"""Pydantic v2 models for resolved generator input.

Every answer given at the prompts ends up in one of these immutable models.
``LibraryConfig`` is the closed record handed to the materializer; its
:meth:`LibraryConfig.template_context` is the only open mapping in the
system.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from ui5libgen.config import FRAMEWORK_SPECS, Framework, FrameworkSpec

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorCode(str, Enum):
    """Which validation rule an answer violated."""
    TOO_FEW_SEGMENTS = "TooFewSegments"
    INVALID_CHARACTERS = "InvalidCharacters"
    NOT_SEMVER = "NotSemver"
    BELOW_MINIMUM = "BelowMinimum"
    INVALID_RELATIVE_PATH = "InvalidRelativePath"
    INVALID_PATH_SYNTAX = "InvalidPathSyntax"
    PACKAGE_DESCRIPTOR_UNREADABLE = "PackageDescriptorUnreadable"
    PACKAGE_DESCRIPTOR_MISSING_NAME = "PackageDescriptorMissingName"
    INVALID_PACKAGE_NAME = "InvalidPackageName"
    INVALID_PACKAGE_VERSION = "InvalidPackageVersion"


class InputValidationError(ValueError):
    """Raised when a raw answer fails validation.

    The message is meant for the user and is shown verbatim when the prompt
    is repeated.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        super().__init__(message)


# ---------------------------------------------------------------------------
# Namespace
# ---------------------------------------------------------------------------


class Namespace(BaseModel):
    """A dotted library name such as ``demo.components``."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[str, ...] = Field(..., min_length=2)

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    @property
    def path_form(self) -> str:
        """``demo.components`` -> ``demo/components``."""
        return "/".join(self.segments)

    @property
    def up_levels(self) -> str:
        """One ``..`` per segment, leading from the library folder back to its root."""
        return "/".join(".." for _ in self.segments)

    @property
    def library_id(self) -> str:
        """npm-style identifier: ``My.Demo_Lib`` -> ``my-demo_lib``."""
        return "-".join(self.segments).lower()

    def __str__(self) -> str:
        return self.dotted


# ---------------------------------------------------------------------------
# Package references
# ---------------------------------------------------------------------------


class RegistryPackage(BaseModel):
    """A package pulled from the npm registry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["registry"] = "registry"
    name: str
    version: str = "latest"

    @property
    def dependency_version(self) -> str:
        return self.version


class LocalPackage(BaseModel):
    """A package living in a directory next to the generated library."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local"] = "local"
    path: str = Field(..., description="Path relative to the destination root")
    name: str = Field(..., description="Read from the package's own package.json")

    @property
    def dependency_version(self) -> str:
        # npm accepts a relative directory as the dependency "version".
        return self.path


PackageReference = Annotated[
    Union[RegistryPackage, LocalPackage], Field(discriminator="kind")
]


# ---------------------------------------------------------------------------
# Final configuration
# ---------------------------------------------------------------------------


class LibraryConfig(BaseModel):
    """Everything the prompts resolved, frozen once prompting completes."""

    model_config = ConfigDict(frozen=True)

    namespace: Namespace
    framework: Framework = Framework.OPENUI5
    framework_version: str
    web_components_package: PackageReference
    web_components_input: str = Field(
        default="", description="The package answer exactly as typed"
    )
    author: str = ""
    newdir: bool = True
    initrepo: bool = True
    destination: Path = Field(default_factory=Path.cwd)

    @property
    def framework_spec(self) -> FrameworkSpec:
        return FRAMEWORK_SPECS[self.framework]

    def template_context(self) -> dict[str, str | bool]:
        """Return the placeholder mapping used to render template files.

        Keys use the camelCase names the template files refer to.
        """
        package = self.web_components_package
        return {
            "namespace": self.namespace.dotted,
            "libId": self.namespace.library_id,
            "libURI": self.namespace.path_form,
            "libBasePath": self.namespace.up_levels,
            "framework": self.framework.value,
            "frameworklowercase": self.framework.value.lower(),
            "frameworkVersion": self.framework_version,
            "cdnDomain": self.framework_spec.cdn_domain,
            "webComponentsPackage": self.web_components_input or package.name,
            "webComponentsPackageName": package.name,
            "webComponentsPackageVersion": package.dependency_version,
            "author": self.author,
            "newdir": self.newdir,
            "initrepo": self.initrepo,
        }
