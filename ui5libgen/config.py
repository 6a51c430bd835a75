"""UI5 library generator configuration.

Centralised, typed configuration for a generator run.  Settings use Pydantic
v2 models so they are validated at construction time, and can be built from
environment variables without boiler-plate.  The static framework table that
drives the version prompt lives here as well.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Frameworks
# ---------------------------------------------------------------------------


class Framework(str, Enum):
    """UI5 distributions a generated library can target."""
    OPENUI5 = "OpenUI5"
    SAPUI5 = "SAPUI5"


class FrameworkSpec(BaseModel):
    """Static facts attached to a framework choice."""

    model_config = ConfigDict(frozen=True)

    min_version: str = Field(..., description="Lowest framework version the template supports")
    lookup_package: str = Field(
        ..., description="npm package whose newest release is offered as the default version"
    )
    cdn_domain: str = Field(..., description="Domain serving the framework's bootstrap")


FRAMEWORK_SPECS: dict[Framework, FrameworkSpec] = {
    Framework.OPENUI5: FrameworkSpec(
        min_version="1.114.0",
        lookup_package="@openui5/sap.ui.core",
        cdn_domain="sdk.openui5.org",
    ),
    Framework.SAPUI5: FrameworkSpec(
        min_version="1.77.0",
        lookup_package="@sapui5/distribution-metadata",
        cdn_domain="ui5.sap.com",
    ),
}

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "materializer" / "templates"

#: Name of the JSON record kept in the root of every generated library.
STORE_FILENAME = ".ui5libgen-rc.json"


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


class RegistryConfig(BaseModel):
    """Configuration for the npm registry used for default-version lookups."""

    url: str = Field(default="https://registry.npmjs.org")
    timeout: float = Field(default=5.0, ge=1, description="Per-request timeout in seconds")


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Created once by the CLI entry point (flags layered over
    :meth:`from_env`) and passed to the prompt session and materializer.
    """

    output_dir: Path = Field(default_factory=Path.cwd)
    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR)
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    offline: bool = Field(default=False, description="Skip the registry lookup entirely")
    embedded: bool = Field(default=False, description="Suppress the welcome banner")

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            UI5LIBGEN_OUTPUT_DIR, UI5LIBGEN_TEMPLATE_DIR,
            UI5LIBGEN_REGISTRY_URL, UI5LIBGEN_LOOKUP_TIMEOUT,
            UI5LIBGEN_OFFLINE.
        """
        registry_kwargs: dict[str, Any] = {}
        if os.environ.get("UI5LIBGEN_REGISTRY_URL"):
            registry_kwargs["url"] = os.environ["UI5LIBGEN_REGISTRY_URL"]
        if os.environ.get("UI5LIBGEN_LOOKUP_TIMEOUT"):
            registry_kwargs["timeout"] = float(os.environ["UI5LIBGEN_LOOKUP_TIMEOUT"])

        kwargs: dict[str, Any] = {"registry": RegistryConfig(**registry_kwargs)}
        if os.environ.get("UI5LIBGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["UI5LIBGEN_OUTPUT_DIR"])
        if os.environ.get("UI5LIBGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["UI5LIBGEN_TEMPLATE_DIR"])

        offline = os.environ.get("UI5LIBGEN_OFFLINE", "").strip().lower()
        kwargs["offline"] = offline in ("1", "true", "yes", "on")

        return cls(**kwargs)
