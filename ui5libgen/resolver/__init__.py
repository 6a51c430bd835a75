"""Input resolver -- turns prompt answers into a validated ``LibraryConfig``.

Quick usage::

    from ui5libgen.resolver import validate_namespace, resolve_package_reference

    namespace = validate_namespace("demo.components")
    namespace.path_form                      # "demo/components"
    resolve_package_reference("pkg@1.2.3", ".")  # RegistryPackage(name="pkg", version="1.2.3")
"""

from ui5libgen.resolver.defaults import VersionLookup, resolve_default_version
from ui5libgen.resolver.models import (
    ErrorCode,
    InputValidationError,
    LibraryConfig,
    LocalPackage,
    Namespace,
    PackageReference,
    RegistryPackage,
)
from ui5libgen.resolver.prompts import PromptSession
from ui5libgen.resolver.validators import (
    extract_package_name_and_version,
    is_valid_package_name,
    is_valid_path,
    resolve_package_reference,
    validate_framework_version,
    validate_namespace,
)

__all__ = [
    # Models
    "ErrorCode",
    "InputValidationError",
    "LibraryConfig",
    "LocalPackage",
    "Namespace",
    "PackageReference",
    "RegistryPackage",
    # Validation
    "extract_package_name_and_version",
    "is_valid_package_name",
    "is_valid_path",
    "resolve_package_reference",
    "validate_framework_version",
    "validate_namespace",
    # Defaults and prompting
    "PromptSession",
    "VersionLookup",
    "resolve_default_version",
]
