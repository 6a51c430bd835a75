"""Validation rules that turn raw prompt answers into typed values.

Each ``validate_*`` / ``resolve_*`` function either returns a normalized value
or raises :class:`~ui5libgen.resolver.models.InputValidationError` describing
the first rule the answer breaks.  None of them prompt or print.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from urllib.parse import quote

import semantic_version

from ui5libgen.resolver.models import (
    ErrorCode,
    InputValidationError,
    LocalPackage,
    Namespace,
    PackageReference,
    RegistryPackage,
)

_SEGMENT_RE = re.compile(r"^[a-zA-Z0-9_]+$")

# Characters rejected in a path on any platform (plus ASCII control chars).
_INVALID_PATH_RE = re.compile(r'[<>:"|?*\x00-\x1f]')

_MAX_PACKAGE_NAME_LENGTH = 214
_RESERVED_PACKAGE_NAMES = frozenset({"node_modules", "favicon.ico"})
_SCOPED_NAME_RE = re.compile(r"^@([^/]+)/([^/]+)$")

LATEST = "latest"


# ---------------------------------------------------------------------------
# Namespace
# ---------------------------------------------------------------------------


def validate_namespace(raw: str) -> Namespace:
    """Validate a dotted library name such as ``my.demo.components``.

    Raises:
        InputValidationError: ``TooFewSegments`` when no namespace is given,
            ``InvalidCharacters`` when a segment is not alphanumeric.
    """
    parts = raw.split(".")
    if len(parts) < 2:
        raise InputValidationError(
            ErrorCode.TOO_FEW_SEGMENTS,
            "A full library name is required (namespace included), please use at "
            "least one '.' character - e.g. 'demo.components' or "
            f"'my.demo.components' is ok, but just '{raw}' is not.",
        )

    if any(not _SEGMENT_RE.match(part) for part in parts):
        raise InputValidationError(
            ErrorCode.INVALID_CHARACTERS,
            "Please use alpha-numeric characters only for both the namespace "
            "parts and the library name.",
        )

    return Namespace(segments=tuple(parts))


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


def is_semver(value: str) -> bool:
    """Return ``True`` if *value* is a strict ``MAJOR.MINOR.PATCH`` version."""
    return semantic_version.validate(value)


def validate_framework_version(raw: str, min_version: str) -> str:
    """Check that *raw* is a semantic version no lower than *min_version*.

    Raises:
        InputValidationError: ``NotSemver`` or ``BelowMinimum``.
    """
    value = raw.strip()
    if not is_semver(value):
        raise InputValidationError(
            ErrorCode.NOT_SEMVER,
            f"'{raw}' is not a valid semantic version (expected e.g. {min_version}).",
        )

    if semantic_version.Version(value) < semantic_version.Version(min_version):
        raise InputValidationError(
            ErrorCode.BELOW_MINIMUM,
            f"Framework requires the min version {min_version}!",
        )

    return value


# ---------------------------------------------------------------------------
# Package specifiers
# ---------------------------------------------------------------------------


def extract_package_name_and_version(spec: str) -> tuple[str, str]:
    """Split ``[@scope/]name[@version]`` into ``(name, version)``.

    The version defaults to ``"latest"``.  Only the first ``/`` separates the
    scope, and only the first ``@`` after it separates the version::

        extract_package_name_and_version("pkg@1.2.3")   -> ("pkg", "1.2.3")
        extract_package_name_and_version("@scope/pkg")  -> ("@scope/pkg", "latest")
    """
    scope, sep, rest = spec.partition("/")
    if not sep:
        scope, rest = "", spec

    name, at, version = rest.partition("@")
    if not at:
        version = LATEST

    return (f"{scope}/{name}" if scope else name), version


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` if *name* may be published as a new npm package."""
    if not name or name != name.strip():
        return False
    if len(name) > _MAX_PACKAGE_NAME_LENGTH:
        return False
    if name.startswith((".", "_")):
        return False
    if name.lower() in _RESERVED_PACKAGE_NAMES:
        return False
    if name != name.lower():
        return False
    if re.search(r"[~'!()*]", name.split("/")[-1]):
        return False

    if quote(name, safe="") == name:
        return True

    scoped = _SCOPED_NAME_RE.match(name)
    if scoped:
        scope, package = scoped.groups()
        return quote(scope, safe="") == scope and quote(package, safe="") == package

    return False


def is_valid_path(path: str) -> bool:
    """Return ``True`` if *path* contains no characters illegal in a file path."""
    return bool(path) and not _INVALID_PATH_RE.search(path)


def _is_parent_relative(raw: str) -> bool:
    return raw.startswith("../") or raw.startswith(".." + os.sep)


def resolve_package_reference(raw: str, destination_root: str | Path) -> PackageReference:
    """Resolve a web components package answer.

    ``../some-dir`` style answers point to a local package relative to
    *destination_root*; anything else is treated as a registry package
    specifier.

    Raises:
        InputValidationError: With the code of the first rule that fails.
    """
    value = raw.strip()

    if value.startswith("."):
        return _resolve_local_package(value, Path(destination_root))

    name, version = extract_package_name_and_version(value)
    if not is_valid_package_name(name):
        raise InputValidationError(
            ErrorCode.INVALID_PACKAGE_NAME, f"Invalid package name: '{name}'"
        )

    if version != LATEST and not is_semver(version):
        raise InputValidationError(
            ErrorCode.INVALID_PACKAGE_VERSION, f"Invalid package version: '{version}'"
        )

    return RegistryPackage(name=name, version=version)


def _resolve_local_package(value: str, destination_root: Path) -> LocalPackage:
    if not _is_parent_relative(value):
        raise InputValidationError(
            ErrorCode.INVALID_RELATIVE_PATH, f"Invalid path - must start with: ..{os.sep}"
        )

    if not is_valid_path(value):
        raise InputValidationError(ErrorCode.INVALID_PATH_SYNTAX, "Invalid path")

    # Normalised lexically: the destination itself may not exist yet.
    descriptor_path = Path(os.path.normpath(destination_root / value / "package.json"))
    try:
        descriptor = json.loads(descriptor_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        raise InputValidationError(
            ErrorCode.PACKAGE_DESCRIPTOR_UNREADABLE,
            f"Cannot read package.json for {value}, please set a path, "
            f"relative to: {destination_root}",
        ) from None

    name = descriptor.get("name") if isinstance(descriptor, dict) else None
    if not name or not isinstance(name, str):
        raise InputValidationError(
            ErrorCode.PACKAGE_DESCRIPTOR_MISSING_NAME,
            f'The package file: {descriptor_path} does not have a "name" property',
        )

    return LocalPackage(path=value, name=name)
