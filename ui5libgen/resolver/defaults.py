"""Best-effort default for the framework version prompt."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import semantic_version

from ui5libgen.config import FRAMEWORK_SPECS, Framework
from ui5libgen.registry_client import LookupResult
from ui5libgen.utils import print_warning

#: Capability used to ask a registry for a package's newest version.
VersionLookup = Callable[[str], Awaitable[LookupResult]]


async def resolve_default_version(
    framework: Framework,
    lookup: VersionLookup | None = None,
    timeout: float = 10.0,
) -> str:
    """Return the version offered as default for *framework*.

    Asks *lookup* for the newest release of the framework's lookup package.
    Whatever goes wrong (no lookup given, an error result, an exception, a
    timeout, a version below the supported floor) the framework's static
    minimum version is returned instead.  This function never raises.
    """
    spec = FRAMEWORK_SPECS[framework]
    if lookup is None:
        return spec.min_version

    try:
        result = await asyncio.wait_for(lookup(spec.lookup_package), timeout=timeout)
    except asyncio.TimeoutError:
        print_warning(
            f"Looking up the latest {framework.value} version timed out; "
            f"using {spec.min_version}."
        )
        return spec.min_version
    except Exception as exc:  # noqa: BLE001
        print_warning(
            f"Could not look up the latest {framework.value} version ({exc}); "
            f"using {spec.min_version}."
        )
        return spec.min_version

    if not result.success or not result.version:
        print_warning(
            f"Could not look up the latest {framework.value} version "
            f"({result.error or 'no version returned'}); using {spec.min_version}."
        )
        return spec.min_version

    if not semantic_version.validate(result.version) or semantic_version.Version(
        result.version
    ) < semantic_version.Version(spec.min_version):
        print_warning(
            f"Registry offered {result.version} for {framework.value}, which is not "
            f"usable; using {spec.min_version}."
        )
        return spec.min_version

    return result.version
