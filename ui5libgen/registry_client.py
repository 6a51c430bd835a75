"""Async client for the npm registry.

Wraps the registry's package document endpoint (``GET /<package>``) with
timeout handling and structured responses.  Nothing here raises: every
failure comes back as a ``LookupResult`` with ``success=False`` so callers can
fall back to a static value.

Typical usage::

    client = RegistryClient()
    result = await client.latest_version("@openui5/sap.ui.core")
    if result.success:
        print(result.version)
"""

from __future__ import annotations

from typing import Any

import httpx
import semantic_version
from pydantic import BaseModel, Field


class LookupResult(BaseModel):
    """Structured response from a registry version lookup."""

    package: str = Field(..., description="Package that was looked up")
    version: str | None = Field(default=None, description="Highest published version")
    success: bool = Field(default=True, description="Whether the lookup succeeded")
    error: str | None = Field(default=None, description="Error message on failure")


class RegistryClient:
    """Async client for an npm-compatible registry.

    Uses ``httpx.AsyncClient`` for non-blocking HTTP.  Only the package
    document is read; tarballs are never downloaded.
    """

    def __init__(self, base_url: str = "https://registry.npmjs.org", timeout: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 3.0)),
            headers={"Accept": "application/json"},
        )

    @staticmethod
    def _document_path(package: str) -> str:
        """Scoped names keep their ``@`` but the slash must be escaped."""
        return "/" + package.replace("/", "%2F")

    @staticmethod
    def highest_version(versions: list[str]) -> str | None:
        """Return the highest stable semantic version in *versions*.

        Invalid strings are ignored.  Pre-releases are only considered when
        no stable release exists.
        """
        parsed: list[semantic_version.Version] = []
        for raw in versions:
            try:
                parsed.append(semantic_version.Version(raw))
            except ValueError:
                continue

        if not parsed:
            return None

        stable = [v for v in parsed if not v.prerelease]
        return str(max(stable or parsed))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_document(self, package: str) -> dict[str, Any]:
        """Fetch the raw package document.

        Raises:
            httpx.HTTPError: On connection problems, timeouts or non-2xx replies.
        """
        async with self._client() as client:
            response = await client.get(self._document_path(package))
            response.raise_for_status()
            return response.json()

    async def latest_version(self, package: str) -> LookupResult:
        """Look up the highest published version of *package*.

        Returns:
            A ``LookupResult`` carrying the version or an error description.
        """
        try:
            data = await self.fetch_document(package)
        except httpx.ConnectError:
            return LookupResult(
                package=package,
                success=False,
                error=f"Cannot connect to the registry at {self.base_url}.",
            )
        except httpx.TimeoutException:
            return LookupResult(
                package=package,
                success=False,
                error=f"Registry lookup timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return LookupResult(
                package=package,
                success=False,
                error=f"Registry returned HTTP {exc.response.status_code} for {package}.",
            )
        except Exception as exc:  # noqa: BLE001
            return LookupResult(
                package=package,
                success=False,
                error=f"Unexpected error during registry lookup: {exc}",
            )

        versions = data.get("versions") if isinstance(data, dict) else None
        version = self.highest_version(list(versions or {}))
        if version is None:
            return LookupResult(
                package=package,
                success=False,
                error=f"No valid semantic versions published for {package}.",
            )
        return LookupResult(package=package, version=version)
