"""Template tree materialization.

Provides the ``TemplateMaterializer`` class which walks every file under a
template root, renames it with the rules from :mod:`.renaming` and renders
its content as a Jinja2 template against the library's placeholder mapping.
Only ``{{ key }}`` expressions are interpreted; Jinja's statement and comment
delimiters are remapped so ``{%`` and ``{#`` in JS or Less pass through.
Binary assets are copied untouched.

Generation is not transactional: a failure part-way leaves the files written
so far in place, and existing files in the destination are overwritten.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError

from ui5libgen.config import DEFAULT_TEMPLATE_DIR
from ui5libgen.materializer.renaming import RenameRule, build_rename_rules, rename
from ui5libgen.utils import write_text

# ---------------------------------------------------------------------------
# Binary detection
# ---------------------------------------------------------------------------

BINARY_SUFFIXES = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".ico", ".webp", ".bmp",
        ".woff", ".woff2", ".ttf", ".otf", ".eot",
        ".zip", ".gz", ".tgz", ".jar", ".pdf",
    }
)

_SNIFF_BYTES = 8192


def is_binary(path: Path) -> bool:
    """Return ``True`` for known binary suffixes or content with a NUL byte."""
    if path.suffix.lower() in BINARY_SUFFIXES:
        return True
    with path.open("rb") as fh:
        return b"\x00" in fh.read(_SNIFF_BYTES)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class MaterializeError(Exception):
    """Raised when a template file cannot be rendered or written."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to generate {path}: {cause}")


# ---------------------------------------------------------------------------
# TemplateMaterializer
# ---------------------------------------------------------------------------

_BLOCK_START, _BLOCK_END = "<%ui5libgen-block", "ui5libgen-block%>"
_COMMENT_START, _COMMENT_END = "<%ui5libgen-comment", "ui5libgen-comment%>"


class TemplateMaterializer:
    """Copies a template tree into a destination, renaming and substituting.

    Every file below ``template_dir`` is emitted; directories only appear as
    parents of emitted files, so empty template directories are dropped.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            # Only ``{{ key }}`` is markup; ``{%`` and ``{#`` stay literal text.
            block_start_string=_BLOCK_START,
            block_end_string=_BLOCK_END,
            comment_start_string=_COMMENT_START,
            comment_end_string=_COMMENT_END,
        )

    # -- Enumeration -------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return every file under the template root as a POSIX relative path."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in self.template_dir.rglob("*")
            if p.is_file()
        )

    # -- Rendering ---------------------------------------------------------

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        """Render a single template file with the provided context.

        Missing placeholder keys render as empty strings.
        """
        return self.env.get_template(template).render(**context)

    async def materialize(
        self,
        context: Mapping[str, Any],
        destination: str | Path,
        *,
        rules: Sequence[RenameRule] | None = None,
    ) -> list[Path]:
        """Generate every template file under *destination*.

        Args:
            context: Placeholder mapping; ``context["libURI"]`` feeds the
                library token renaming rule unless *rules* is given.
            destination: Root directory of the generated library.
            rules: Override for the renaming rules.

        Returns:
            The written file paths.

        Raises:
            MaterializeError: On the first file that cannot be rendered or
                written.  Files written before it stay in place.
        """
        out_base = Path(destination)
        if rules is None:
            rules = build_rename_rules(str(context.get("libURI", "")))

        written: list[Path] = []
        for template in self.list_templates():
            source = self.template_dir / template
            target = out_base / rename(template, rules)
            try:
                if is_binary(source):
                    await asyncio.to_thread(_copy_file, source, target)
                else:
                    content = self.render(template, context)
                    await asyncio.to_thread(write_text, target, content)
            except (OSError, TemplateError, UnicodeDecodeError) as exc:
                raise MaterializeError(target, exc) from exc
            written.append(target)

        return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _copy_file(source: Path, target: Path) -> None:
    """Synchronous helper: create parent dirs and copy bytes."""
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
