"""Command-line entry point.

Runs the whole generator: welcome banner, prompts, persisted configuration
record, template materialization, optional git repository, next steps.

Usage::

    ui5libgen
    ui5libgen --output ./libs --offline
    python -m ui5libgen --embedded
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from rich.panel import Panel

from ui5libgen.config import GeneratorConfig
from ui5libgen.git import GitError, default_author, init_repository
from ui5libgen.materializer import MaterializeError, TemplateMaterializer
from ui5libgen.registry_client import RegistryClient
from ui5libgen.resolver import LibraryConfig, PromptSession
from ui5libgen.store import SETUP_COMPLETED, ConfigStore
from ui5libgen.utils import (
    console,
    print_banner,
    print_error,
    print_section,
    print_success,
    print_summary_table,
    print_warning,
)

DISPLAY_NAME = "Create a new OpenUI5/SAPUI5 library with Web Components Enablement support"

NEXT_STEPS = ("npm i", "npm run ui5:prebuild", "npm run generate", "npm run start")


class Generator:
    """Drives one generator run from prompts to the final message."""

    def __init__(self, config: GeneratorConfig, session: PromptSession | None = None) -> None:
        self.config = config
        self.session = session
        self.materializer = TemplateMaterializer(config.template_dir)

    async def _make_session(self) -> PromptSession:
        lookup = None
        if not self.config.offline:
            registry = RegistryClient(self.config.registry.url, self.config.registry.timeout)
            lookup = registry.latest_version
        return PromptSession(
            self.config.output_dir,
            lookup=lookup,
            default_author=await default_author(),
        )

    async def prompt(self) -> LibraryConfig:
        if self.session is None:
            self.session = await self._make_session()
        return await self.session.run()

    async def run(self) -> int:
        """Execute the run and return the process exit code."""
        if not self.config.embedded:
            print_banner(DISPLAY_NAME, f"Output directory: {self.config.output_dir}")

        library = await self.prompt()
        destination = library.destination

        store = ConfigStore.for_destination(destination)
        # A record left by an earlier run must not claim completion yet.
        if not await self._save(store, {**library.template_context(), SETUP_COMPLETED: False}):
            return 1

        print_section("Writing files")
        try:
            written = await self.materializer.materialize(
                library.template_context(), destination
            )
        except MaterializeError as exc:
            print_error(f"Generation failed at {exc.path}: {exc.cause}")
            return 1
        console.print(f"  [green]+[/green] {len(written)} files written to {destination}")

        if not await self._save(store, {SETUP_COMPLETED: True}):
            return 1

        if library.initrepo:
            try:
                await init_repository(destination)
            except GitError as exc:
                print_warning(f"Git repository setup failed: {exc}")

        self._print_final_summary(library)
        return 0

    @staticmethod
    async def _save(store: ConfigStore, values: dict[str, Any]) -> bool:
        """Persist *values*; report a failed write and return ``False``."""
        try:
            await store.update(values)
        except OSError as exc:
            print_error(f"Cannot write {store.path}: {exc}")
            return False
        return True

    def _print_final_summary(self, library: LibraryConfig) -> None:
        context = library.template_context()
        print_summary_table(
            {
                "Library": context["namespace"],
                "Framework": f"{context['framework']} {context['frameworkVersion']}",
                "Web Components": (
                    f"{context['webComponentsPackageName']}"
                    f"@{context['webComponentsPackageVersion']}"
                ),
                "Author": context["author"],
                "Destination": str(library.destination),
            },
            title="Library",
        )
        steps = "\n".join([f"cd {library.destination}", *NEXT_STEPS])
        console.print(
            Panel(
                f"Run:\n\n[green]{steps}[/green]\n\n"
                "You can also find these instructions in the [blue]README.md[/blue] file.",
                title="Setup Complete!",
                border_style="green",
            )
        )
        print_success("Library generated successfully!")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ui5libgen",
        description=DISPLAY_NAME,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ui5libgen\n"
            "  ui5libgen --output ./libs --offline\n"
            "  ui5libgen --embedded\n"
        ),
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory the library is generated in (default: current directory)",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Use a custom template tree instead of the bundled one",
    )
    parser.add_argument(
        "--embedded",
        action="store_true",
        help="Embedded/quiet mode: do not print the welcome banner",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Do not query the npm registry for the latest framework version",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``ui5libgen`` and ``python -m ui5libgen``."""
    args = build_parser().parse_args(argv)

    config = GeneratorConfig.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    config.embedded = config.embedded or args.embedded
    config.offline = config.offline or args.offline

    if not config.template_dir.is_dir():
        print_error(f"Template directory not found: {config.template_dir}")
        sys.exit(1)

    try:
        code = asyncio.run(Generator(config).run())
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.")
        sys.exit(1)

    if code:
        sys.exit(code)
