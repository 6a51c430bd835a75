"""Interactive prompt sequence.

Asks the questions in a fixed order and feeds each answer through its
validator.  Invalid answers are rejected in place (Rich repeats the question
with the validator's message).  Answers that later questions depend on, the
framework floor and the destination root, are passed forward as plain
arguments.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import IO, Any, TypeVar

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt
from rich.text import Text

from ui5libgen.config import FRAMEWORK_SPECS, Framework
from ui5libgen.resolver.defaults import VersionLookup, resolve_default_version
from ui5libgen.resolver.models import (
    InputValidationError,
    LibraryConfig,
    Namespace,
    PackageReference,
)
from ui5libgen.resolver.validators import (
    resolve_package_reference,
    validate_framework_version,
    validate_namespace,
)
from ui5libgen.utils import console as default_console

T = TypeVar("T")

DEFAULT_NAMESPACE = "demo.components"
DEFAULT_WEB_COMPONENTS_PACKAGE = "../my-package"


class _LineInput:
    """Read answers from a scripted stream the way a terminal delivers them.

    ``input()`` drops the line ending and raises ``EOFError`` when input is
    exhausted; ``stream.readline()`` does neither.
    """

    @classmethod
    def get_input(
        cls,
        console: Console,
        prompt: Any,
        password: bool,
        stream: IO[str] | None = None,
    ) -> str:
        value = super().get_input(console, prompt, password, stream=stream)  # type: ignore[misc]
        if stream is None:
            return value
        if not value:
            raise EOFError
        return value.rstrip("\r\n")


class TextPrompt(_LineInput, Prompt):
    """Free text question."""


class ConfirmPrompt(_LineInput, Confirm):
    """Yes/no question."""


class ValidatedPrompt(_LineInput, Prompt):
    """A Rich ``Prompt`` that runs a validator on every answer.

    A blank answer is replaced by *fallback* and validated like any other
    answer, so an unusable default is rejected and asked again.  The fallback
    is only shown in the question; it is never handed to Rich as ``default``
    because Rich returns a default without validating it.
    """

    def __init__(
        self,
        prompt: str = "",
        *,
        validator: Callable[[str], Any],
        fallback: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(prompt, **kwargs)
        self.validator = validator
        self.fallback = fallback

    def make_prompt(self, default: Any) -> Text:
        if default is ... and self.fallback is not None:
            default = self.fallback
        return super().make_prompt(default)

    def process_response(self, value: str) -> str:
        value = value.strip()
        if not value and self.fallback is not None:
            value = self.fallback
        try:
            self.validator(value)
        except InputValidationError as exc:
            raise InvalidResponse(f"[prompt.invalid]{exc}") from exc
        return value


class PromptSession:
    """Runs the generator's questions and builds a ``LibraryConfig``.

    Args:
        output_dir: Directory the library is created in (or inside of, when
            the user asks for a new directory).
        lookup: Optional registry capability used for the version default.
        default_author: Suggested answer for the author prompt.
        console: Console used for questions and error messages.
        stream: Input stream; ``None`` reads from the terminal.
    """

    def __init__(
        self,
        output_dir: str | Path,
        *,
        lookup: VersionLookup | None = None,
        default_author: str = "",
        console: Console | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.lookup = lookup
        self.default_author = default_author
        self.console = console or default_console
        self.stream = stream

    # -- Prompt primitives -------------------------------------------------

    def _ask(self, message: str, validator: Callable[[str], T], default: str) -> T:
        prompt = ValidatedPrompt(
            message, console=self.console, validator=validator, fallback=default
        )
        answer = prompt(stream=self.stream)
        return validator(answer)

    def _ask_text(self, message: str, default: str) -> str:
        return TextPrompt.ask(
            message, console=self.console, default=default, stream=self.stream
        )

    def _ask_choice(self, message: str, choices: list[str], default: str) -> str:
        return TextPrompt.ask(
            message,
            console=self.console,
            choices=choices,
            default=default,
            stream=self.stream,
        )

    def _confirm(self, message: str, default: bool) -> bool:
        return ConfirmPrompt.ask(
            message, console=self.console, default=default, stream=self.stream
        )

    # -- Individual questions ----------------------------------------------

    def ask_namespace(self) -> Namespace:
        return self._ask(
            "Choose the [italic]technical[/italic] name for this library",
            validate_namespace,
            DEFAULT_NAMESPACE,
        )

    def ask_framework(self) -> Framework:
        choices = [framework.value for framework in Framework]
        answer = self._ask_choice("Which framework do you want to use?", choices, choices[0])
        return Framework(answer)

    async def ask_framework_version(self, framework: Framework) -> str:
        min_version = FRAMEWORK_SPECS[framework].min_version
        default = await resolve_default_version(framework, self.lookup)
        return self._ask(
            "Which framework version do you want to use?",
            partial(validate_framework_version, min_version=min_version),
            default,
        )

    def ask_newdir(self) -> bool:
        return self._confirm("Would you like to create a new directory for the library?", True)

    def ask_web_components_package(self, destination: Path) -> tuple[PackageReference, str]:
        message = (
            "Choose a Web Components Package (and optionally version) to integrate.\n\n"
            "Examples:\n"
            "[green]some-package[/green], [green]@my/my-package[/green] "
            "(no version specified, \"latest\" will be used),\n"
            "[green]some-package@2.0.1[/green], [green]@my/my-package@3.0.0[/green] "
            "(specific version specified)\n"
            "[green]../my-package[/green] (path to a local package, must be relative to: "
            f"[blue]{destination}[/blue])\n"
        )
        captured: list[str] = []

        def validator(raw: str) -> PackageReference:
            captured.append(raw)
            return resolve_package_reference(raw, destination)

        reference = self._ask(message, validator, DEFAULT_WEB_COMPONENTS_PACKAGE)
        return reference, captured[-1]

    def ask_author(self) -> str:
        return self._ask_text("Who is the author of the library?", self.default_author)

    def ask_initrepo(self) -> bool:
        return self._confirm("Would you like to initialize a git repository?", True)

    # -- Full sequence -----------------------------------------------------

    def destination_for(self, namespace: Namespace, newdir: bool) -> Path:
        """The library lands in ``<output>/<namespace>`` or directly in ``<output>``."""
        if newdir:
            return self.output_dir / namespace.dotted
        return self.output_dir

    async def run(self) -> LibraryConfig:
        """Ask every question in order and return the frozen result."""
        namespace = self.ask_namespace()
        framework = self.ask_framework()
        framework_version = await self.ask_framework_version(framework)
        newdir = self.ask_newdir()
        destination = self.destination_for(namespace, newdir)
        package, package_input = self.ask_web_components_package(destination)
        author = self.ask_author()
        initrepo = self.ask_initrepo()

        return LibraryConfig(
            namespace=namespace,
            framework=framework,
            framework_version=framework_version,
            web_components_package=package,
            web_components_input=package_input,
            author=author,
            newdir=newdir,
            initrepo=initrepo,
            destination=destination,
        )
