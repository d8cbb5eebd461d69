"""Interactive prompting with validate-and-retry loops."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import typer

from network.validation import ValidationResult, validate_amount, validate_int, validate_name

T = TypeVar("T")

PromptFn = Callable[[str], str]
EchoFn = Callable[[str], None]


def typer_prompt(text: str) -> str:
    """Ask for one line; an empty answer is returned instead of re-asked."""
    return str(typer.prompt(text, default="", show_default=False, prompt_suffix=""))


class InputReader:
    """Returns only sanitized values, re-asking the same prompt until valid.

    ``typer.Abort`` raised by the prompt (end of input, Ctrl-C) propagates
    to the caller so the command loop can flush and exit.
    """

    def __init__(self, prompt: PromptFn | None = None, echo: EchoFn | None = None) -> None:
        self.prompt = prompt or typer_prompt
        self.echo = echo or typer.echo

    def read_int(
        self,
        text: str,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int:
        return self._read(text, lambda raw: validate_int(raw, min_value, max_value))

    def read_amount(self, text: str) -> float:
        return self._read(text, validate_amount)

    def read_name(self, text: str) -> str:
        return self._read(text, validate_name)

    def _read(self, text: str, validate: Callable[[str], ValidationResult[T]]) -> T:
        while True:
            result = validate(self.prompt(text))
            if result.ok:
                return result.value
            self.echo(result.error)
