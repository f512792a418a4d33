"""Clack-style interactive prompts using Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from podscaffold.core.errors import PromptAborted

_console = Console()

_SHORTHANDS: dict[str, str] = {"y": "yes", "n": "no"}


def _print_bar(console: Console) -> None:
    console.print("[dim]│[/]")


def _read_line(console: Console) -> str:
    """Read one line of operator input. End of input aborts the run."""
    console.print("[dim]│[/]  ", end="")
    try:
        return input()
    except EOFError:
        console.print()
        raise PromptAborted("Input ended before the question was answered.") from None


def _format_choices(answers: list[str]) -> str:
    parts = [f"[underline]{escape(a)}[/]" if i == 0 else escape(a) for i, a in enumerate(answers)]
    return "\\[ " + " / ".join(parts) + " ]"


class Prompter:
    """
    Asks the operator questions and blocks until a valid answer is given.

    Invalid answers are re-asked with a short corrective message; end of input
    raises `PromptAborted`.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or _console

    def _question(self, question: str, suffix: str = "") -> None:
        self.console.print(f"[bold cyan]◆[/]  {escape(question)}?{suffix}")

    def _answered(self, value: str) -> None:
        self.console.print(f"[dim]│[/]  [yellow]{escape(value)}[/]")
        _print_bar(self.console)

    def ask_free_text(self, question: str) -> str:
        """Ask until a non-blank answer is given. There is no default."""
        self._question(question)
        while True:
            answer = _read_line(self.console).strip()
            if answer:
                _print_bar(self.console)
                return answer
            self.console.print("[dim]│[/]  [red]You need to provide an answer.[/]")

    def ask_choice(self, question: str, answers: list[str]) -> str:
        """
        Ask for one of *answers*. Matching is case-insensitive, `y`/`n` stand
        for `yes`/`no` and empty input picks the first answer.

        Returns:
            The matched answer, lower-cased.
        """
        if not answers:
            raise ValueError("answers must not be empty.")
        allowed = [a.lower() for a in answers]

        self._question(question, " " + _format_choices(answers))
        while True:
            answer = _read_line(self.console).strip().lower()
            if answer not in allowed:
                answer = _SHORTHANDS.get(answer, answer)
            if answer == "":
                answer = allowed[0]
            if answer in allowed:
                self._answered(answer)
                return answer
            self.console.print(
                f"[dim]│[/]  [red]Possible answers are[/] {_format_choices(answers)}"
            )

    def ask_with_default(self, question: str, default: str) -> str | None:
        """
        Offer *default* and ask for a replacement.

        Returns:
            `None` when the operator accepts the default with empty input,
            otherwise the trimmed, non-blank replacement.
        """
        self._question(question, f" \\[[underline]{escape(default)}[/]]")
        while True:
            raw = _read_line(self.console)
            if raw == "":
                self._answered(default)
                return None
            answer = raw.strip()
            if answer:
                self._answered(answer)
                return answer
            self.console.print("[dim]│[/]  [red]You need to input a valid value.[/]")
