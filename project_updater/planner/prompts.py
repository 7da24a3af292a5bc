"""Line-based question/answer exchange with the user.

Comma-separated answers keep the user's order and repeats, and only
``y``/``yes`` (any case) count as affirmative.  There is no re-prompt on
unexpected input.
"""

from __future__ import annotations

from typing import Callable

from project_updater.utils import console

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def split_csv(text: str) -> list[str]:
    """Split a comma-separated answer into trimmed, non-empty tokens.

    Examples::

        split_csv(" a, , b ,a") -> ["a", "b", "a"]
        split_csv("") -> []
    """
    return [token.strip() for token in text.split(",") if token.strip()]


def is_affirmative(text: str) -> bool:
    """True iff *text* is ``y`` or ``yes`` once trimmed and lowercased."""
    return text.strip().lower() in AFFIRMATIVE_ANSWERS


class Prompter:
    """Blocking prompt reader.

    Wraps an ``input``-style callable (``Console.input`` by default) so tests
    can script the answers.  Once closed, further questions raise
    ``RuntimeError``; closing is idempotent.
    """

    def __init__(self, input_fn: Callable[[str], str] | None = None) -> None:
        self._input_fn = input_fn or console.input
        self.closed = False

    def ask(self, question: str) -> str:
        """Ask *question* and return the trimmed answer.

        End-of-input (closed stdin) is treated as an empty answer.
        """
        if self.closed:
            raise RuntimeError("prompter is closed")
        try:
            answer = self._input_fn(f"[yellow]? {question}[/yellow]")
        except EOFError:
            answer = ""
        return answer.strip()

    def ask_list(self, question: str) -> list[str]:
        return split_csv(self.ask(question))

    def ask_yes_no(self, question: str) -> bool:
        return is_affirmative(self.ask(f"{question} (y/n): "))

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "Prompter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
