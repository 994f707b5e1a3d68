from __future__ import annotations

from typing import Callable, Iterable, List


def scripted_ask(answers: Iterable[str]) -> Callable[[str], str]:
    """Return an ``ask`` callable that replays ``answers`` then raises EOFError."""

    pending: List[str] = list(answers)

    def ask(prompt: str) -> str:
        if not pending:
            raise EOFError(prompt)
        return pending.pop(0)

    return ask
