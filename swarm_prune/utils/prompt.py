from __future__ import annotations

from typing import Callable

CONFIRM_QUESTION = "Are you sure, you want to do this?"

InputFn = Callable[[str], str]


def ask_to_confirm(question: str = CONFIRM_QUESTION, *, input_fn: InputFn | None = None) -> bool:
    """Ask until the answer is exactly ``y`` or ``N``.

    End of input counts as a refusal.
    """
    read = input_fn or input
    while True:
        try:
            response = read(f"{question} [y/N]: ")
        except EOFError:
            return False

        response = response.strip()
        if response == "y":
            return True
        if response == "N":
            return False


def verify_ok(force: bool, *, input_fn: InputFn | None = None) -> bool:
    if force:
        return True
    return ask_to_confirm(input_fn=input_fn)
