"""Interactive prompts on the terminal."""

import getpass
from typing import Callable, List, Sequence, Tuple, TypeVar

T = TypeVar('T')

# (title shown to the user, value returned)
Choice = Tuple[str, T]


class PromptAborted(Exception):
    """The user cancelled a prompt (Ctrl-C, end of input or empty selection)."""


class Prompter:
    """Reads answers from stdin.

    Every method raises PromptAborted when the user backs out, so callers
    only ever see usable answers.
    """

    def __init__(self, input_func: Callable[[str], str] = input,
                 secret_func: Callable[[str], str] = getpass.getpass):
        self._input = input_func
        self._secret = secret_func

    def _ask(self, read: Callable[[str], str], message: str) -> str:
        try:
            return read(message).strip()
        except (EOFError, KeyboardInterrupt):
            raise PromptAborted(message)

    def confirm(self, message: str, default: bool = True) -> bool:
        hint = '[Y/n]' if default else '[y/N]'
        while True:
            answer = self._ask(self._input, f"{message} {hint} ").lower()
            if not answer:
                return default
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            print("Please answer yes or no.")

    def text(self, message: str, error: str) -> str:
        answer = self._ask(self._input, f"{message} ")
        if not answer:
            print(error)
            raise PromptAborted(message)
        return answer

    def secret(self, message: str, error: str) -> str:
        answer = self._ask(self._secret, f"{message} ")
        if not answer:
            print(error)
            raise PromptAborted(message)
        return answer

    def _print_choices(self, message: str, choices: Sequence[Choice]):
        print(message)
        for number, (title, _) in enumerate(choices, start=1):
            print(f"  {number:>3}) {title}")

    def _parse_numbers(self, answer: str, count: int) -> List[int]:
        numbers = []
        for part in answer.replace(',', ' ').split():
            if not part.isdigit() or not 1 <= int(part) <= count:
                raise ValueError(part)
            if int(part) not in numbers:
                numbers.append(int(part))
        return numbers

    def select(self, message: str, choices: Sequence[Choice]) -> T:
        """Pick exactly one choice by its number."""
        if not choices:
            raise PromptAborted(message)
        self._print_choices(message, choices)
        while True:
            answer = self._ask(self._input, "Number> ")
            if not answer:
                raise PromptAborted(message)
            try:
                numbers = self._parse_numbers(answer, len(choices))
            except ValueError:
                numbers = []
            if len(numbers) == 1:
                return choices[numbers[0] - 1][1]
            print(f"Enter a single number between 1 and {len(choices)}.")

    def multiselect(self, message: str, choices: Sequence[Choice]) -> List[T]:
        """Pick one or more choices by number (space or comma separated)."""
        if not choices:
            raise PromptAborted(message)
        self._print_choices(message, choices)
        while True:
            answer = self._ask(self._input, "Numbers> ")
            if not answer:
                raise PromptAborted(message)
            try:
                numbers = self._parse_numbers(answer, len(choices))
            except ValueError as e:
                print(f"Not a valid choice: {e}")
                continue
            return [choices[n - 1][1] for n in numbers]
