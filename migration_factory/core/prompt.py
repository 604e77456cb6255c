"""
Operator Prompt

Yes/no confirmation, default "no". The input source is injected so a run can
be scripted (tests, CI) instead of reading the terminal.
"""

import re
from typing import Callable, Iterable, List, Optional

_AFFIRMATIVE = re.compile(r"^y(es)?$", re.IGNORECASE)


def is_affirmative(answer: Optional[str]) -> bool:
    """Only `y` / `yes` (any case, surrounding whitespace ignored) count as yes."""
    if answer is None:
        return False
    return bool(_AFFIRMATIVE.match(answer.strip()))


class OperatorPrompt:
    """Blocks on one line of input per question. No timeout."""

    def __init__(self, input_fn: Callable[[str], str] = input, output=None):
        self.input_fn = input_fn
        self.output = output

    def ask(self, question: str) -> Optional[str]:
        """Raw answer, or None when input is closed."""
        if self.output is not None:
            self.output.write(question)
            self.output.flush()
            question = ""
        try:
            return self.input_fn(question)
        except EOFError:
            return None

    def confirm(self, question: str) -> bool:
        return is_affirmative(self.ask(question))


class ScriptedPrompt(OperatorPrompt):
    """
    Replays a fixed list of answers; an exhausted script answers "no".

    Usage:
        prompt = ScriptedPrompt(["y", "n"])
        prompt.confirm("Continue? ")   # → True
        prompt.asked                   # → ["Continue? "]
    """

    def __init__(self, answers: Iterable[str] = ()):
        self._answers = list(answers)
        self.asked: List[str] = []
        super().__init__(input_fn=self._next_answer, output=None)

    def _next_answer(self, question: str) -> str:
        self.asked.append(question)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

