from __future__ import annotations

import re
import sys
from typing import Protocol, TextIO

from conquest.core.errors import InvalidInputError

# Optional minus sign, ASCII digits only ("+3", "1_0" and non-ASCII digits are rejected).
_INT_TOKEN = re.compile(r"-?[0-9]+")


def _parse_int(token: str) -> int | None:
    if _INT_TOKEN.fullmatch(token) is None:
        return None
    return int(token)


class GameIO(Protocol):
    """What the game loop needs from a front end.

    Every prompt raises `EOFError` once input is exhausted.
    """

    def show(self, text: str) -> None:  # pragma: no cover
        ...

    def prompt_line(self, label: str) -> str:  # pragma: no cover
        ...

    def prompt_non_negative_int(self, label: str) -> int:  # pragma: no cover
        ...

    def prompt_int(self, label: str) -> int:  # pragma: no cover
        ...

    def discard_line(self) -> None:  # pragma: no cover
        ...

    def wait_for_enter(self) -> None:  # pragma: no cover
        ...


class ConsoleIO:
    """Line-oriented terminal front end.

    Integers are read token by token, so "0 2" on one line answers two prompts.
    Anything left on a line is dropped by `discard_line()`.
    """

    def __init__(self, *, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._pending: list[str] = []

    def _read_line(self) -> str:
        line = self._in.readline()
        if line == "":
            raise EOFError("Input closed")
        return line

    def _next_token(self) -> str:
        # Blank lines are skipped, like scanning for the next number.
        while not self._pending:
            self._pending = self._read_line().split()
        return self._pending.pop(0)

    def _write_label(self, label: str) -> None:
        self._out.write(label)
        self._out.flush()

    def show(self, text: str) -> None:
        print(text, file=self._out)

    def prompt_line(self, label: str) -> str:
        self.discard_line()
        self._write_label(label)
        return self._read_line().rstrip("\r\n").rstrip()

    def prompt_non_negative_int(self, label: str) -> int:
        self._write_label(label)
        while True:
            value = _parse_int(self._next_token())
            if value is not None and value >= 0:
                self.discard_line()
                return value
            self.discard_line()
            self._write_label("Invalid value. Enter a non-negative integer: ")

    def prompt_int(self, label: str) -> int:
        self._write_label(label)
        value = _parse_int(self._next_token())
        if value is None:
            self.discard_line()
            raise InvalidInputError("Invalid input.")
        return value

    def discard_line(self) -> None:
        self._pending.clear()

    def wait_for_enter(self) -> None:
        self.discard_line()
        self._write_label("\nPress ENTER to continue...")
        self._read_line()
