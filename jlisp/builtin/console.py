"""Line-oriented console used by the `print` and `read` builtins."""

from __future__ import annotations

from typing import Protocol

from jlisp.errors import JLispReadError


class Console(Protocol):
    def read_line(self, prompt: str) -> str: ...

    def write_line(self, text: str) -> None: ...


class StdConsole:
    """Console bound to the process's stdin and stdout."""

    def read_line(self, prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError as ex:
            raise JLispReadError("[read] end of input") from ex

    def write_line(self, text: str) -> None:
        print(text)


class BufferedConsole:
    """In-memory console: replays scripted input lines and records output lines."""

    def __init__(self, lines: list[str] | None = None):
        self.input: list[str] = list(lines or [])
        self.output: list[str] = []
        self.prompts: list[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.input:
            raise JLispReadError("[read] end of input")
        return self.input.pop(0)

    def write_line(self, text: str) -> None:
        self.output.append(text)
