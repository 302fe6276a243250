# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Console I/O services for cmdtree commands.

- `ConsoleIoService`: writes through rich consoles (stdout for normal output,
  stderr for errors) and reads raw lines and single keys through click.
- `BufferIoService`: keeps output in memory and serves scripted input. Useful
  for tests and for embedding a command tree inside another program.

Text written through these services is printed verbatim: rich markup and
highlighting are disabled so help text with brackets such as `[TAG_OPTIONS]`
is never interpreted as styling.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Iterable

import click
from rich.console import Console

from cmdtree.console import console as default_console
from cmdtree.console import error_console as default_error_console


class ConsoleIoService:
    """
    Terminal-backed I/O service.

    Input is blocking at the terminal level, so reads run in a worker thread
    and never stall the event loop a command action runs on.

    Args:
        console (Console | None): Console used for regular output.
        error_console (Console | None): Console used for error output.
    """

    def __init__(
        self,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> None:
        self.console: Console = console or default_console
        self.error_console: Console = error_console or default_error_console

    def write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def write_line(self, text: str = "") -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def write_error(self, text: str) -> None:
        self.error_console.print(
            text, end="", style="error", markup=False, highlight=False, soft_wrap=True
        )

    def write_error_line(self, text: str) -> None:
        self.error_console.print(
            text, style="error", markup=False, highlight=False, soft_wrap=True
        )

    async def read_line(self, prompt: str = "") -> str:
        return await asyncio.to_thread(
            click.prompt,
            prompt,
            default="",
            show_default=False,
            prompt_suffix="",
        )

    async def read_key(self, prompt: str = "") -> str:
        """Return the first key pressed, without echoing it."""
        if prompt:
            self.write(prompt)
        return await asyncio.to_thread(click.getchar, False)


class BufferIoService:
    """
    In-memory I/O service.

    Args:
        lines (Iterable[str]): Lines returned by successive `read_line` calls.
        keys (Iterable[str]): Keys returned by successive `read_key` calls.
    """

    def __init__(self, lines: Iterable[str] = (), keys: Iterable[str] = ()) -> None:
        self._output: list[str] = []
        self._errors: list[str] = []
        self._lines: deque[str] = deque(lines)
        self._keys: deque[str] = deque(keys)

    @property
    def output(self) -> str:
        return "".join(self._output)

    @property
    def errors(self) -> str:
        return "".join(self._errors)

    def clear(self) -> None:
        self._output.clear()
        self._errors.clear()

    def write(self, text: str) -> None:
        self._output.append(text)

    def write_line(self, text: str = "") -> None:
        self._output.append(f"{text}\n")

    def write_error(self, text: str) -> None:
        self._errors.append(text)

    def write_error_line(self, text: str) -> None:
        self._errors.append(f"{text}\n")

    async def read_line(self, prompt: str = "") -> str:
        if prompt:
            self.write(prompt)
        if not self._lines:
            raise EOFError("No more input lines")
        return self._lines.popleft()

    async def read_key(self, prompt: str = "") -> str:
        if prompt:
            self.write(prompt)
        if not self._keys:
            raise EOFError("No more input keys")
        return self._keys.popleft()
