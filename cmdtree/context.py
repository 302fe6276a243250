# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Invocation context for cmdtree commands.

A `CommandContext` is created for every command level an argument vector passes
through. It records the command, its parsed options and its positional
arguments, and links to the context of the parent command so a leaf action can
read options given to its ancestors (`docker --debug image pull ...`).

Contexts are call-scoped: the parse state of one invocation lives here rather
than on the command object, so a command tree can serve several invocations,
even concurrent ones, without them seeing each other's options.
"""
from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cmdtree.parser.parsed_option import ParsedOption, ParsedOptions


class CommandContext(BaseModel):
    """
    Represents the runtime state of one command level of an invocation.

    Attributes:
        command (CommandNode): The command handling this level.
        args (list[str]): Positional tokens left after the command's options.
        options (ParsedOptions): Options parsed for this command.
        parent (CommandContext | None): Context of the parent command, if any.
        result (Any | None): The action result, once executed.
        exception (Exception | None): The exception raised by the action, if any.
        start_time (float | None): High-resolution performance start time.
        end_time (float | None): High-resolution performance end time.
        start_wall (datetime | None): Wall-clock timestamp when execution began.
        end_wall (datetime | None): Wall-clock timestamp when execution ended.
    """

    command: Any
    args: list[str] = Field(default_factory=list)
    options: ParsedOptions = Field(default_factory=ParsedOptions)
    parent: CommandContext | None = None
    result: Any | None = None
    exception: Exception | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def name(self) -> str:
        return self.command.name

    @property
    def lineage(self) -> list[CommandContext]:
        """Contexts from the root command down to this one."""
        contexts: list[CommandContext] = []
        context: CommandContext | None = self
        while context is not None:
            contexts.append(context)
            context = context.parent
        return list(reversed(contexts))

    def find_option(self, name: str) -> ParsedOption | None:
        """Return the nearest parsed option named `name`, searching up to the root."""
        for context in reversed(self.lineage):
            parsed_option = context.options.get(name)
            if parsed_option is not None:
                return parsed_option
        return None

    def value(self, name: str, index: int = 0, default: Any = None) -> Any:
        """Typed value of the nearest option named `name`, or `default`."""
        for context in reversed(self.lineage):
            if name in context.options:
                return context.options.value(name, index, default)
        return default

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def to_log_line(self) -> str:
        """Structured flat-line format for logging."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"args={self.args!r} options={self.options.as_dict()!r} "
            f"exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        return (
            f"<CommandContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | Args: {self.args!r}>"
        )
