# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for the collaborators of the cmdtree engine.

These runtime-checkable `Protocol` classes specify the expected interfaces for:
- Console I/O used to print help and errors and to read raw user input
- Factories that construct command nodes on demand for the registry

Used to support dependency injection without requiring explicit base classes.

Protocols:
- IoService: Raw, unbuffered console read/write primitives.
- CommandFactory: Zero-argument callable returning a `CommandNode`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cmdtree.command import CommandNode


@runtime_checkable
class IoService(Protocol):
    def write(self, text: str) -> None: ...

    def write_line(self, text: str = "") -> None: ...

    def write_error(self, text: str) -> None: ...

    def write_error_line(self, text: str) -> None: ...

    async def read_line(self, prompt: str = "") -> str: ...

    async def read_key(self, prompt: str = "") -> str: ...


@runtime_checkable
class CommandFactory(Protocol):
    def __call__(self) -> CommandNode: ...
