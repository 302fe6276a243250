# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process entry point wrapper for cmdtree command trees.

`CommandLineApp` runs the root command of a registry against `sys.argv` and
maps the outcome to a process exit code:

- 0: the command completed, or help was printed
- 1: a cmdtree error (bad option, unknown command, violated requirement,
  invalid declaration, or a `CommandActionError` raised by an action)
- 130: interrupted by the user

Errors are printed through the app's `IoService`, never raised to the caller.
Exceptions that are not cmdtree errors propagate unchanged.

Example:
    registry = CommandRegistry()
    registry.register(DockerCommand)
    ...
    if __name__ == "__main__":
        CommandLineApp(registry).main()
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import Sequence

from cmdtree.command import CommandNode
from cmdtree.exceptions import CmdTreeError, UnknownCommandError
from cmdtree.io_service import ConsoleIoService
from cmdtree.logger import logger
from cmdtree.protocols import IoService
from cmdtree.registry import CommandRegistry

VERBOSE_FLAG = "--verbose"


class CommandLineApp:
    """
    Runs a command tree as a program.

    Args:
        registry (CommandRegistry): The registry holding the command tree.
        io_service (IoService | None): Where errors are reported. When given, it
            is also shared with every command built without its own, so help
            and errors go to the same place.
        root (CommandNode | None): Node to start from. Defaults to the
            registry's root command.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        io_service: IoService | None = None,
        root: CommandNode | None = None,
    ) -> None:
        self.registry = registry
        self.io_service: IoService = (
            io_service or registry.io_service or ConsoleIoService()
        )
        if io_service is not None:
            registry.use_io_service(io_service)
        self._root = root

    @property
    def root(self) -> CommandNode:
        if self._root is None:
            self._root = self.registry.resolve(self.registry.root)
        return self._root

    def apply_global_flags(self, argv: list[str]) -> list[str]:
        """Consume app-level flags that precede the root command's own tokens."""
        if argv and argv[0] == VERBOSE_FLAG:
            logging.getLogger("cmdtree").setLevel(logging.DEBUG)
            for handler in logging.getLogger().handlers:
                if not isinstance(handler, logging.FileHandler):
                    handler.setLevel(logging.DEBUG)
            logger.debug("Verbose logging enabled")
            return argv[1:]
        return argv

    def report_error(self, error: CmdTreeError) -> None:
        self.io_service.write_error_line(str(error))
        if isinstance(error, UnknownCommandError):
            self.io_service.write_error_line(
                f"Run '{error.path} --help' for a list of commands."
            )

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """
        Run the root command and return the process exit code.

        Args:
            argv (Sequence[str] | None): Arguments without the program name.
                Defaults to `sys.argv[1:]`.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        args = self.apply_global_flags(args)
        try:
            root = self.root
            await root.run(args)
        except CmdTreeError as error:
            logger.debug("Command failed: %s", error, exc_info=True)
            self.report_error(error)
            return 1
        except (KeyboardInterrupt, asyncio.CancelledError):
            logger.info("Interrupted. Exiting.")
            return 130
        return 0

    def main(self, argv: Sequence[str] | None = None) -> None:
        """Run the app in a fresh event loop and exit the process."""
        sys.exit(asyncio.run(self.run(argv)))
