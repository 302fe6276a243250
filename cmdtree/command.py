# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandNode`, one entry in a cmdtree command tree.

A command node declares the options it accepts, the requirement rules those
options must satisfy and, optionally, an action. Children are not owned by the
node: they are registered in a `CommandRegistry` and resolved on demand, so
building the root of a large tree never constructs the whole tree.

Running a node walks the argument vector one level at a time:

1. A sole `-h` / `--help` token, or no tokens at all when
   `print_help_with_no_args` is set, prints help and stops.
2. The node's options are parsed off the front of the remaining tokens. A help
   token directly after them prints help and stops.
3. The parsed options are checked against every requirement rule; all
   violations are reported together.
4. A node with sub-commands hands the rest of the tokens to the child named by
   the first of them. A leaf runs its action with the rest as positional
   arguments.

Parse state never lives on the node. Each level of an invocation gets its own
`CommandContext`, so one tree can be run many times, even concurrently.

Example:
    class PullCommand(CommandNode):
        description: str = "Pull an image from a registry"
        options: list[OptionDefinition] = [
            OptionDefinition("--tag", "-t", "Image tag", arg_kinds=("string",)),
        ]
        args_help: str = "NAME"

        async def execute(self, context: CommandContext) -> Any:
            return f"pulling {context.args[0]}:{context.value('--tag', default='latest')}"
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from cmdtree.context import CommandContext
from cmdtree.exceptions import (
    ConfigurationError,
    RequirementViolationError,
    UnknownCommandError,
)
from cmdtree.help import render_help
from cmdtree.io_service import ConsoleIoService
from cmdtree.logger import logger
from cmdtree.parser.option import OptionDefinition
from cmdtree.parser.option_parser import OptionParser
from cmdtree.parser.parsed_option import ParsedOptions, ParseResult
from cmdtree.protocols import IoService
from cmdtree.registry import derive_command_name
from cmdtree.requirements.engine import check_requirements, validate
from cmdtree.requirements.rules import RULE_TYPES
from cmdtree.utils import ensure_async

if TYPE_CHECKING:
    from cmdtree.registry import CommandDescriptor, CommandRegistry

HELP_FLAGS = ("-h", "--help")


class CommandNode(BaseModel):
    """
    A node in the command tree.

    Subclass it and set field defaults to declare a command, or build instances
    directly inside registry factories.

    Attributes:
        description (str): One-line description shown in help.
        name (str): Display name. Derived from the class name when empty
            (`ImagePullCommand` -> `imagepull`) or from the registry descriptor
            for plain `CommandNode` instances.
        options (list[OptionDefinition]): Declared options, in help order.
        requirements (list[OptionRequirement]): Rules over the parsed options.
        options_required (bool): Whether usage shows `NAME_OPTIONS` instead of
            `[NAME_OPTIONS]`. Requires at least one declared option.
        print_help_with_no_args (bool): Print help when run with no tokens.
        args_help (str): Placeholder for a leaf's positional arguments in usage.
        action (Callable | None): Leaf action, called with the `CommandContext`.
            Sync callables are wrapped to be awaitable.
        io_service (IoService): Where help text is written. Nodes built without
            one use the registry's `io_service` once bound, if it has one.
    """

    description: str
    name: str = ""
    options: list[OptionDefinition] = Field(default_factory=list)
    requirements: list[Any] = Field(default_factory=list)
    options_required: bool = False
    print_help_with_no_args: bool = True
    args_help: str = ""
    action: Callable[..., Awaitable[Any]] | None = None
    io_service: Any = Field(default_factory=ConsoleIoService)

    _option_parser: OptionParser = PrivateAttr()
    _registry: CommandRegistry | None = PrivateAttr(default=None)
    _descriptor: CommandDescriptor | None = PrivateAttr(default=None)
    _shared_io_service: bool = PrivateAttr(default=False)

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_default=True)

    @field_validator("action", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, action: Any) -> Any:
        if action is None:
            return None
        if callable(action):
            return ensure_async(action)
        raise TypeError("Action must be a callable")

    @field_validator("requirements")
    @classmethod
    def check_rule_types(cls, requirements: list[Any]) -> list[Any]:
        for rule in requirements:
            if not isinstance(rule, RULE_TYPES):
                raise ConfigurationError(f"Not an option requirement: {rule!r}")
        return requirements

    @field_validator("io_service")
    @classmethod
    def check_io_service(cls, io_service: Any) -> Any:
        if not isinstance(io_service, IoService):
            raise TypeError(f"io_service must implement IoService, got {io_service!r}")
        return io_service

    def model_post_init(self, _: Any) -> None:
        """Build the option parser and check the declared rules."""
        self._shared_io_service = "io_service" not in self.model_fields_set
        if not self.name and type(self) is not CommandNode:
            self.name = derive_command_name(type(self))
        self._option_parser = OptionParser(self.options, command_name=self.name)
        check_requirements(self._option_parser.definitions, self.requirements)
        if self.options_required and not self._option_parser.has_options:
            raise ConfigurationError(
                f"Command '{self.name}' requires options but declares none"
            )

    def bind(self, registry: CommandRegistry, descriptor: CommandDescriptor) -> None:
        """
        Attach the node to its place in a registry. Called by the registry.

        Raises:
            ConfigurationError: If the node is already bound elsewhere or its
                name disagrees with the descriptor.
        """
        if self._descriptor is not None and self._descriptor is not descriptor:
            raise ConfigurationError(
                f"Command '{self.name}' is already registered as "
                f"'{self._descriptor.name}'"
            )
        if not self.name:
            self.name = descriptor.name
            self._option_parser.command_name = descriptor.name
        elif self.name != descriptor.name:
            raise ConfigurationError(
                f"Command named '{self.name}' registered as '{descriptor.name}'"
            )
        self._registry = registry
        self._descriptor = descriptor
        if registry.io_service is not None:
            self.inherit_io_service(registry.io_service)

    def inherit_io_service(self, io_service: IoService) -> None:
        """Use `io_service` unless one was passed when the node was built."""
        if self._shared_io_service:
            self.io_service = io_service

    @property
    def option_parser(self) -> OptionParser:
        return self._option_parser

    @property
    def definitions(self) -> tuple[OptionDefinition, ...]:
        return self._option_parser.definitions

    @property
    def has_options(self) -> bool:
        return self._option_parser.has_options

    @property
    def has_required_options(self) -> bool:
        return self.options_required

    @property
    def registry(self) -> CommandRegistry | None:
        return self._registry

    @property
    def descriptor(self) -> CommandDescriptor | None:
        return self._descriptor

    @property
    def has_sub_commands(self) -> bool:
        if self._registry is None or self._descriptor is None:
            return False
        return bool(self._registry.children_of(self._descriptor))

    def get_sub_commands(self) -> list[CommandNode]:
        """Child nodes in name order, constructing them if needed."""
        if self._registry is None or self._descriptor is None:
            return []
        return [
            self._registry.resolve(child)
            for child in self._registry.children_of(self._descriptor)
        ]

    def get_sub_command(self, name: str) -> CommandNode | None:
        if self._registry is None or self._descriptor is None:
            return None
        for child in self._registry.children_of(self._descriptor):
            if child.name == name:
                return self._registry.resolve(child)
        return None

    def command_path(self) -> list[CommandNode]:
        """Nodes from the root down to this one, recomputed on every call."""
        if self._registry is None or self._descriptor is None:
            return [self]
        return [
            self._registry.resolve(descriptor)
            for descriptor in self._registry.path_of(self._descriptor)
        ]

    @property
    def path_names(self) -> str:
        return " ".join(node.name for node in self.command_path())

    @property
    def command_args_help(self) -> str:
        """Usage placeholder for whatever follows this node's options."""
        if self.has_sub_commands:
            return "COMMAND"
        return self.args_help

    def should_print_help(self, args: Sequence[str]) -> bool:
        if not args:
            return self.print_help_with_no_args
        return len(args) == 1 and args[0] in HELP_FLAGS

    def parse_options(self, args: Sequence[str]) -> ParseResult:
        return self._option_parser.parse(args)

    def validate_options(self, options: ParsedOptions) -> None:
        """
        Raises:
            RequirementViolationError: With every violated rule, in rule order.
        """
        errors = validate(self.definitions, self.requirements, options)
        if errors:
            logger.debug(
                "[%s] %d requirement violation(s): %s",
                self.name,
                len(errors),
                [error.message for error in errors],
            )
            raise RequirementViolationError(self.path_names, errors)

    async def run(
        self,
        args: Sequence[str] | None = None,
        parent: CommandContext | None = None,
    ) -> Any:
        """
        Resolve `args` against this node and its descendants.

        Args:
            args (Sequence[str] | None): Tokens for this node, its own name excluded.
            parent (CommandContext | None): Context of the parent node, if any.

        Returns:
            Any: The leaf action's result, or None when help was printed.

        Raises:
            OptionParseError: On truncated or repeated options.
            RequirementViolationError: When parsed options break a rule.
            UnknownCommandError: When no sub-command matches.
        """
        args = list(args or [])
        if self.should_print_help(args):
            self.print_help()
            return None

        result = self.parse_options(args)
        if result.remaining and result.remaining[0] in HELP_FLAGS:
            self.print_help()
            return None

        self.validate_options(result.options)
        context = CommandContext(
            command=self,
            args=list(result.remaining),
            options=result.options,
            parent=parent,
        )
        return await self.execute(context)

    async def execute(self, context: CommandContext) -> Any:
        """
        Dispatch to a sub-command, or run the action of a leaf.

        Override this in a subclass to implement a leaf without an `action`.
        """
        if self.has_sub_commands:
            return await self.execute_sub_command(context)
        if self.action is None:
            raise ConfigurationError(
                f"Command '{self.path_names}' has neither an action nor sub-commands"
            )

        context.start_timer()
        logger.debug("[%s] Running action with args %s", self.name, context.args)
        try:
            context.result = await self.action(context)
            return context.result
        except Exception as error:
            context.exception = error
            raise error
        finally:
            context.stop_timer()
            logger.debug(context.to_log_line())

    async def execute_sub_command(self, context: CommandContext) -> Any:
        """
        Hand the remaining tokens to the child named by the first of them.

        Raises:
            UnknownCommandError: If no token is left or no child has that name.
        """
        if not context.args:
            raise UnknownCommandError(self.path_names)
        name, *rest = context.args
        sub_command = self.get_sub_command(name)
        if sub_command is None:
            raise UnknownCommandError(self.path_names, name)
        logger.debug("[%s] Dispatching to '%s' with %s", self.name, name, rest)
        return await sub_command.run(rest, parent=context)

    def get_help_text(self) -> str:
        return render_help(self)

    def print_help(self) -> None:
        logger.debug("[%s] Printing help", self.name)
        self.io_service.write(self.get_help_text())

    def __str__(self) -> str:
        return (
            f"CommandNode(name='{self.name}', description='{self.description}', "
            f"options={len(self.options)}, requirements={len(self.requirements)})"
        )
