# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Explicit command registry for cmdtree.

The registry is the single source of truth for how commands are arranged in a
tree. Commands are registered up front as *descriptors*: a name, a parent
descriptor and a zero-argument factory. Nothing is constructed at registration
time; `resolve()` calls the factory the first time a node is needed (to dispatch
into it or to render its help) and caches the instance.

Key Features:
- Static, explicit registration; no module scanning or type introspection
- Factory closures or `CommandNode` subclasses as constructors
- Lazy, cached construction of nodes
- Children always listed in name order
- Command paths recomputed from the parent relation on every call

Example Usage:
    registry = CommandRegistry()
    docker = registry.register(DockerCommand)
    image = registry.register(ImageCommand, parent=docker)
    registry.register(lambda: build_pull(), parent=image, name="pull")

    root = registry.resolve(registry.root)
    await root.run(["image", "pull", "--tag", "latest", "myrepo"])
"""
from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterator

from cmdtree.exceptions import ConfigurationError
from cmdtree.logger import logger
from cmdtree.protocols import CommandFactory, IoService

if TYPE_CHECKING:
    from cmdtree.command import CommandNode

COMMAND_SUFFIX = "Command"


def derive_command_name(factory: Any) -> str:
    """
    Derive a command's display name from its class.

    The conventional `Command` suffix is stripped and the rest lower-cased:
    `ImagePullCommand` -> `imagepull`. Partials are unwrapped to their class.

    Raises:
        ConfigurationError: If no name can be derived from `factory`.
    """
    while isinstance(factory, functools.partial):
        factory = factory.func
    if not inspect.isclass(factory):
        raise ConfigurationError(
            f"Cannot derive a command name from {factory!r}; pass name= explicitly"
        )
    name = factory.__name__.removesuffix(COMMAND_SUFFIX).lower()
    if not name:
        raise ConfigurationError(
            f"Cannot derive a command name from class '{factory.__name__}'"
        )
    return name


def declared_command_name(factory: Any) -> str | None:
    """
    Name a `CommandNode` subclass will carry once built, or None for other factories.

    A non-empty `name` field default wins over the name derived from the class.
    """
    from cmdtree.command import CommandNode

    if not inspect.isclass(factory) or not issubclass(factory, CommandNode):
        return None
    if factory is CommandNode:
        return None
    return factory.model_fields["name"].default or derive_command_name(factory)


@dataclass(frozen=True, eq=False)
class CommandDescriptor:
    """
    Registry handle of a command that may not be constructed yet.

    Attributes:
        name (str): The command's display name, unique among its siblings.
        factory (CommandFactory): Zero-argument constructor.
        parent (CommandDescriptor | None): The owning command, None for the root.
    """

    name: str
    factory: CommandFactory
    parent: CommandDescriptor | None = None

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        parent = self.parent.name if self.parent else None
        return f"CommandDescriptor(name={self.name!r}, parent={parent!r})"


class CommandRegistry:
    """
    Holds command descriptors, their parent relation and constructed nodes.

    Methods:
        register(): Add a command under a parent.
        command(): Decorator form of `register()` for command classes.
        children_of(): Child descriptors, sorted by name.
        parent_of(): Parent descriptor, or None for the root.
        path_of(): Descriptors from the root down to a command.
        resolve(): Construct (once) and return the node behind a descriptor.
        find(): Descriptor at a name path below the root.
        get(): Resolve a node by its name path below the root.
    """

    def __init__(self, io_service: IoService | None = None) -> None:
        self.io_service: IoService | None = io_service
        self._descriptors: list[CommandDescriptor] = []
        self._children: dict[CommandDescriptor | None, list[CommandDescriptor]] = {}
        self._nodes: dict[CommandDescriptor, CommandNode] = {}

    def register(
        self,
        factory: CommandFactory | CommandNode,
        parent: CommandDescriptor | None = None,
        name: str | None = None,
    ) -> CommandDescriptor:
        """
        Register a command.

        Args:
            factory: A zero-argument callable building the node (a `CommandNode`
                subclass or a closure), or an already constructed node.
            parent (CommandDescriptor | None): Owning command; None for the root.
            name (str | None): Display name. Derived from the class when omitted.

        Returns:
            CommandDescriptor: The handle of the new command.

        Raises:
            ConfigurationError: On a second root, an unknown parent, or a name
                already used by a sibling, or when `name` disagrees with the
                name a command class declares.
        """
        from cmdtree.command import CommandNode

        instance: CommandNode | None = None
        if isinstance(factory, CommandNode):
            instance = factory
            name = name or instance.name
            factory = functools.partial(_return_instance, instance)
        elif not callable(factory):
            raise ConfigurationError(f"Command factory must be callable, got {factory!r}")

        declared_name = declared_command_name(factory)
        if name is None:
            name = declared_name or derive_command_name(factory)
        elif declared_name and name != declared_name:
            raise ConfigurationError(
                f"Command named '{declared_name}' registered as '{name}'"
            )
        if not name or name.startswith("-") or any(char.isspace() for char in name):
            raise ConfigurationError(f"Invalid command name: {name!r}")

        if parent is not None and parent not in self._descriptors:
            raise ConfigurationError(
                f"Parent command '{parent.name}' is not registered in this registry"
            )
        siblings = self._children.setdefault(parent, [])
        if parent is None and siblings:
            raise ConfigurationError(
                f"Registry already has a root command '{siblings[0].name}'"
            )
        if any(sibling.name == name for sibling in siblings):
            raise ConfigurationError(
                f"Command name '{name}' is already registered under "
                f"'{parent.name if parent else '<root>'}'"
            )

        descriptor = CommandDescriptor(name=name, factory=factory, parent=parent)
        if instance is not None:
            self._bind(descriptor, instance)
        siblings.append(descriptor)
        self._descriptors.append(descriptor)
        logger.debug(
            "Registered command '%s' under '%s'",
            name,
            parent.name if parent else "<root>",
        )
        return descriptor

    def use_io_service(self, io_service: IoService) -> None:
        """
        Share `io_service` with every node that was built without its own.

        Nodes constructed later pick it up when they are bound.
        """
        self.io_service = io_service
        for node in self._nodes.values():
            node.inherit_io_service(io_service)

    def command(
        self,
        parent: CommandDescriptor | None = None,
        name: str | None = None,
    ) -> Callable[[type], type]:
        """Decorator registering a `CommandNode` subclass. Returns the class unchanged."""

        def decorator(command_class: type) -> type:
            self.register(command_class, parent=parent, name=name)
            return command_class

        return decorator

    @property
    def root(self) -> CommandDescriptor:
        roots = self._children.get(None, [])
        if not roots:
            raise ConfigurationError("Registry has no root command")
        return roots[0]

    def children_of(self, descriptor: CommandDescriptor) -> list[CommandDescriptor]:
        """Child descriptors of `descriptor`, sorted by name."""
        return sorted(self._children.get(descriptor, []), key=lambda child: child.name)

    def parent_of(self, descriptor: CommandDescriptor) -> CommandDescriptor | None:
        return descriptor.parent

    def path_of(self, descriptor: CommandDescriptor) -> list[CommandDescriptor]:
        """Descriptors from the root down to `descriptor`."""
        path: list[CommandDescriptor] = []
        current: CommandDescriptor | None = descriptor
        while current is not None:
            path.append(current)
            current = self.parent_of(current)
        return list(reversed(path))

    def resolve(self, descriptor: CommandDescriptor) -> CommandNode:
        """
        Return the node behind `descriptor`, constructing it on first use.

        Raises:
            ConfigurationError: If the factory does not return a `CommandNode`
                or returns one whose name disagrees with the descriptor.
        """
        from cmdtree.command import CommandNode

        node = self._nodes.get(descriptor)
        if node is not None:
            return node
        if descriptor not in self._descriptors:
            raise ConfigurationError(
                f"Command '{descriptor.name}' is not registered in this registry"
            )
        node = descriptor.factory()
        if not isinstance(node, CommandNode):
            raise ConfigurationError(
                f"Factory for '{descriptor.name}' returned {type(node).__name__}, "
                "expected a CommandNode"
            )
        self._bind(descriptor, node)
        logger.debug("Constructed command '%s'", descriptor.name)
        return node

    def _bind(self, descriptor: CommandDescriptor, node: CommandNode) -> None:
        node.bind(self, descriptor)
        self._nodes[descriptor] = node

    def find(self, *names: str) -> CommandDescriptor:
        """
        Return the descriptor at the names below the root, e.g. `find("image")`.

        Raises:
            ConfigurationError: If a name on the path is not registered.
        """
        descriptor = self.root
        for name in names:
            for child in self.children_of(descriptor):
                if child.name == name:
                    descriptor = child
                    break
            else:
                raise ConfigurationError(
                    f"No command '{name}' under '{descriptor.name}'"
                )
        return descriptor

    def get(self, *names: str) -> CommandNode:
        """Resolve the node at the names below the root, e.g. `get("image", "pull")`."""
        return self.resolve(self.find(*names))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __contains__(self, item: object) -> bool:
        return item in self._descriptors

    def __str__(self) -> str:
        return f"CommandRegistry(commands={len(self._descriptors)})"


def _return_instance(instance: CommandNode) -> CommandNode:
    return instance
