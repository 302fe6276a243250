import logging
from typing import Any

import pytest

from cmdtree import (
    BufferIoService,
    CommandContext,
    CommandNode,
    CommandRegistry,
    Exclusive,
    IfPresentThen,
    OptionDefinition,
    Range,
)


def record(context: CommandContext) -> CommandContext:
    return context


class DockerCommand(CommandNode):
    description: str = "A self-sufficient runtime for containers"
    options: list[OptionDefinition] = [
        OptionDefinition("--debug", "-D", "Enable debug mode"),
        OptionDefinition(
            "--config", None, "Location of client config files", arg_kinds=("string",)
        ),
    ]


class ImageCommand(CommandNode):
    description: str = "Manage images"


class PullCommand(CommandNode):
    description: str = "Download an image from a registry"
    args_help: str = "NAME"
    options: list[OptionDefinition] = [
        OptionDefinition("--tag", "-t", "Image tag", arg_kinds=("string",)),
        OptionDefinition("--quiet", "-q", "Suppress verbose output"),
    ]

    async def execute(self, context: CommandContext) -> Any:
        return context


class PushCommand(CommandNode):
    description: str = "Upload an image to a registry"
    args_help: str = "NAME"

    async def execute(self, context: CommandContext) -> Any:
        return context


class LsCommand(CommandNode):
    description: str = "List images"
    print_help_with_no_args: bool = False
    options: list[OptionDefinition] = [
        OptionDefinition("--all", "-a", "Show all images"),
        OptionDefinition("--filter", "-f", "Filter output", arg_kinds=("string",)),
        OptionDefinition("--limit", None, "Maximum rows", arg_kinds=("integer",)),
    ]
    requirements: list[Any] = [
        Exclusive("--all", "--filter"),
        IfPresentThen("--limit", Range("--limit", 1, 100)),
    ]
    action: Any = record


def build_docker_registry(io: BufferIoService) -> CommandRegistry:
    registry = CommandRegistry()
    docker = registry.register(lambda: DockerCommand(io_service=io), name="docker")
    image = registry.register(lambda: ImageCommand(io_service=io), parent=docker, name="image")
    registry.register(lambda: PullCommand(io_service=io), parent=image, name="pull")
    registry.register(lambda: PushCommand(io_service=io), parent=image, name="push")
    registry.register(lambda: LsCommand(io_service=io), parent=image, name="ls")
    container = registry.register(
        lambda: CommandNode(description="Manage containers", io_service=io),
        parent=docker,
        name="container",
    )
    registry.register(
        lambda: CommandNode(
            description="Stop one or more running containers",
            args_help="CONTAINER...",
            options=[
                OptionDefinition("--time", "-t", "Seconds to wait", arg_kinds=("integer",))
            ],
            options_required=True,
            requirements=[Range("time", 0, 60)],
            action=record,
            io_service=io,
        ),
        parent=container,
        name="stop",
    )
    return registry


@pytest.fixture
def io() -> BufferIoService:
    return BufferIoService()


@pytest.fixture
def registry(io) -> CommandRegistry:
    return build_docker_registry(io)


@pytest.fixture
def docker(registry) -> CommandNode:
    return registry.resolve(registry.root)


@pytest.fixture
def restore_root_logger():
    """Undo logging changes made by `setup_logging` and `--verbose`."""
    root = logging.getLogger()
    cmdtree_logger = logging.getLogger("cmdtree")
    handler_levels = {handler: handler.level for handler in root.handlers}
    root_level = root.level
    cmdtree_level = cmdtree_logger.level
    yield root
    for handler in root.handlers:
        if handler not in handler_levels:
            handler.close()
    root.handlers[:] = list(handler_levels)
    for handler, level in handler_levels.items():
        handler.setLevel(level)
    root.setLevel(root_level)
    cmdtree_logger.setLevel(cmdtree_level)
