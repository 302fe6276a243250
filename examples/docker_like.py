"""docker_like.py

A small docker-style tool built from CommandNode subclasses and a registry.

    python examples/docker_like.py image ls -a
    python examples/docker_like.py image pull --tag 3.12 python
    python examples/docker_like.py image ls --all --quiet
    python examples/docker_like.py --verbose container stop --time 99 web
"""
import asyncio
from typing import Any

from cmdtree import (
    CommandContext,
    CommandLineApp,
    CommandNode,
    CommandRegistry,
    Exclusive,
    IfPresentThen,
    OptionDefinition,
    Range,
    RequireOneOf,
)
from cmdtree.utils import setup_logging

setup_logging()

IMAGES = ["python:3.12", "python:3.13", "redis:7", "postgres:16"]


class DockerCommand(CommandNode):
    description: str = "A self-sufficient runtime for containers"
    options: list[OptionDefinition] = [
        OptionDefinition("--debug", "-D", "Enable debug mode"),
    ]


class ImageCommand(CommandNode):
    description: str = "Manage images"


class LsCommand(CommandNode):
    description: str = "List images"
    print_help_with_no_args: bool = False
    options: list[OptionDefinition] = [
        OptionDefinition("--all", "-a", "Show all images"),
        OptionDefinition("--quiet", "-q", "Only show image names"),
        OptionDefinition("--filter", "-f", "Filter output", arg_kinds=("string",)),
    ]
    requirements: list[Any] = [Exclusive("--all", "--filter")]

    async def execute(self, context: CommandContext) -> Any:
        pattern = context.value("--filter", default="")
        images = [image for image in IMAGES if pattern in image]
        for image in images:
            self.io_service.write_line(image.split(":")[0] if context.value("-q") else image)
        return images


class PullCommand(CommandNode):
    description: str = "Download an image from a registry"
    args_help: str = "NAME"
    options_required: bool = True
    options: list[OptionDefinition] = [
        OptionDefinition("--tag", "-t", "Image tag", arg_kinds=("string",)),
        OptionDefinition("--platform", None, "Target platform", arg_kinds=("string",)),
    ]
    requirements: list[Any] = [RequireOneOf("--tag")]

    async def execute(self, context: CommandContext) -> Any:
        if not context.args:
            self.print_help()
            return None
        image = f"{context.args[0]}:{context.value('--tag')}"
        if context.value("--debug"):
            self.io_service.write_line(f"debug: platform={context.value('--platform')}")
        await asyncio.sleep(0.1)
        self.io_service.write_line(f"Pulled {image}")
        return image


async def stop_containers(context: CommandContext) -> list[str]:
    timeout = context.value("--time", default=10)
    for name in context.args:
        context.command.io_service.write_line(f"Stopping {name} (timeout {timeout}s)")
    return context.args


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    docker = registry.register(DockerCommand)
    image = registry.register(ImageCommand, parent=docker)
    registry.register(LsCommand, parent=image)
    registry.register(PullCommand, parent=image)

    container = registry.register(
        lambda: CommandNode(description="Manage containers"),
        parent=docker,
        name="container",
    )
    registry.register(
        lambda: CommandNode(
            description="Stop one or more running containers",
            args_help="CONTAINER...",
            action=stop_containers,
            options=[
                OptionDefinition("--time", "-t", "Seconds to wait", arg_kinds=("integer",)),
            ],
            requirements=[IfPresentThen("--time", Range("--time", 0, 60))],
        ),
        parent=container,
        name="stop",
    )
    return registry


if __name__ == "__main__":
    CommandLineApp(build_registry()).main()
